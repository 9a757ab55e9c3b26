"""
Pydantic schemas for the sign-in and sign-up forms.
"""

from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

PASSWORD_MIN_LENGTH = 6

USERNAME_REQUIRED_MESSAGE = "Please provide a username."
EMAIL_MESSAGE = "Invalid email"
PASSWORD_MESSAGE = f"Password must be at least {PASSWORD_MIN_LENGTH} characters."


def _check_email(value: Any) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("invalid_email", EMAIL_MESSAGE)
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_email", EMAIL_MESSAGE)
    return value.strip()


def _check_password(value: Any) -> str:
    # Passwords are never stripped
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError("password_too_short", PASSWORD_MESSAGE)
    return value


class SignInForm(BaseModel):
    """Credentials accepted by the credentials provider."""
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def email_must_be_valid(cls, value: Any) -> str:
        return _check_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def password_must_be_long_enough(cls, value: Any) -> str:
        return _check_password(value)


class SignUpForm(BaseModel):
    """Fields submitted by the sign-up form."""
    username: str
    email: str
    password: str
    confirm_password: str

    @field_validator("username", mode="before")
    @classmethod
    def username_must_be_present(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("username_required", USERNAME_REQUIRED_MESSAGE)
        return value.strip()

    @field_validator("email", mode="before")
    @classmethod
    def email_must_be_valid(cls, value: Any) -> str:
        return _check_email(value)

    @field_validator("password", "confirm_password", mode="before")
    @classmethod
    def password_must_be_long_enough(cls, value: Any) -> str:
        return _check_password(value)

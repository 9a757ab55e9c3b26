"""
Sign-in and sign-up form actions.
"""

import logging
import uuid
from typing import Mapping, Optional

from postgrest.exceptions import APIError
from starlette.concurrency import run_in_threadpool

from invoicing.actions.context import ActionContext
from invoicing.auth.bridge import AuthErrorType, SignInResult
from invoicing.auth.passwords import hash_password
from invoicing.schemas.actions import ActionResult, FieldErrorsResult, MessageResult, OkResult
from invoicing.schemas.auth import SignUpForm
from invoicing.services import user_service
from invoicing.utils.validation import validate_form

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
DEFAULT_REDIRECT = "/dashboard"

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_MESSAGE = "Something went wrong."
PASSWORD_MISMATCH_MESSAGE = "Passwords don't match"
ACCOUNT_FAILED_MESSAGE = "Failed to create account"
SIGN_UP_FIELDS_MESSAGE = "Missing Fields. Failed to Create Account."


def safe_redirect_target(value: Optional[str]) -> str:
    """Only same-site absolute paths are followed after sign-in."""
    if value and value.startswith("/") and not value.startswith("//"):
        return value
    return DEFAULT_REDIRECT


def _sign_in_outcome(result: SignInResult, form: Mapping[str, Optional[str]]) -> ActionResult:
    if result.ok and result.session is not None:
        return OkResult(
            redirect_to=safe_redirect_target(form.get("redirectTo")),
            session_token=result.session.token,
        )
    if result.error == AuthErrorType.CREDENTIALS_SIGNIN.value:
        return MessageResult(text=INVALID_CREDENTIALS_MESSAGE)
    return MessageResult(text=GENERIC_AUTH_MESSAGE)


async def authenticate(
    ctx: ActionContext,
    prev_state: Optional[ActionResult],
    form: Mapping[str, Optional[str]],
) -> ActionResult:
    """
    Sign in with the credentials provider.

    Returns:
        OkResult carrying the session token, or MessageResult with
        "Invalid credentials." / "Something went wrong."

    Raises:
        Exception: Non-authentication errors from the bridge propagate
    """
    result = await ctx.auth.sign_in(CREDENTIALS_PROVIDER, form)
    return _sign_in_outcome(result, form)


async def create_account(
    ctx: ActionContext,
    prev_state: Optional[ActionResult],
    form: Mapping[str, Optional[str]],
) -> ActionResult:
    """
    Register a user and sign them in.

    Flow:
    1. Validate username, email, password, confirm_password
    2. Reject mismatched passwords before touching storage
    3. Hash the password and insert the user under a fresh UUID4
    4. If exactly one row was inserted, sign in with the same form

    An id collision inserts nothing; the account is then not created and no
    message is shown (OkResult without a redirect). A store rejection such as
    a duplicate email returns "Failed to create account".
    """
    validated = validate_form(SignUpForm, form)

    if not validated.success:
        logger.info(f"Sign-up rejected: invalid fields {sorted(validated.errors)}")
        return FieldErrorsResult(fields=validated.errors, message=SIGN_UP_FIELDS_MESSAGE)

    sign_up = validated.data
    assert sign_up is not None

    if sign_up.password != sign_up.confirm_password:
        return MessageResult(text=PASSWORD_MISMATCH_MESSAGE)

    password_hash = await run_in_threadpool(hash_password, sign_up.password)
    user_id = str(uuid.uuid4())
    created = False

    try:
        created = await user_service.insert_user(
            supabase_client=ctx.supabase_client,
            user_id=user_id,
            name=sign_up.username,
            email=sign_up.email,
            password_hash=password_hash,
        )
    except APIError as e:
        logger.error(f"Store rejected new user {user_id}: {e.code} {e.message}")
        return MessageResult(text=ACCOUNT_FAILED_MESSAGE)
    except Exception as e:
        logger.error(f"Failed to create user {user_id}: {e}", exc_info=True)

    if not created:
        return OkResult()

    logger.info(f"Account created: user_id={user_id}")

    result = await ctx.auth.sign_in(CREDENTIALS_PROVIDER, form)
    return _sign_in_outcome(result, form)

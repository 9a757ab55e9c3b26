"""
Authentication for the invoice dashboard backend.

- bridge: AuthBridge.sign_in() / verify_session(), CredentialsProvider
- passwords: bcrypt hashing
- dependencies: FastAPI dependencies guarding dashboard routes
"""

from .bridge import (
    AuthBridge,
    AuthError,
    AuthErrorType,
    CredentialsProvider,
    Session,
    SignInResult,
)

__all__ = [
    "AuthBridge",
    "AuthError",
    "AuthErrorType",
    "CredentialsProvider",
    "Session",
    "SignInResult",
]

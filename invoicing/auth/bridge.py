"""
Credential verification and session establishment.

The AuthBridge is the only entry point the actions use for signing users in:

    result = await bridge.sign_in("credentials", form)
    if result.ok:
        token = result.session.token
    else:
        kind = result.error   # e.g. "CredentialsSignin"

Providers signal authentication failures by raising AuthError with a kind;
the bridge turns those into a failed SignInResult. Any other exception (a
storage outage, a programming error) propagates to the caller unchanged.

Sessions are HS256 JWTs signed with AUTH_SECRET (PyJWT).
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

import jwt
from starlette.concurrency import run_in_threadpool
from supabase import Client

from invoicing.auth.passwords import verify_password
from invoicing.schemas.auth import SignInForm
from invoicing.services.user_service import get_user_by_email
from invoicing.utils.logging import get_logger
from invoicing.utils.validation import validate_form

logger = get_logger(__name__)

SESSION_ALGORITHM = "HS256"


class AuthErrorType(str, Enum):
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CONFIGURATION = "Configuration"
    ACCESS_DENIED = "AccessDenied"


class AuthError(Exception):
    """Authentication failure carrying a discriminated kind in `.type`."""

    def __init__(self, error_type: str, message: Optional[str] = None):
        super().__init__(message or error_type)
        self.type = error_type.value if isinstance(error_type, AuthErrorType) else error_type


@dataclass
class Session:
    user_id: str
    email: Optional[str]
    name: Optional[str]
    expires_at: int
    token: str


@dataclass
class SignInResult:
    ok: bool
    session: Optional[Session] = None
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, session: Session) -> "SignInResult":
        return cls(ok=True, session=session)

    @classmethod
    def failed(cls, error: str) -> "SignInResult":
        return cls(ok=False, error=error)


class AuthProvider(Protocol):
    name: str

    async def authorize(self, credentials: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        ...


class CredentialsProvider:
    """Email + password sign-in against the users table."""

    name = "credentials"

    def __init__(self, supabase_client: Client):
        self._client = supabase_client

    async def authorize(self, credentials: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        parsed = validate_form(SignInForm, credentials)
        if not parsed.success:
            raise AuthError(AuthErrorType.CREDENTIALS_SIGNIN, "Malformed credentials")

        assert parsed.data is not None
        user = await get_user_by_email(self._client, parsed.data.email)

        if user is None or not await run_in_threadpool(
            verify_password, parsed.data.password, user.get("password") or ""
        ):
            raise AuthError(AuthErrorType.CREDENTIALS_SIGNIN, "Email or password did not match")

        return user


class AuthBridge:
    def __init__(
        self,
        providers: Iterable[AuthProvider],
        secret: str,
        max_age_seconds: int,
    ):
        self._providers = {provider.name: provider for provider in providers}
        self._secret = secret
        self._max_age_seconds = max_age_seconds

    async def sign_in(
        self,
        provider_name: str,
        credentials: Mapping[str, Optional[str]],
    ) -> SignInResult:
        """
        Verify credentials with the named provider and issue a session.

        Returns:
            SignInResult: ok with a Session, or failed with the AuthError kind

        Raises:
            Exception: Anything the provider raises that is not an AuthError
        """
        provider = self._providers.get(provider_name)
        if provider is None:
            logger.error(f"Sign-in requested for unknown provider '{provider_name}'")
            return SignInResult.failed(AuthErrorType.CONFIGURATION.value)

        try:
            user = await provider.authorize(credentials)
            session = self.issue_session(user)
        except AuthError as e:
            logger.warning(f"Sign-in failed via {provider_name}: {e.type}")
            return SignInResult.failed(e.type)

        logger.info(f"Session issued for user_id={session.user_id}")
        return SignInResult.succeeded(session)

    def issue_session(self, user: Mapping[str, Any]) -> Session:
        """Sign a session token for a user row."""
        if not self._secret:
            raise AuthError(AuthErrorType.CONFIGURATION, "AUTH_SECRET is not configured")

        user_id = user.get("id")
        if not user_id:
            raise AuthError(AuthErrorType.CONFIGURATION, "User row has no id")

        issued_at = int(time.time())
        expires_at = issued_at + self._max_age_seconds
        payload = {
            "sub": str(user_id),
            "email": user.get("email"),
            "name": user.get("name"),
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=SESSION_ALGORITHM)

        return Session(
            user_id=str(user_id),
            email=user.get("email"),
            name=user.get("name"),
            expires_at=expires_at,
            token=token,
        )

    def verify_session(self, token: str) -> Session:
        """
        Decode and verify a session token.

        Raises:
            jwt.ExpiredSignatureError: If the session has expired
            jwt.InvalidTokenError: If the token is malformed or tampered with
        """
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        return Session(
            user_id=str(payload["sub"]),
            email=payload.get("email"),
            name=payload.get("name"),
            expires_at=int(payload["exp"]),
            token=token,
        )

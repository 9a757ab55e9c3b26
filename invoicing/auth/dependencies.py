"""
FastAPI dependency functions for authentication.

Dashboard routes depend on get_session_user(), which accepts the session
either from the session cookie (browser form posts) or from an
`Authorization: Bearer <token>` header (API clients).
"""

import logging
from typing import Annotated, Optional

from fastapi import Header, HTTPException, Request, status
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from invoicing.auth.bridge import AuthBridge, Session
from invoicing.config import settings

logger = logging.getLogger(__name__)


def get_auth_bridge(request: Request) -> AuthBridge:
    """
    Return the AuthBridge built by the app lifespan.

    Raises:
        HTTPException: 503 if the lifespan has not run
    """
    bridge: Optional[AuthBridge] = getattr(request.app.state, "auth_bridge", None)

    if bridge is None:
        logger.error("AuthBridge requested before the app finished starting")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "auth_unavailable", "details": "Authentication is not configured"}
        )

    return bridge


def _extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid Authorization header format")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "unauthorized", "details": "Invalid Authorization header format"}
            )
        return parts[1]

    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_session_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> Session:
    """
    Verify the session token and return the signed-in user's session.

    Returns:
        Session: user_id, email and name from the verified token

    Raises:
        HTTPException: 401 if the token is missing, invalid, or expired

    Usage:
        @router.get("/dashboard/invoices")
        async def list_route(session: Session = Depends(get_session_user)):
            pass
    """
    token = _extract_token(request, authorization)

    if not token:
        logger.warning("Missing session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthorized", "details": "Sign in to continue"}
        )

    bridge = get_auth_bridge(request)

    try:
        session = bridge.verify_session(token)

    except ExpiredSignatureError:
        logger.warning("Session has expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "token_expired", "details": "Session has expired"}
        )

    except InvalidTokenError as e:
        logger.warning(f"Invalid session token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "invalid_token", "details": "Invalid session token"}
        )

    logger.debug(f"Session verified for user_id={session.user_id}")
    return session

"""
Translation of ActionResults into HTTP responses.
"""

from typing import Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from invoicing.config import settings
from invoicing.schemas.actions import ActionResult, FieldErrorsResult, MessageResult, OkResult


async def read_form(request: Request) -> Dict[str, str]:
    """Flatten a submitted form into field name -> string value (files are ignored)."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
        path="/",
    )


def action_response(
    result: ActionResult,
    message_status: int = status.HTTP_400_BAD_REQUEST,
    ok_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Map an action result onto a response.

    - ok with redirect_to -> 303 See Other (session cookie set if present)
    - ok without redirect -> JSON with ok_status
    - fieldErrors -> 400 JSON
    - message -> JSON with message_status
    """
    if isinstance(result, OkResult):
        if result.redirect_to:
            response: Response = RedirectResponse(result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
            if result.session_token:
                set_session_cookie(response, result.session_token)
            return response
        return JSONResponse(status_code=ok_status, content=result.model_dump())

    if isinstance(result, FieldErrorsResult):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump())

    assert isinstance(result, MessageResult)
    return JSONResponse(status_code=message_status, content=result.model_dump())


def callback_url_from(request: Request) -> Optional[str]:
    return request.query_params.get("callbackUrl")

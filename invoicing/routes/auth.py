"""
Auth endpoints.

- POST /login   - Sign in with email and password (form post)
- GET  /signup  - Render the sign-up form
- POST /signup  - Create an account and sign in
- POST /logout  - Clear the session cookie

Successful sign-in sets an httponly session cookie and redirects with
303 See Other to the form's `redirectTo` path.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from invoicing import actions
from invoicing.actions.context import ActionContext, get_action_context
from invoicing.config import settings
from invoicing.routes.responses import action_response, callback_url_from, read_form, set_session_cookie
from invoicing.schemas.actions import OkResult
from invoicing.ui.sign_up_form import render_sign_up_form

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    summary="Sign in",
    description="""
    Form post with email, password and an optional redirectTo path.

    Responses:
    - 303 to redirectTo (default /dashboard) with the session cookie set
    - 401 {"kind": "message", "text": "Invalid credentials."} on a bad email/password
    - 401 {"kind": "message", "text": "Something went wrong."} on any other auth failure
    """
)
async def login(
    request: Request,
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> Response:
    form = await read_form(request)
    result = await actions.authenticate(ctx, None, form)
    return action_response(result, message_status=status.HTTP_401_UNAUTHORIZED)


@router.get(
    "/signup",
    response_class=HTMLResponse,
    summary="Sign-up form",
)
async def sign_up_form(request: Request) -> HTMLResponse:
    return HTMLResponse(render_sign_up_form(callback_url=callback_url_from(request)))


@router.post(
    "/signup",
    response_class=HTMLResponse,
    summary="Create an account",
    description="""
    Form post with username, email, password, confirm_password and redirectTo.

    On success the new user is signed in and redirected. Otherwise the form is
    rendered again with field errors or a form-level message.
    """
)
async def sign_up(
    request: Request,
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> Response:
    form = await read_form(request)
    result = await actions.create_account(ctx, None, form)

    if isinstance(result, OkResult) and result.redirect_to:
        response = RedirectResponse(result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
        if result.session_token:
            set_session_cookie(response, result.session_token)
        return response

    status_code = status.HTTP_200_OK if isinstance(result, OkResult) else status.HTTP_400_BAD_REQUEST
    html = render_sign_up_form(state=result, callback_url=form.get("redirectTo"))
    return HTMLResponse(html, status_code=status_code)


@router.post(
    "/logout",
    summary="Sign out",
)
async def logout() -> Response:
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response

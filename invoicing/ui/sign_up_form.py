"""
Sign-up form rendering.

The same action can fail in two shapes: a per-field error mapping
(validation) or a single message (password mismatch, store rejection, auth
failure). The template branches on the result's `kind`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from invoicing.schemas.actions import ActionResult, FieldErrorsResult, MessageResult

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

DEFAULT_CALLBACK_URL = "/dashboard"

SIGN_UP_FIELDS = [
    {"name": "username", "label": "Username", "type": "text", "placeholder": "Provide a username", "icon": "user"},
    {"name": "email", "label": "Email", "type": "email", "placeholder": "Enter your email address", "icon": "at"},
    {"name": "password", "label": "Password", "type": "password", "placeholder": "Enter password", "icon": "key"},
    {"name": "confirm_password", "label": "Confirm password", "type": "password", "placeholder": "Enter password", "icon": "key"},
]


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def field_errors(state: Optional[ActionResult]) -> Dict[str, List[str]]:
    if isinstance(state, FieldErrorsResult):
        return state.fields
    return {}


def form_message(state: Optional[ActionResult]) -> Optional[str]:
    if isinstance(state, MessageResult):
        return state.text
    return None


def render_sign_up_form(
    *,
    state: Optional[ActionResult] = None,
    callback_url: Optional[str] = None,
    action_url: str = "/signup",
    pending: bool = False,
) -> str:
    """Render the sign-up form as a self-contained HTML page."""
    template = _get_env().get_template("sign_up_form.html")
    return template.render(
        fields=SIGN_UP_FIELDS,
        errors=field_errors(state),
        message=form_message(state),
        callback_url=callback_url or DEFAULT_CALLBACK_URL,
        action_url=action_url,
        pending=pending,
    )

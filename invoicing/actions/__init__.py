"""
Form actions.

An action is invoked by one form submission with the previous result and the
submitted values, and returns an ActionResult:

    result = await create_invoice(ctx, prev_state, form)
"""

from .auth import authenticate, create_account
from .context import ActionContext, get_action_context
from .invoices import create_invoice, delete_invoice, update_invoice

__all__ = [
    "ActionContext",
    "get_action_context",
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "authenticate",
    "create_account",
]

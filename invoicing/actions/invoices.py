"""
Invoice form actions: create, update, delete.

Each action validates the submitted form, issues a single storage statement,
invalidates the invoice list view and tells the browser where to go next.

Storage failures on create and update are logged and swallowed: the action
still invalidates the list and redirects to it, so a failed write looks like
a successful one to the user. Delete only invalidates when the statement
succeeded.
"""

from datetime import date
from typing import Mapping, Optional

from invoicing.actions.context import ActionContext
from invoicing.schemas.actions import ActionResult, FieldErrorsResult, OkResult
from invoicing.schemas.invoices import InvoiceForm
from invoicing.services import invoice_service
from invoicing.services.view_cache import INVOICES_PATH
from invoicing.utils.logging import get_logger
from invoicing.utils.validation import validate_form

logger = get_logger(__name__)

CREATE_FAILED_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Missing Fields. Failed to Update Invoice."


def _today() -> str:
    return date.today().isoformat()


async def create_invoice(
    ctx: ActionContext,
    prev_state: Optional[ActionResult],
    form: Mapping[str, Optional[str]],
) -> ActionResult:
    """
    Create an invoice dated today.

    Returns:
        FieldErrorsResult if the form is invalid (nothing is written),
        otherwise OkResult redirecting to the invoice list
    """
    validated = validate_form(InvoiceForm, form)

    if not validated.success:
        logger.info(f"Create invoice rejected: invalid fields {sorted(validated.errors)}")
        return FieldErrorsResult(fields=validated.errors, message=CREATE_FAILED_MESSAGE)

    invoice = validated.data
    assert invoice is not None

    try:
        await invoice_service.create_invoice(
            supabase_client=ctx.supabase_client,
            customer_id=invoice.customer_id,
            amount_cents=invoice.amount_in_cents,
            status=invoice.status.value,
            date=_today(),
        )
    except Exception as e:
        logger.error(f"Failed to create invoice: {e}", exc_info=True)

    ctx.cache.invalidate(INVOICES_PATH)
    return OkResult(redirect_to=INVOICES_PATH)


async def update_invoice(
    ctx: ActionContext,
    invoice_id: str,
    prev_state: Optional[ActionResult],
    form: Mapping[str, Optional[str]],
) -> ActionResult:
    """
    Update customer, amount and status of an invoice. The issue date is kept.
    """
    validated = validate_form(InvoiceForm, form)

    if not validated.success:
        logger.info(f"Update invoice {invoice_id} rejected: invalid fields {sorted(validated.errors)}")
        return FieldErrorsResult(fields=validated.errors, message=UPDATE_FAILED_MESSAGE)

    invoice = validated.data
    assert invoice is not None

    try:
        await invoice_service.update_invoice(
            supabase_client=ctx.supabase_client,
            invoice_id=invoice_id,
            customer_id=invoice.customer_id,
            amount_cents=invoice.amount_in_cents,
            status=invoice.status.value,
        )
    except Exception as e:
        logger.error(f"Failed to update invoice {invoice_id}: {e}", exc_info=True)

    ctx.cache.invalidate(INVOICES_PATH)
    return OkResult(redirect_to=INVOICES_PATH)


async def delete_invoice(ctx: ActionContext, invoice_id: str) -> ActionResult:
    """Delete an invoice. The list view is invalidated only if the delete ran."""
    try:
        await invoice_service.delete_invoice(
            supabase_client=ctx.supabase_client,
            invoice_id=invoice_id,
        )
        ctx.cache.invalidate(INVOICES_PATH)
    except Exception as e:
        logger.error(f"Failed to delete invoice {invoice_id}: {e}", exc_info=True)

    return OkResult()

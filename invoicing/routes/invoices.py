"""
Invoice dashboard endpoints.

Form posts from the dashboard are handed to the invoice actions:
- POST /dashboard/invoices/create        -> create_invoice
- POST /dashboard/invoices/{id}/edit     -> update_invoice
- POST /dashboard/invoices/{id}/delete   -> delete_invoice
- GET  /dashboard/invoices               -> invoice list (served through the view cache)

All endpoints require a signed-in session.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from invoicing import actions
from invoicing.actions.context import ActionContext, get_action_context
from invoicing.auth.bridge import Session
from invoicing.auth.dependencies import get_session_user
from invoicing.routes.responses import action_response, read_form
from invoicing.schemas.invoices import InvoiceListResponse, InvoiceResponse
from invoicing.services import list_invoices
from invoicing.services.view_cache import INVOICES_PATH

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])


@router.get(
    "",
    response_model=InvoiceListResponse,
    status_code=status.HTTP_200_OK,
    summary="List invoices",
    description="""
    Retrieve invoices ordered by issue date, newest first.

    The list is cached per path and recomputed after any create, update or
    delete action invalidates it.
    """
)
async def list_invoices_view(
    session: Annotated[Session, Depends(get_session_user)],
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> InvoiceListResponse:
    cached = ctx.cache.get(INVOICES_PATH)
    if cached is not None:
        logger.debug("Serving invoice list from view cache")
        return cached.model_copy(update={"cached": True})

    try:
        rows = await list_invoices(supabase_client=ctx.supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoices from database"
            }
        )

    invoices = [
        InvoiceResponse(
            id=str(row.get("id")),
            customer_id=str(row.get("customer_id")),
            amount=int(row.get("amount") or 0),
            status=row.get("status"),
            date=str(row.get("date")),
        )
        for row in rows
    ]
    view = InvoiceListResponse(invoices=invoices, count=len(invoices))
    ctx.cache.set(INVOICES_PATH, view)

    logger.info(f"Returning {len(invoices)} invoices to user {session.user_id}")
    return view


@router.post(
    "/create",
    summary="Create an invoice",
    description="Form post with customerId, amount (dollars) and status. Redirects to the list on success.",
)
async def create_invoice_route(
    request: Request,
    session: Annotated[Session, Depends(get_session_user)],
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> Response:
    form = await read_form(request)
    logger.info(f"Create invoice submitted by user {session.user_id}")
    result = await actions.create_invoice(ctx, None, form)
    return action_response(result)


@router.post(
    "/{invoice_id}/edit",
    summary="Update an invoice",
    description="Form post with customerId, amount (dollars) and status. Redirects to the list on success.",
)
async def update_invoice_route(
    invoice_id: str,
    request: Request,
    session: Annotated[Session, Depends(get_session_user)],
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> Response:
    form = await read_form(request)
    logger.info(f"Update of invoice {invoice_id} submitted by user {session.user_id}")
    result = await actions.update_invoice(ctx, invoice_id, None, form)
    return action_response(result)


@router.post(
    "/{invoice_id}/delete",
    summary="Delete an invoice",
)
async def delete_invoice_route(
    invoice_id: str,
    session: Annotated[Session, Depends(get_session_user)],
    ctx: Annotated[ActionContext, Depends(get_action_context)],
) -> Response:
    logger.info(f"Delete of invoice {invoice_id} requested by user {session.user_id}")
    result = await actions.delete_invoice(ctx, invoice_id)
    return action_response(result)

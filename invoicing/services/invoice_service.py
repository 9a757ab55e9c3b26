"""
Invoice persistence service.

CRITICAL RULES:
1. invoice.amount is ALWAYS integer cents (callers convert before calling)
2. invoice.date is an ISO date string (YYYY-MM-DD)
3. Values are passed through the table API only, never interpolated into SQL
4. Failures are raised to the caller; the action layer decides what to do
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"


async def create_invoice(
    supabase_client: Client,
    customer_id: str,
    amount_cents: int,
    status: str,
    date: str,
) -> Optional[Dict[str, Any]]:
    """
    Insert one invoice row.

    Args:
        supabase_client: Client opened by the app lifespan
        customer_id: UUID of the customer being billed
        amount_cents: Amount in integer cents (non-negative)
        status: "pending" or "paid"
        date: Issue date as YYYY-MM-DD

    Returns:
        The inserted row if the store returned it, None otherwise

    Raises:
        Exception: If the database operation fails
    """
    invoice_data = {
        "customer_id": customer_id,
        "amount": amount_cents,
        "status": status,
        "date": date,
    }

    logger.info(f"Creating invoice: customer_id={customer_id}, status={status}, date={date}")

    result = supabase_client.table(INVOICES_TABLE).insert(invoice_data).execute()

    if not result.data:
        return None

    created_invoice = cast(Dict[str, Any], result.data[0])
    logger.info(f"Invoice created successfully: id={created_invoice.get('id')}")

    return created_invoice


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    customer_id: str,
    amount_cents: int,
    status: str,
) -> int:
    """
    Update customer, amount and status of one invoice. The issue date is kept.

    Returns:
        Number of rows the store reported as updated

    Raises:
        Exception: If the database operation fails
    """
    logger.info(f"Updating invoice {invoice_id}: customer_id={customer_id}, status={status}")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .update({
            "customer_id": customer_id,
            "amount": amount_cents,
            "status": status,
        })
        .eq("id", invoice_id)
        .execute()
    )

    updated = len(result.data or [])
    if updated == 0:
        logger.warning(f"Update matched no invoice with id={invoice_id}")

    return updated


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
) -> int:
    """
    Hard-delete one invoice by id.

    Returns:
        Number of rows the store reported as deleted

    Raises:
        Exception: If the database operation fails
    """
    logger.info(f"Deleting invoice {invoice_id}")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .delete()
        .eq("id", invoice_id)
        .execute()
    )

    return len(result.data or [])


async def list_invoices(
    supabase_client: Client,
    limit: int = 50,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    Fetch invoices ordered by issue date, newest first.

    Args:
        supabase_client: Client opened by the app lifespan
        limit: Maximum number of invoices to return
        offset: Number of invoices to skip (for pagination)
    """
    logger.debug(f"Fetching invoices (limit={limit}, offset={offset})")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .select("*")
        .order("date", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )

    invoices = cast(List[Dict[str, Any]], result.data)

    logger.info(f"Fetched {len(invoices)} invoices")

    return invoices

"""
Service layer for the invoice dashboard backend.

Services issue the storage statements for invoices and users and hold the
view cache. They raise on storage failures; the action layer decides whether
a failure is surfaced or swallowed.
"""

from .invoice_service import (
    create_invoice,
    delete_invoice,
    list_invoices,
    update_invoice,
)
from .user_service import get_user_by_email, insert_user
from .view_cache import INVOICES_PATH, ViewCache

__all__ = [
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "list_invoices",
    "insert_user",
    "get_user_by_email",
    "ViewCache",
    "INVOICES_PATH",
]

"""
Pydantic schemas for invoice forms and invoice list responses.

Form schemas receive raw string values from a submitted form. Every field has
a `mode="before"` validator so that missing or malformed input produces one
human-readable message instead of pydantic's default wording.
"""

from decimal import ROUND_HALF_UP, Decimal, DecimalException
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."


def to_cents(amount: Decimal) -> int:
    """Dollars to integer cents, rounding half-up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class InvoiceForm(BaseModel):
    """
    Fields submitted by the create and edit invoice forms.

    Form field names are camelCase (`customerId`); the model exposes them in
    snake_case.
    """
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(..., alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def customer_must_be_selected(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED_MESSAGE)
        return value.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def amount_must_be_positive(cls, value: Any) -> Decimal:
        if value is None or isinstance(value, bool):
            raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
        text = str(value).strip()
        # Decimal() accepts digit separators like "1_000"
        if "_" in text:
            raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
        try:
            amount = Decimal(text)
            cents = to_cents(amount) if amount.is_finite() else 0
        except (DecimalException, ValueError):
            raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
        # "0.001" is positive but rounds to a $0 invoice
        if cents <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def status_must_be_known(cls, value: Any) -> str:
        if value not in {s.value for s in InvoiceStatus}:
            raise PydanticCustomError("status_invalid", STATUS_MESSAGE)
        return value

    @property
    def amount_in_cents(self) -> int:
        """Amount converted to integer cents, rounding half-up."""
        return to_cents(self.amount)


class InvoiceResponse(BaseModel):
    """A single row of the invoices table."""
    id: str = Field(..., description="Invoice UUID")
    customer_id: str = Field(..., description="Customer UUID")
    amount: int = Field(..., ge=0, description="Amount in cents")
    status: InvoiceStatus = Field(..., description="pending or paid")
    date: str = Field(..., description="Issue date (YYYY-MM-DD)", examples=["2025-11-02"])


class InvoiceListResponse(BaseModel):
    """Response for GET /dashboard/invoices."""
    invoices: List[InvoiceResponse] = Field(..., description="Invoices, newest first")
    count: int = Field(..., description="Number of invoices returned")
    cached: bool = Field(False, description="Whether the list was served from the view cache")
    message: Optional[str] = None

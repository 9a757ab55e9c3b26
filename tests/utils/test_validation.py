"""
Tests for form validation.

Covers the invoice form (customerId, amount, status) and the sign-up form
(username, email, password, confirm_password).
"""

from decimal import Decimal

import pytest

from invoicing.schemas.auth import SignInForm, SignUpForm
from invoicing.schemas.invoices import InvoiceForm, InvoiceStatus
from invoicing.utils.validation import form_field_names, validate_form


VALID_INVOICE = {"customerId": "cust-1", "amount": "10.50", "status": "pending"}

VALID_SIGN_UP = {
    "username": "ada",
    "email": "ada@example.com",
    "password": "secret1",
    "confirm_password": "secret1",
}


class TestInvoiceForm:
    """Validation of the create/edit invoice form."""

    def test_valid_form_returns_typed_data(self):
        result = validate_form(InvoiceForm, VALID_INVOICE)

        assert result.success
        assert result.errors == {}
        assert result.data.customer_id == "cust-1"
        assert result.data.amount == Decimal("10.50")
        assert result.data.status is InvoiceStatus.PENDING

    @pytest.mark.parametrize("amount", ["0", "-1", "-0.01", "0.00", "0.001", "0.0049"])
    def test_non_positive_amount_is_rejected(self, amount):
        result = validate_form(InvoiceForm, {**VALID_INVOICE, "amount": amount})

        assert not result.success
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    @pytest.mark.parametrize("amount", ["", "abc", "NaN", "Infinity", "1_000", "1_0.50", "1e999999"])
    def test_non_numeric_amount_is_rejected(self, amount):
        result = validate_form(InvoiceForm, {**VALID_INVOICE, "amount": amount})

        assert result.errors["amount"] == ["Please enter an amount greater than $0."]

    def test_unknown_status_is_rejected(self):
        result = validate_form(InvoiceForm, {**VALID_INVOICE, "status": "overdue"})

        assert result.errors == {"status": ["Please select an invoice status."]}

    def test_missing_fields_report_every_field(self):
        result = validate_form(InvoiceForm, {})

        assert not result.success
        assert result.errors == {
            "customerId": ["Please select a customer."],
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status."],
        }

    def test_blank_customer_is_rejected(self):
        result = validate_form(InvoiceForm, {**VALID_INVOICE, "customerId": "   "})

        assert result.errors == {"customerId": ["Please select a customer."]}

    @pytest.mark.parametrize(
        "amount,cents",
        [("10", 1000), ("10.5", 1050), ("0.01", 1), ("19.99", 1999), ("0.005", 1)],
    )
    def test_amount_in_cents(self, amount, cents):
        result = validate_form(InvoiceForm, {**VALID_INVOICE, "amount": amount})

        assert result.data.amount_in_cents == cents

    def test_form_field_names_use_aliases(self):
        assert form_field_names(InvoiceForm) == ["customerId", "amount", "status"]


class TestSignUpForm:
    """Validation of the sign-up form."""

    def test_valid_form(self):
        result = validate_form(SignUpForm, VALID_SIGN_UP)

        assert result.success
        assert result.data.username == "ada"
        assert result.data.email == "ada@example.com"

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "@example.com", ""])
    def test_invalid_email(self, email):
        result = validate_form(SignUpForm, {**VALID_SIGN_UP, "email": email})

        assert result.errors == {"email": ["Invalid email"]}

    def test_short_passwords_are_rejected_per_field(self):
        result = validate_form(
            SignUpForm,
            {**VALID_SIGN_UP, "password": "12345", "confirm_password": "1"},
        )

        assert result.errors == {
            "password": ["Password must be at least 6 characters."],
            "confirm_password": ["Password must be at least 6 characters."],
        }

    def test_missing_username(self):
        result = validate_form(SignUpForm, {**VALID_SIGN_UP, "username": None})

        assert result.errors == {"username": ["Please provide a username."]}

    def test_mismatched_passwords_still_validate(self):
        """Mismatch is checked by the action, not the schema."""
        result = validate_form(SignUpForm, {**VALID_SIGN_UP, "confirm_password": "different"})

        assert result.success

    def test_passwords_are_not_stripped(self):
        result = validate_form(
            SignUpForm,
            {**VALID_SIGN_UP, "password": " secret ", "confirm_password": " secret "},
        )

        assert result.data.password == " secret "


class TestSignInForm:
    def test_extra_form_fields_are_ignored(self):
        result = validate_form(
            SignInForm,
            {"email": "ada@example.com", "password": "secret1", "redirectTo": "/dashboard"},
        )

        assert result.success
        assert result.data.email == "ada@example.com"

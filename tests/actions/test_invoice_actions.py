"""
Tests for the create, update and delete invoice actions.

The storage client is a MagicMock; the view cache records invalidations.
"""

from datetime import date

import pytest

from invoicing.actions.invoices import create_invoice, delete_invoice, update_invoice
from invoicing.schemas.actions import FieldErrorsResult, OkResult


VALID_FORM = {"customerId": "cust-1", "amount": "10.50", "status": "pending"}


def insert_mock(supabase_client):
    return supabase_client.table.return_value.insert


class TestCreateInvoiceAction:
    @pytest.mark.asyncio
    async def test_inserts_cents_and_today_then_redirects(self, action_context, supabase_client, view_cache):
        result = await create_invoice(action_context, None, VALID_FORM)

        insert_mock(supabase_client).assert_called_once_with({
            "customer_id": "cust-1",
            "amount": 1050,
            "status": "pending",
            "date": date.today().isoformat(),
        })
        assert isinstance(result, OkResult)
        assert result.redirect_to == "/dashboard/invoices"
        assert view_cache.invalidated == ["/dashboard/invoices"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount,cents", [("1", 100), ("42", 4200), ("0.99", 99), ("1234.56", 123456)])
    async def test_amount_is_stored_as_input_times_100(self, action_context, supabase_client, amount, cents):
        await create_invoice(action_context, None, {**VALID_FORM, "amount": amount})

        inserted = insert_mock(supabase_client).call_args[0][0]
        assert inserted["amount"] == cents

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["0", "-5", "-0.01", "0.001", "1_000"])
    async def test_non_positive_amount_returns_field_errors_without_writing(
        self, action_context, supabase_client, view_cache, amount
    ):
        result = await create_invoice(action_context, None, {**VALID_FORM, "amount": amount})

        assert isinstance(result, FieldErrorsResult)
        assert "amount" in result.fields
        assert result.message == "Missing Fields. Failed to Create Invoice."
        supabase_client.table.assert_not_called()
        assert view_cache.invalidated == []

    @pytest.mark.asyncio
    async def test_storage_failure_still_invalidates_and_redirects(self, action_context, supabase_client, view_cache):
        insert_mock(supabase_client).return_value.execute.side_effect = RuntimeError("insert failed")

        result = await create_invoice(action_context, None, VALID_FORM)

        assert isinstance(result, OkResult)
        assert result.redirect_to == "/dashboard/invoices"
        assert view_cache.invalidated == ["/dashboard/invoices"]

    @pytest.mark.asyncio
    async def test_previous_cached_list_is_dropped(self, action_context, view_cache):
        view_cache.set("/dashboard/invoices", "stale list")

        await create_invoice(action_context, None, VALID_FORM)

        assert view_cache.get("/dashboard/invoices") is None


class TestUpdateInvoiceAction:
    @pytest.mark.asyncio
    async def test_updates_by_id_and_redirects(self, action_context, supabase_client, view_cache):
        result = await update_invoice(
            action_context, "inv-1", None, {"customerId": "cust-2", "amount": "20", "status": "paid"}
        )

        table = supabase_client.table.return_value
        table.update.assert_called_once_with({"customer_id": "cust-2", "amount": 2000, "status": "paid"})
        table.update.return_value.eq.assert_called_once_with("id", "inv-1")
        assert isinstance(result, OkResult)
        assert result.redirect_to == "/dashboard/invoices"
        assert view_cache.invalidated == ["/dashboard/invoices"]

    @pytest.mark.asyncio
    async def test_invalid_form_returns_update_message(self, action_context, supabase_client):
        result = await update_invoice(action_context, "inv-1", None, {"customerId": "cust-2", "amount": "0"})

        assert isinstance(result, FieldErrorsResult)
        assert set(result.fields) == {"amount", "status"}
        assert result.message == "Missing Fields. Failed to Update Invoice."
        supabase_client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_storage_failure_is_swallowed(self, action_context, supabase_client, view_cache):
        supabase_client.table.return_value.update.return_value.eq.return_value.execute.side_effect = (
            RuntimeError("update failed")
        )

        result = await update_invoice(action_context, "inv-1", None, VALID_FORM)

        assert isinstance(result, OkResult)
        assert view_cache.invalidated == ["/dashboard/invoices"]


class TestDeleteInvoiceAction:
    @pytest.mark.asyncio
    async def test_delete_invalidates_on_success(self, action_context, supabase_client, view_cache):
        result = await delete_invoice(action_context, "inv-1")

        supabase_client.table.return_value.delete.return_value.eq.assert_called_once_with("id", "inv-1")
        assert isinstance(result, OkResult)
        assert result.redirect_to is None
        assert view_cache.invalidated == ["/dashboard/invoices"]

    @pytest.mark.asyncio
    async def test_delete_failure_is_swallowed_without_invalidating(self, action_context, supabase_client, view_cache):
        supabase_client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = (
            RuntimeError("delete failed")
        )

        result = await delete_invoice(action_context, "inv-1")

        assert isinstance(result, OkResult)
        assert view_cache.invalidated == []

"""
Tests for the /dashboard/invoices endpoints.

Tests cover:
- Happy path: valid form -> 303 redirect to the list
- Failure path: invalid form -> 400 with field errors
- Failure path: no session -> 401
- List view served through the view cache
"""

import pytest
from fastapi.testclient import TestClient

from invoicing.actions.context import get_action_context
from invoicing.auth.bridge import Session
from invoicing.auth.dependencies import get_session_user
from invoicing.main import app

client = TestClient(app, follow_redirects=False)


async def mock_session_dependency():
    """Mock dependency that returns a signed-in session."""
    return Session(
        user_id="test-user-id",
        email="ada@example.com",
        name="ada",
        expires_at=0,
        token="test-token",
    )


@pytest.fixture
def mock_auth(action_context):
    """Override the session and action context dependencies."""
    app.dependency_overrides[get_session_user] = mock_session_dependency
    app.dependency_overrides[get_action_context] = lambda: action_context
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_context_only(action_context):
    app.dependency_overrides[get_action_context] = lambda: action_context
    yield
    app.dependency_overrides.clear()


class TestCreateInvoiceRoute:
    def test_valid_form_redirects_to_list(self, mock_auth, supabase_client, view_cache):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "cust-1", "amount": "99.95", "status": "paid"},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard/invoices"
        inserted = supabase_client.table.return_value.insert.call_args[0][0]
        assert inserted["amount"] == 9995
        assert view_cache.invalidated == ["/dashboard/invoices"]

    def test_invalid_form_returns_field_errors(self, mock_auth, supabase_client):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "", "amount": "-3", "status": "paid"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["kind"] == "fieldErrors"
        assert data["fields"]["customerId"] == ["Please select a customer."]
        assert data["fields"]["amount"] == ["Please enter an amount greater than $0."]
        assert data["message"] == "Missing Fields. Failed to Create Invoice."
        supabase_client.table.assert_not_called()

    def test_missing_session_returns_401(self, mock_context_only):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "cust-1", "amount": "10", "status": "paid"},
        )

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "unauthorized"


class TestUpdateAndDeleteRoutes:
    def test_edit_redirects_to_list(self, mock_auth, supabase_client):
        response = client.post(
            "/dashboard/invoices/inv-1/edit",
            data={"customerId": "cust-1", "amount": "5", "status": "pending"},
        )

        assert response.status_code == 303
        supabase_client.table.return_value.update.return_value.eq.assert_called_once_with("id", "inv-1")

    def test_delete_returns_ok(self, mock_auth, supabase_client, view_cache):
        response = client.post("/dashboard/invoices/inv-1/delete")

        assert response.status_code == 200
        assert response.json() == {"kind": "ok", "redirect_to": None}
        assert view_cache.invalidated == ["/dashboard/invoices"]


class TestListInvoicesRoute:
    @pytest.fixture
    def invoice_rows(self, supabase_client):
        chain = supabase_client.table.return_value.select.return_value.order.return_value.range.return_value
        chain.execute.return_value.data = [
            {"id": "inv-2", "customer_id": "cust-1", "amount": 1050, "status": "paid", "date": "2025-11-02"},
            {"id": "inv-1", "customer_id": "cust-2", "amount": 200, "status": "pending", "date": "2025-10-01"},
        ]
        return chain

    def test_list_is_cached_until_invalidated(self, mock_auth, invoice_rows):
        first = client.get("/dashboard/invoices")
        second = client.get("/dashboard/invoices")

        assert first.status_code == 200
        assert first.json()["count"] == 2
        assert first.json()["cached"] is False
        assert second.json()["cached"] is True
        assert invoice_rows.execute.call_count == 1

        client.post(
            "/dashboard/invoices/create",
            data={"customerId": "cust-1", "amount": "1", "status": "paid"},
        )
        third = client.get("/dashboard/invoices")

        assert third.json()["cached"] is False
        assert invoice_rows.execute.call_count == 2

    def test_storage_error_returns_500(self, mock_auth, supabase_client):
        chain = supabase_client.table.return_value.select.return_value.order.return_value.range.return_value
        chain.execute.side_effect = RuntimeError("boom")

        response = client.get("/dashboard/invoices")

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "fetch_error"

"""
Pytest configuration for the invoice dashboard tests.

Sets up the test environment and shared fixtures.
"""
import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("AUTH_SECRET", "test-auth-secret-that-is-at-least-32-bytes")
# Cheapest bcrypt cost so hashing does not slow the suite down
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from invoicing.actions.context import ActionContext  # noqa: E402
from invoicing.services.view_cache import ViewCache  # noqa: E402


class RecordingViewCache(ViewCache):
    """ViewCache that remembers every invalidated path."""

    def __init__(self) -> None:
        super().__init__()
        self.invalidated: list[str] = []

    def invalidate(self, path: str) -> None:
        self.invalidated.append(path)
        super().invalidate(path)


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates the table().insert().execute() chain.
    """
    return MagicMock()


@pytest.fixture
def view_cache():
    return RecordingViewCache()


@pytest.fixture
def auth_bridge():
    """Mock AuthBridge; tests set auth_bridge.sign_in.return_value."""
    bridge = MagicMock()
    bridge.sign_in = AsyncMock()
    return bridge


@pytest.fixture
def action_context(supabase_client, view_cache, auth_bridge):
    return ActionContext(
        supabase_client=supabase_client,
        cache=view_cache,
        auth=auth_bridge,
    )

"""
Collaborators handed to every action.
"""

from dataclasses import dataclass

from fastapi import Depends, Request
from supabase import Client

from invoicing.auth.bridge import AuthBridge
from invoicing.auth.dependencies import get_auth_bridge
from invoicing.db.client import Database, get_database
from invoicing.services.view_cache import ViewCache


@dataclass
class ActionContext:
    supabase_client: Client
    cache: ViewCache
    auth: AuthBridge


def get_action_context(
    request: Request,
    database: Database = Depends(get_database),
    auth: AuthBridge = Depends(get_auth_bridge),
) -> ActionContext:
    """FastAPI dependency assembling the context from app state."""
    return ActionContext(
        supabase_client=database.client,
        cache=request.app.state.view_cache,
        auth=auth,
    )

"""
Supabase client lifecycle.

The storage client is created once when the application starts and handed to
every action explicitly. Nothing in the package keeps a module-level client.

CRITICAL RULES:
1. Open the client in the app lifespan, close it at shutdown
2. Routes obtain the client through the get_database() dependency
3. Never create ad-hoc clients inside services or actions
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from supabase import Client, create_client

from invoicing.config import settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the Supabase client used by the persistence services.

    Example:
        >>> database = Database(url, key)
        >>> database.open()
        >>> database.client.table("invoices").select("*").execute()
        >>> database.close()
    """

    def __init__(self, url: str, key: str):
        self._url = url
        self._key = key
        self._client: Optional[Client] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> Client:
        if self._client is None:
            raise RuntimeError("Database client is not open")
        return self._client

    def open(self) -> Client:
        """Create the Supabase client. Calling open() twice is a no-op."""
        if self._client is None:
            self._client = create_client(
                supabase_url=self._url,
                supabase_key=self._key,
            )
            logger.info("Supabase client opened")
        return self._client

    def close(self) -> None:
        """Release the Supabase client."""
        if self._client is not None:
            self._client = None
            logger.info("Supabase client closed")


def database_from_settings() -> Database:
    """Build an unopened Database from the environment settings."""
    return Database(
        url=settings.SUPABASE_URL,
        key=settings.SUPABASE_SERVICE_ROLE_KEY,
    )


def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the Database opened by the app lifespan.

    Raises:
        HTTPException: 503 if the lifespan has not opened the client
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)

    if database is None or not database.is_open:
        logger.error("Database requested before the client was opened")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "database_unavailable", "details": "Storage client is not open"}
        )

    return database

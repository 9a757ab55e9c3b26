"""
User persistence service.

Users are created once at sign-up and looked up by email at sign-in. The
`users` table stores the bcrypt hash in its `password` column; the hash is
never logged.
"""

import logging
from typing import Any, Dict, Optional, cast

from supabase import Client

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


async def insert_user(
    supabase_client: Client,
    user_id: str,
    name: str,
    email: str,
    password_hash: str,
) -> bool:
    """
    Insert a user row unless a row with the same id already exists.

    Equivalent to `INSERT ... ON CONFLICT (id) DO NOTHING RETURNING *`: on
    conflict the store returns no rows.

    Returns:
        True if exactly one row was inserted

    Raises:
        postgrest.exceptions.APIError: If the store rejects the statement
            (e.g. the unique email constraint)
    """
    logger.info(f"Inserting user {user_id}")

    result = (
        supabase_client.table(USERS_TABLE)
        .upsert(
            {
                "id": user_id,
                "name": name,
                "email": email,
                "password": password_hash,
            },
            on_conflict="id",
            ignore_duplicates=True,
        )
        .execute()
    )

    inserted = len(result.data or [])
    if inserted != 1:
        logger.warning(f"User insert for id={user_id} returned {inserted} rows")

    return inserted == 1


async def get_user_by_email(
    supabase_client: Client,
    email: str,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a user row by email.

    Returns:
        The user row (including the password hash) or None
    """
    result = (
        supabase_client.table(USERS_TABLE)
        .select("*")
        .eq("email", email)
        .limit(1)
        .execute()
    )

    if not result.data:
        logger.debug("No user found for the submitted email")
        return None

    return cast(Dict[str, Any], result.data[0])

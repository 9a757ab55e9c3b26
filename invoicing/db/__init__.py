"""
Database access layer for the invoice dashboard backend.

All database operations MUST:
- Go through the Supabase client owned by Database (opened in the app lifespan)
- Use the table API so every value is sent as a bound parameter
- Never build SQL strings from form input

DO NOT define table schemas or migrations here. The `invoices` and `users`
tables are provisioned outside this service.
"""

from .client import Database, database_from_settings, get_database

__all__ = ["Database", "database_from_settings", "get_database"]

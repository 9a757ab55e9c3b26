"""
Invoice dashboard backend.

Form actions for creating, editing and deleting invoices, signing in and
creating accounts, served by FastAPI on top of Supabase.
"""

__version__ = "0.1.0"

"""
Pydantic schemas for form validation, action results and API responses.

Form schemas turn raw submitted strings into typed values; every action
returns one of the ActionResult shapes.
"""

from .actions import ActionResult, FieldErrorsResult, MessageResult, OkResult

__all__ = ["ActionResult", "FieldErrorsResult", "MessageResult", "OkResult"]

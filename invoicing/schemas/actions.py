"""
Result types returned by every action handler.

An action returns exactly one of three shapes, discriminated by `kind`:

- fieldErrors: validation failed; one list of messages per form field
- message: a single form-level message (auth failure, password mismatch...)
- ok: the action completed; optionally redirect the browser
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class FieldErrorsResult(BaseModel):
    kind: Literal["fieldErrors"] = "fieldErrors"
    fields: Dict[str, List[str]] = Field(..., description="Messages keyed by form field name")
    message: Optional[str] = Field(None, description="Form-level summary")


class MessageResult(BaseModel):
    kind: Literal["message"] = "message"
    text: str = Field(..., description="Human-readable message for the form")


class OkResult(BaseModel):
    kind: Literal["ok"] = "ok"
    redirect_to: Optional[str] = Field(None, description="Path the browser should be sent to")
    # Set by sign-in actions; the HTTP layer turns it into a cookie
    session_token: Optional[str] = Field(None, exclude=True, repr=False)


ActionResult = Annotated[
    Union[FieldErrorsResult, MessageResult, OkResult],
    Field(discriminator="kind"),
]

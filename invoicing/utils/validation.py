"""
Form validation helpers.

`validate_form` runs a pydantic schema against a flat mapping of submitted
form values and returns either the typed model or the errors flattened into
`{field_name: [message, ...]}`. It never raises for bad input.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationResult(Generic[ModelT]):
    data: Optional[ModelT] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None


def form_field_names(schema: Type[BaseModel]) -> List[str]:
    """Names the schema expects to find in the submitted form (aliases win)."""
    return [info.alias or name for name, info in schema.model_fields.items()]


def flatten_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic errors by their top-level field, keeping order."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else "__form__"
        errors.setdefault(key, []).append(error["msg"])
    return errors


def validate_form(schema: Type[ModelT], form: Mapping[str, Optional[str]]) -> ValidationResult[ModelT]:
    """
    Validate submitted form values against a schema.

    Fields absent from the form are passed to the schema as None so that
    field validators decide the message.

    Args:
        schema: Pydantic model describing the form
        form: Raw submitted values keyed by form field name

    Returns:
        ValidationResult with either `data` or `errors` populated
    """
    raw = {name: form.get(name) for name in form_field_names(schema)}
    try:
        return ValidationResult(data=schema.model_validate(raw))
    except ValidationError as exc:
        return ValidationResult(errors=flatten_errors(exc))

"""
app/schemas/validation.py

Purpose: Form validation primitives

- FormModel base (camelCase wire names, snake_case attributes)
- Valid / ValidationFailure result types
- FormSchema wrapper that turns pydantic errors into per-field messages
- Shared field types (email, email-or-blank, blank-as-zero numbers)

Validation never raises for bad input: every violated field is collected
and returned as data so handlers can render per-field feedback.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from utils.constants import EMAIL_INVALID


FORM_FIELD = "form"


class FormModel(BaseModel):
    """
    Base for submitted forms. Accepts camelCase keys (and snake_case),
    ignores unknown keys.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email_invalid", EMAIL_INVALID)
    return value


def _check_email_or_blank(value: str) -> str:
    if value == "":
        return value
    return _check_email(value)


Email = Annotated[str, AfterValidator(_check_email)]
EmailOrBlank = Annotated[str, AfterValidator(_check_email_or_blank)]


def _blank_as_zero(value: Any) -> Any:
    # Empty number inputs arrive as "" and count as 0
    if isinstance(value, str) and not value.strip():
        return 0
    return value


BlankAsZero = BeforeValidator(_blank_as_zero)


class FieldError(BaseModel):
    field: str
    message: str


T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the coerced, typed record."""
    value: T


@dataclass(frozen=True)
class ValidationFailure:
    """Every violated field with a human-readable message."""
    errors: List[FieldError] = field(default_factory=list)

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    def to_details(self) -> List[Dict[str, str]]:
        return [error.model_dump() for error in self.errors]


ValidationResult = Union[Valid[T], ValidationFailure]


# Messages keyed by (field, pydantic error type)
MessageTable = Dict[Tuple[str, str], str]

DEFAULT_MESSAGES: Dict[str, str] = {
    "missing": "Required",
    "string_type": "Expected a string",
    "bool_type": "Expected true or false",
    "list_type": "Expected a list",
    "model_type": "Expected an object",
    "model_attributes_type": "Expected an object",
}


def _field_name(loc: Tuple[Any, ...]) -> str:
    if not loc:
        return FORM_FIELD
    return ".".join(str(part) for part in loc)


class FormSchema(Generic[T]):
    """
    Declarative schema for one form type.

    Usage:
        result = product_schema.validate(payload)
        if isinstance(result, ValidationFailure):
            ...render result.errors
        else:
            product = result.value
    """

    def __init__(self, model: Type[T], messages: Optional[MessageTable] = None):
        self.model = model
        self.messages = messages or {}

    def validate(self, raw: Any) -> "ValidationResult[T]":
        if not isinstance(raw, Mapping):
            return ValidationFailure([FieldError(field=FORM_FIELD, message=DEFAULT_MESSAGES["model_type"])])

        try:
            value = self.model.model_validate(dict(raw))
        except PydanticValidationError as exc:
            return ValidationFailure([self._to_field_error(error) for error in exc.errors()])

        return Valid(value)

    def _to_field_error(self, error: Dict[str, Any]) -> FieldError:
        name = _field_name(error["loc"])
        # List items report against their parent field for message lookup
        root = str(error["loc"][0]) if error["loc"] else FORM_FIELD
        error_type = error["type"]

        message = (
            self.messages.get((name, error_type))
            or self.messages.get((root, error_type))
            or DEFAULT_MESSAGES.get(error_type)
            or error["msg"]
        )
        return FieldError(field=name, message=message)

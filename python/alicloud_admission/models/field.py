"""
alicloud_admission/models/field.py

Field-scoped validation errors:
  - FieldPath: an immutable path value threaded through every validator
  - ErrorType (Enum)
  - FieldError: a single error pinned to a rendered path
  - AggregateError: the exception raised once a list of errors is rejected
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

NIL_PATH = "<nil>"
FIELD_IMMUTABLE_ERROR_MSG = "field is immutable"


class FieldPath(BaseModel):
    """
    An immutable list of path segments, e.g. ("spec", "workers", 0, "zones").

    Integer segments render as indices, so the path above is shown as
    "spec.workers[0].zones". Every operation returns a new FieldPath.
    """

    model_config = ConfigDict(frozen=True)

    segments: Tuple[Union[str, int], ...] = ()

    @classmethod
    def new(cls, *names: str) -> FieldPath:
        return cls(segments=tuple(names))

    def child(self, *names: str) -> FieldPath:
        return FieldPath(segments=self.segments + tuple(names))

    def index(self, i: int) -> FieldPath:
        return FieldPath(segments=self.segments + (i,))

    def __str__(self) -> str:
        rendered = ""
        for segment in self.segments:
            if isinstance(segment, int):
                rendered += f"[{segment}]"
            else:
                rendered += f".{segment}" if rendered else segment
        return rendered


def render_path(path: Optional[FieldPath]) -> str:
    """Render a path for messages; an absent or empty path becomes '<nil>'."""
    return str(path) if path is not None and path.segments else NIL_PATH


class ErrorType(str, Enum):
    """The kind of a field error, valued with its human-readable label."""

    REQUIRED = "Required value"
    INVALID = "Invalid value"
    FORBIDDEN = "Forbidden"
    TOO_LONG = "Too long"
    TOO_MANY = "Too many"
    NOT_SUPPORTED = "Unsupported value"
    INTERNAL_ERROR = "Internal error"


_OMIT_VALUE = (ErrorType.REQUIRED, ErrorType.FORBIDDEN, ErrorType.INTERNAL_ERROR)


class FieldError(BaseModel):
    """
    A single validation failure.

    Attributes:
        type: The ErrorType of this failure.
        field: The rendered path of the offending field (e.g. "networks.vpc.cidr").
        bad_value: The offending value, if any.
        detail: Human-readable explanation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: ErrorType
    field: str
    bad_value: Any = None
    detail: str = ""

    def error_body(self) -> str:
        body = self.type.value
        if self.type not in _OMIT_VALUE:
            body += f": {_format_value(self.bad_value)}"
        if self.detail:
            body += f": {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body()}"


ErrorList = List[FieldError]


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, BaseModel):
        return repr(value.model_dump(by_alias=True, exclude_none=True))
    return repr(value) if isinstance(value, (list, dict, tuple)) else str(value)


def required(path: Optional[FieldPath], detail: str = "") -> FieldError:
    return FieldError(type=ErrorType.REQUIRED, field=render_path(path), detail=detail)


def invalid(path: Optional[FieldPath], value: Any, detail: str = "") -> FieldError:
    return FieldError(
        type=ErrorType.INVALID, field=render_path(path), bad_value=value, detail=detail
    )


def forbidden(path: Optional[FieldPath], detail: str = "") -> FieldError:
    return FieldError(type=ErrorType.FORBIDDEN, field=render_path(path), detail=detail)


def too_long(path: Optional[FieldPath], value: Any, max_length: int) -> FieldError:
    return FieldError(
        type=ErrorType.TOO_LONG,
        field=render_path(path),
        bad_value=value,
        detail=f"must have at most {max_length} characters",
    )


def too_many(path: Optional[FieldPath], actual: int, max_quantity: int) -> FieldError:
    return FieldError(
        type=ErrorType.TOO_MANY,
        field=render_path(path),
        bad_value=actual,
        detail=f"must have at most {max_quantity} items",
    )


def not_supported(
    path: Optional[FieldPath], value: Any, valid_values: Sequence[str]
) -> FieldError:
    detail = (
        "supported values: " + ", ".join(f'"{v}"' for v in valid_values)
        if valid_values
        else ""
    )
    return FieldError(
        type=ErrorType.NOT_SUPPORTED,
        field=render_path(path),
        bad_value=value,
        detail=detail,
    )


def internal_error(path: Optional[FieldPath], err: BaseException) -> FieldError:
    return FieldError(
        type=ErrorType.INTERNAL_ERROR, field=render_path(path), detail=str(err)
    )


def validate_immutable_field(
    new_value: Any, old_value: Any, path: Optional[FieldPath]
) -> ErrorList:
    """Return one Invalid error if new_value differs from old_value."""
    if new_value == old_value:
        return []
    return [invalid(path, new_value, FIELD_IMMUTABLE_ERROR_MSG)]


class AggregateError(Exception):
    """Raised when an object is rejected; carries the complete list of errors."""

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: ErrorList = list(errors)
        super().__init__(self._message())

    def _message(self) -> str:
        messages = [str(err) for err in self.errors]
        if len(messages) == 1:
            return messages[0]
        return "[" + ", ".join(messages) + "]"


def to_aggregate(errors: ErrorList) -> Optional[AggregateError]:
    """Return an AggregateError for a non-empty list, else None."""
    return AggregateError(errors) if errors else None


__all__ = [
    "FieldPath",
    "ErrorType",
    "FieldError",
    "ErrorList",
    "AggregateError",
    "render_path",
    "required",
    "invalid",
    "forbidden",
    "too_long",
    "too_many",
    "not_supported",
    "internal_error",
    "validate_immutable_field",
    "to_aggregate",
]

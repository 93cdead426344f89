"""
Type definitions for access checks.

- Subject: identifier of the principal being checked
- AccessCheckRequest: immutable (operation, subject, params) triple
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .exceptions import InvalidAccessRequest

Subject = Union[str, int]

SCALAR_TYPES = (str, int, float, bool, type(None))


def canonical_subject(subject: Subject) -> str:
    """Return the canonical string form of a subject identifier."""
    if isinstance(subject, bool) or not isinstance(subject, (str, int)):
        raise InvalidAccessRequest(
            f"Subject must be a string or integer, got {type(subject).__name__}",
            field_name="subject",
        )
    value = str(subject)
    if not value:
        raise InvalidAccessRequest("Subject must not be empty", field_name="subject")
    return value


def validate_operation(operation: str) -> str:
    if not isinstance(operation, str) or not operation:
        raise InvalidAccessRequest(
            "Operation must be a non-empty string", field_name="operation"
        )
    return operation


def normalize_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Copy params into a plain dict, rejecting keys and values the codec cannot encode."""
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise InvalidAccessRequest(
            f"Params must be a mapping, got {type(params).__name__}",
            field_name="params",
        )
    normalized = {}
    for key, value in params.items():
        if not isinstance(key, str):
            raise InvalidAccessRequest(
                f"Param names must be strings, got {key!r}", field_name="params"
            )
        if not isinstance(value, SCALAR_TYPES):
            raise InvalidAccessRequest(
                f"Param '{key}' must be a scalar value, got {type(value).__name__}",
                field_name="params",
            )
        if isinstance(value, float) and value != value:
            raise InvalidAccessRequest(
                f"Param '{key}' must not be NaN", field_name="params"
            )
        normalized[key] = value
    return normalized


@dataclass(frozen=True)
class AccessCheckRequest:
    """A single "may subject perform operation under params" question."""

    operation: str
    subject: Subject
    params: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        validate_operation(self.operation)
        canonical_subject(self.subject)
        object.__setattr__(
            self, "params", MappingProxyType(normalize_params(self.params))
        )


__all__ = [
    "Subject",
    "AccessCheckRequest",
    "canonical_subject",
    "normalize_params",
    "validate_operation",
]

"""Tagged success/error values returned by business operations."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Generic
from typing import TypeVar
from typing import Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories; the HTTP boundary maps each one to a status code."""

    VALIDATION = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL_ERROR"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind
    message: str
    errors: list[dict[str, Any]] = field(default_factory=list)
    # Finer-grained cause, e.g. "expired" vs "malformed" for tokens.
    reason: str | None = None


Result = Union[Ok[T], Err]

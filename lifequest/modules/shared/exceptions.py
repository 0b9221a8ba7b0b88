"""
Domain exceptions for LifeQuest.

Every LifeQuest error, domain or infrastructure, derives from
`LifeQuestError` and exposes the same surface to handlers:

- `error_code`  stable identifier for programmatic checks
- `details`     structured context, safe to put in a log record's `extra`
- `severity`    how loudly a handler should log it
- `is_retryable`

Only two store operations raise `NotFoundError` (awarding XP and creating a
task for an unknown player); the others tolerate missing ids.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class ErrorSeverity(Enum):
    DEBUG = "debug"
    INFO = "info"  # caller mistakes, e.g. a blank name
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"  # the engine cannot start


class LifeQuestError(Exception):
    """
    Base for all LifeQuest errors.

    Subclasses set `code` and `severity` as class attributes and pass their
    own context through `details`.

    Example:
        >>> err = NotFoundError("Player", "abc")
        >>> err.to_dict()["error_code"]
        'PLAYER_NOT_FOUND'
    """

    code: ClassVar[Optional[str]] = None
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.error_code: str = error_code or self.code or type(self).__name__

    @property
    def is_retryable(self) -> bool:
        return self.retryable

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.error_code}] {self.message}"
        return f"[{self.error_code}] {self.message} {self.details}"


class LifeQuestDomainException(LifeQuestError):
    """Game-rule and lookup failures raised by the progression engine."""


class NotFoundError(LifeQuestDomainException):
    """
    A required entity does not exist.

    `error_code` is derived from the resource type: ``PLAYER_NOT_FOUND``.
    """

    severity = ErrorSeverity.INFO

    def __init__(self, resource_type: str, identifier: Optional[Any] = None) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        suffix = f": {identifier}" if identifier is not None else ""
        super().__init__(
            f"{resource_type} not found{suffix}",
            details={"resource_type": resource_type, "identifier": identifier},
            error_code=f"{resource_type.upper()}_NOT_FOUND",
        )


class ValidationError(LifeQuestDomainException):
    """Caller input was rejected (blank names, unknown class or category)."""

    code = "VALIDATION_ERROR"
    severity = ErrorSeverity.INFO

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, details={"field": field})

"""
Failure description — structured error information for the failure track.

An ErrorCode classifies the failure, a FailureDescription carries the code,
a human-readable message, the originating exception (if any) and the moment
the failure was recorded.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Client-side codes describe bad input; server-side codes describe
    infrastructure or unexpected failures.
    """

    # --- Client-side errors ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Malformed input, missing fields, unparsable values."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions (e.g. unreadable file)."""

    NOT_FOUND = "NOT_FOUND"
    """Requested item or file doesn't exist."""

    # --- Server-side errors ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Infrastructure issues."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """System misconfiguration."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'Name is required'
    """

    code: ErrorCode
    message: str
    exception: BaseException | None = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: BaseException | None = None,
    ) -> FailureDescription:
        return FailureDescription(code=code, message=message, exception=exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if an exception is attached."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"

"""
Convenience factory methods for common Result failures.

    ResultFailures.not_found("Certificate", "example.com")
    ResultFailures.from_exception("Failed to read report", exc)
"""

from __future__ import annotations

from railway.failure import ErrorCode
from railway.result import Result


class ResultFailures:
    """Factory methods for common failure types, plus exception mapping."""

    @staticmethod
    def validation_error(message: str, exception: BaseException | None = None) -> Result:
        """Invalid input — missing fields, wrong format."""
        return Result.failure(ErrorCode.VALIDATION_ERROR, message, exception)

    @staticmethod
    def not_found(resource_type: str, identifier: str) -> Result:
        return Result.failure(
            ErrorCode.NOT_FOUND,
            f"{resource_type} not found with identifier: {identifier}",
        )

    @staticmethod
    def technical_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.TECHNICAL_ERROR, message, exception)

    @staticmethod
    def configuration_error(message: str) -> Result:
        return Result.failure(ErrorCode.CONFIGURATION_ERROR, message)

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """
        Map a Python exception to the most fitting ErrorCode.

        Mapping:
          - ValueError, TypeError, KeyError → VALIDATION_ERROR
          - FileNotFoundError, LookupError → NOT_FOUND
          - PermissionError → AUTHORIZATION_ERROR
          - other OSError → TECHNICAL_ERROR
          - everything else → UNKNOWN_ERROR
        """
        code = _map_exception_to_code(exception)
        return Result.failure(code, f"{message}: {exception}", exception)


def _map_exception_to_code(exception: BaseException) -> ErrorCode:
    match exception:
        case ValueError() | TypeError() | KeyError():
            return ErrorCode.VALIDATION_ERROR
        case FileNotFoundError() | LookupError():
            return ErrorCode.NOT_FOUND
        case PermissionError():
            return ErrorCode.AUTHORIZATION_ERROR
        case OSError():
            return ErrorCode.TECHNICAL_ERROR
        case _:
            return ErrorCode.UNKNOWN_ERROR

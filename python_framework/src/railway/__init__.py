"""
Railway-Oriented Programming (ROP) helpers.

Explicit, composable error handling — adapters turn exceptions into
failures, pipelines chain with flat_map, and only the outermost boundary
inspects the outcome.

    from railway import Result, ErrorCode

    def require_name(record) -> Result:
        if not record.name:
            return Result.failure(ErrorCode.VALIDATION_ERROR, "Name is required")
        return Result.success(record)
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.1.0"

"""
Custom exceptions for per-class JUnit report generation.
"""

from typing import Any, Optional


class ReportError(Exception):
    """Base exception for report generation errors."""

    pass


class UnknownStatusError(ReportError):
    """Raised when an execution record carries a status outside the known set."""

    def __init__(self, status: Any, record: Optional[Any] = None):
        self.status = status
        self.record = record
        message = f"Unknown result status: {status!r}"
        if record is not None:
            method = getattr(record, "method_name", "?")
            test_class = getattr(getattr(record, "test_class", None), "name", "?")
            message += f" (method {test_class}.{method})"
        super().__init__(message)


class ReportGenerationError(ReportError):
    """Raised when rendering or writing a class report fails."""

    def __init__(self, message: str, original_error: Exception):
        self.message = message
        self.original_error = original_error
        super().__init__(f"{message} {type(original_error).__name__}: {original_error}")


class InputFormatError(ReportError):
    """Raised when a suite results document is malformed."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid suite results in {source}: {detail}")

"""
Error types raised by the HTTP glue layer.
"""
from __future__ import annotations

from typing import Any, Optional

from .client_error import ClientError
from .error_code import ErrorCode


class UnexpectedStatusError(ClientError):
    """The HTTP response carried a non-2xx status code.

    Attributes:
        expected: Status the caller expected (``200``).
        actual: Status the server returned.
        response: The ``httpx.Response`` (already read and closed) so callers
            can inspect headers or the error body.
    """

    def __init__(self, *, expected: int, actual: int, response: Any = None, code: Optional[ErrorCode] = None) -> None:
        super().__init__(
            code=code or ErrorCode.UNKNOWN,
            message=f"unexpected status code {actual} (expected {expected})",
        )
        self.expected = expected
        self.actual = actual
        self.response = response

    @property
    def status_code(self) -> int:
        return self.actual


class InvalidFunctionCallSettingError(ClientError):
    """A function-call setting had neither a value nor a function name."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message="function call setting must have a value or a name",
        )


__all__ = ["UnexpectedStatusError", "InvalidFunctionCallSettingError"]

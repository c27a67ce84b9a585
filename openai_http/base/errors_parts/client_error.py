"""
Structured client error exception type.

Base class for every error raised by the library. Wraps the underlying
exception (if any) with a normalized `ErrorCode` for consistent handling and
structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ClientError(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


__all__ = ["ClientError"]

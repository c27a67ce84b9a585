"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration used across the HTTP glue and the
streaming decoder. Values are lowercase snake_case and are considered a stable
public contract for logging and error handling.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    MALFORMED_FRAME = "malformed_frame"
    ABNORMAL_END = "abnormal_end"
    RESOURCE_RELEASE = "resource_release"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

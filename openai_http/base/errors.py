"""Unified client error taxonomy public surface.

This module re-exports the implementations under
``openai_http.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.client_error import ClientError
from .errors_parts.stream_errors import (
    AbnormalEndError,
    MalformedFrameError,
    ResourceReleaseError,
    TransportReadError,
)
from .errors_parts.http_errors import InvalidFunctionCallSettingError, UnexpectedStatusError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ClientError",
    "TransportReadError",
    "MalformedFrameError",
    "AbnormalEndError",
    "ResourceReleaseError",
    "UnexpectedStatusError",
    "InvalidFunctionCallSettingError",
    "classify_exception",
    "code_for_status",
]

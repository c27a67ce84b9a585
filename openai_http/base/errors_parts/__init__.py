"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_http.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .client_error import ClientError
from .stream_errors import (
    AbnormalEndError,
    MalformedFrameError,
    ResourceReleaseError,
    TransportReadError,
)
from .http_errors import InvalidFunctionCallSettingError, UnexpectedStatusError
from .classification import classify_exception, code_for_status

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

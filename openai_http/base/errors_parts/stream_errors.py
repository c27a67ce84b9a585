"""
Error types raised by the streaming response decoder.

Each error is a :class:`ClientError` with a fixed code (except
``TransportReadError``, whose code is classified from the failing read) so
callers can branch either on the exception type or on ``err.code``.
"""
from __future__ import annotations

from typing import Optional

from .client_error import ClientError
from .error_code import ErrorCode


class TransportReadError(ClientError):
    """The underlying byte source failed mid-read.

    Not retried. The stream that raised it is finished; a new request is
    needed to resume.
    """

    def __init__(self, message: str, *, code: ErrorCode = ErrorCode.TRANSIENT, raw: Optional[BaseException] = None) -> None:
        super().__init__(code=code, message=message, raw=raw)


class MalformedFrameError(ClientError):
    """A frame's data payload was neither the sentinel nor a valid object.

    Attributes:
        payload: The original data text, kept for diagnostics.
    """

    def __init__(self, payload: str, *, raw: Optional[BaseException] = None) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_FRAME,
            message=f"malformed stream payload: {payload!r}",
            raw=raw,
        )
        self.payload = payload


class AbnormalEndError(ClientError):
    """The byte source ended before the ``[DONE]`` marker was seen."""

    def __init__(self, message: str = "stream ended before [DONE]") -> None:
        super().__init__(code=ErrorCode.ABNORMAL_END, message=message)


class ResourceReleaseError(ClientError):
    """Releasing the transport resource failed during ``close()``."""

    def __init__(self, raw: BaseException) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_RELEASE,
            message=f"error closing stream: {raw}",
            raw=raw,
        )


__all__ = [
    "TransportReadError",
    "MalformedFrameError",
    "AbnormalEndError",
    "ResourceReleaseError",
]

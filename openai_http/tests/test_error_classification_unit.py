"""Unit tests for error classification and the error taxonomy."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from openai_http.base.cancellation import CancelledError
from openai_http.base.errors import (
    AbnormalEndError,
    ClientError,
    ErrorCode,
    MalformedFrameError,
    ResourceReleaseError,
    TransportReadError,
    UnexpectedStatusError,
    classify_exception,
    code_for_status,
)


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


class _Resp:
    status_code = 404


class _ResponseError(Exception):
    response = _Resp()


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (409, ErrorCode.CONFLICT),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (507, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101


@pytest.mark.parametrize(
    "exc,code",
    [
        (ClientError(code=ErrorCode.CONFLICT, message="x"), ErrorCode.CONFLICT),
        (CancelledError("stop"), ErrorCode.CANCELLED),
        (TimeoutError(), ErrorCode.TIMEOUT),
        (asyncio.TimeoutError(), ErrorCode.TIMEOUT),
        (httpx.ReadTimeout("slow"), ErrorCode.TIMEOUT),
        (httpx.ConnectError("down"), ErrorCode.TRANSIENT),
        (_StatusError(429), ErrorCode.RATE_LIMIT),
        (_ResponseError(), ErrorCode.NOT_FOUND),
        (RuntimeError("Rate limit exceeded"), ErrorCode.RATE_LIMIT),
        (RuntimeError("invalid api key"), ErrorCode.AUTH),
        (RuntimeError("something odd"), ErrorCode.UNKNOWN),
    ],
)
def test_classify_exception(exc, code):
    assert classify_exception(exc) is code  # nosec B101


def test_error_codes_and_messages():
    assert str(AbnormalEndError()) == "abnormal_end: stream ended before [DONE]"  # nosec B101
    assert MalformedFrameError("{x").code is ErrorCode.MALFORMED_FRAME  # nosec B101
    assert TransportReadError("boom").code is ErrorCode.TRANSIENT  # nosec B101
    release = ResourceReleaseError(OSError("gone"))
    assert release.message == "error closing stream: gone"  # nosec B101

    status = UnexpectedStatusError(expected=200, actual=500)
    assert status.code is ErrorCode.UNKNOWN and status.response is None  # nosec B101
    assert status.message == "unexpected status code 500 (expected 200)"  # nosec B101


def test_all_stream_errors_are_client_errors():
    for err in (AbnormalEndError(), MalformedFrameError(""), TransportReadError("x"), ResourceReleaseError(OSError())):
        assert isinstance(err, ClientError)  # nosec B101

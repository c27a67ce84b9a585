"""Streaming response handle tests: pulling, iteration and release."""
from __future__ import annotations

import pytest

from openai_http.base.errors import ErrorCode, ResourceReleaseError
from openai_http.streaming import ScannerState, StreamingCompletionResponse, StreamScanner


class _Closable:
    def __init__(self, fail: bool = False) -> None:
        self.calls = 0
        self.fail = fail

    def close(self) -> None:
        self.calls += 1
        if self.fail:
            raise OSError("socket already gone")


def _response(sse, make_chunk, closer):
    body = sse(make_chunk("a"), make_chunk("b"), "[DONE]")
    return StreamingCompletionResponse(StreamScanner([body]), closer)


def test_next_and_close(sse, make_chunk):
    closer = _Closable()
    stream = _response(sse, make_chunk, closer)
    assert stream.next().get_content_at(0) == "a"  # nosec B101
    assert stream.next().get_content_at(0) == "b"  # nosec B101
    assert stream.next() is None  # nosec B101
    assert stream.next() is None  # nosec B101
    assert stream.state is ScannerState.TERMINAL_SEEN  # nosec B101
    assert closer.calls == 0  # nosec B101

    stream.close()
    assert closer.calls == 1  # nosec B101
    assert stream.closed is True  # nosec B101


def test_iteration(sse, make_chunk):
    stream = _response(sse, make_chunk, _Closable())
    assert [c.get_content_at(0) for c in stream] == ["a", "b"]  # nosec B101


def test_context_manager_closes(sse, make_chunk):
    closer = _Closable()
    with _response(sse, make_chunk, closer) as stream:
        stream.next()
    assert closer.calls == 1  # nosec B101


def test_plain_callable_closer(sse, make_chunk):
    calls = []
    stream = _response(sse, make_chunk, lambda: calls.append(1))
    stream.close()
    assert calls == [1]  # nosec B101


def test_close_failure_raises_resource_release_error(sse, make_chunk):
    stream = _response(sse, make_chunk, _Closable(fail=True))
    first = stream.next()

    with pytest.raises(ResourceReleaseError) as info:
        stream.close()
    assert info.value.code is ErrorCode.RESOURCE_RELEASE  # nosec B101
    assert isinstance(info.value.raw, OSError)  # nosec B101
    assert stream.closed is True  # nosec B101
    assert first.get_content_at(0) == "a"  # nosec B101

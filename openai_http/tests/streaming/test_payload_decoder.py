"""Payload decoder tests: sentinel precedence, decoding and malformed payloads."""
from __future__ import annotations

import json

import pytest

from openai_http.base.errors import ErrorCode, MalformedFrameError
from openai_http.models import StreamingCompletionObject
from openai_http.streaming import STREAM_DONE, decode_payload


def test_sentinel_is_terminal_without_json_parse(monkeypatch):
    def _boom(*_a, **_k):
        raise AssertionError("sentinel must not be JSON-decoded")

    monkeypatch.setattr(StreamingCompletionObject, "from_wire_json", classmethod(_boom))
    result = decode_payload(STREAM_DONE)
    assert result.terminal is True  # nosec B101
    assert result.obj is None  # nosec B101


def test_sentinel_match_is_exact():
    with pytest.raises(MalformedFrameError):
        decode_payload(" [DONE]")


def test_decodes_chunk(make_chunk):
    result = decode_payload(json.dumps(make_chunk("hi")))
    assert result.terminal is False  # nosec B101
    assert result.obj is not None  # nosec B101
    assert result.obj.get_content_at(0) == "hi"  # nosec B101


@pytest.mark.parametrize("payload", ["{not valid json}", "", "[1, 2]", '"text"', '{"created": "soon"}'])
def test_malformed_payload_keeps_original_text(payload):
    with pytest.raises(MalformedFrameError) as info:
        decode_payload(payload)
    assert info.value.payload == payload  # nosec B101
    assert info.value.code is ErrorCode.MALFORMED_FRAME  # nosec B101
    assert info.value.raw is not None  # nosec B101

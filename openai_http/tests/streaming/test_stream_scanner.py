"""Stream scanner behavior tests.

Covers the pull contract end to end over in-memory byte sources: frame
boundaries in every line-ending flavor, arbitrary chunking, the ``[DONE]``
terminal state, abnormal end, malformed frames (continue and poison modes),
read failures and cancellation pass-through.
"""
from __future__ import annotations

import io

import httpx
import pytest

from openai_http.base.cancellation import CancellationToken, CancelledError, guard_chunks
from openai_http.base.errors import (
    AbnormalEndError,
    ErrorCode,
    MalformedFrameError,
    TransportReadError,
)
from openai_http.streaming import ScannerState, StreamScanner

ACK_FRAME = b'data: {"choices":[{"index":0,"delta":{"role":"user","content":"ack"}}]}\n\n'
DONE_FRAME = b"data: [DONE]\n\n"


def test_ack_then_done():
    scanner = StreamScanner([ACK_FRAME + DONE_FRAME])

    first = scanner.next_object()
    assert first is not None  # nosec B101
    assert len(first.choices) == 1  # nosec B101
    assert first.choices[0].index == 0  # nosec B101
    assert first.get_content_at(0) == "ack"  # nosec B101
    assert first.choices[0].delta.role == "user"  # nosec B101

    assert scanner.next_object() is None  # nosec B101
    assert scanner.state is ScannerState.TERMINAL_SEEN  # nosec B101


def test_pulls_after_done_keep_returning_none():
    scanner = StreamScanner([DONE_FRAME, ACK_FRAME])
    for _ in range(3):
        assert scanner.next_object() is None  # nosec B101
    assert scanner.buffered == 0  # nosec B101


def test_end_without_done_is_abnormal_and_sticky():
    scanner = StreamScanner([ACK_FRAME])
    assert scanner.next_object().get_content_at(0) == "ack"  # nosec B101

    with pytest.raises(AbnormalEndError) as first:
        scanner.next_object()
    with pytest.raises(AbnormalEndError) as second:
        scanner.next_object()

    assert first.value is second.value  # nosec B101
    assert first.value.code is ErrorCode.ABNORMAL_END  # nosec B101
    assert scanner.state is ScannerState.ABNORMAL_END  # nosec B101


def test_empty_source_is_abnormal_end():
    with pytest.raises(AbnormalEndError):
        StreamScanner([]).next_object()


def test_malformed_payload_reports_original_text():
    scanner = StreamScanner([b"data: {not valid json}\n\n"])
    with pytest.raises(MalformedFrameError) as info:
        scanner.next_object()
    assert info.value.payload == "{not valid json}"  # nosec B101


def test_malformed_frame_does_not_end_stream_by_default():
    scanner = StreamScanner([b"data: {oops}\n\n" + ACK_FRAME + DONE_FRAME])
    with pytest.raises(MalformedFrameError):
        scanner.next_object()
    assert scanner.state is ScannerState.OPEN  # nosec B101
    assert scanner.next_object().get_content_at(0) == "ack"  # nosec B101
    assert scanner.next_object() is None  # nosec B101


def test_poison_on_malformed_fails_the_stream():
    scanner = StreamScanner([b"data: {oops}\n\n" + ACK_FRAME + DONE_FRAME], poison_on_malformed=True)
    with pytest.raises(MalformedFrameError) as first:
        scanner.next_object()
    assert scanner.state is ScannerState.FAILED  # nosec B101
    with pytest.raises(MalformedFrameError) as again:
        scanner.next_object()
    assert again.value is first.value  # nosec B101


@pytest.mark.parametrize("sep", ["\n", "\r\n", "\r"])
def test_line_ending_flavors(sse, make_chunk, sep):
    body = sse(make_chunk("a"), make_chunk("b"), "[DONE]", sep=sep)
    scanner = StreamScanner([body])
    assert [o.get_content_at(0) for o in scanner] == ["a", "b"]  # nosec B101


def test_mixed_blank_line_forms():
    body = (
        b'data: {"choices":[{"delta":{"content":"1"}}]}\r\n\n'
        b'data: {"choices":[{"delta":{"content":"2"}}]}\n\r\n'
        b"data: [DONE]\n\n"
    )
    assert [o.get_content_at(0) for o in StreamScanner([body])] == ["1", "2"]  # nosec B101


@pytest.mark.parametrize("size", [1, 2, 3, 5, 64])
@pytest.mark.parametrize("sep", ["\n", "\r\n"])
def test_chunking_does_not_change_output(sse, chunked, make_chunk, size, sep):
    body = sse(make_chunk("hello"), make_chunk(" world"), "[DONE]", sep=sep)
    contents = [o.get_content_at(0) for o in StreamScanner(chunked(body, size))]
    assert contents == ["hello", " world"]  # nosec B101


def test_multibyte_utf8_split_across_chunks(sse, chunked, make_chunk):
    body = sse(make_chunk("héllo ✓"), "[DONE]")
    contents = [o.get_content_at(0) for o in StreamScanner(chunked(body, 1))]
    assert contents == ["héllo ✓"]  # nosec B101


def test_reads_only_until_a_frame_is_complete(sse, make_chunk):
    reads = []

    def source():
        for part in (sse(make_chunk("x")), sse(make_chunk("y")), sse("[DONE]")):
            reads.append(part)
            yield part

    scanner = StreamScanner(source())
    assert scanner.next_object().get_content_at(0) == "x"  # nosec B101
    assert len(reads) == 1  # nosec B101


def test_comments_and_frames_without_data_are_skipped(make_chunk, sse):
    body = b": keep-alive\n\nevent: ping\nid: 3\n\n" + sse(make_chunk("z"), "[DONE]")
    assert [o.get_content_at(0) for o in StreamScanner([body])] == ["z"]  # nosec B101


def test_trailing_done_without_blank_line_completes():
    scanner = StreamScanner([ACK_FRAME, b"data: [DONE]"])
    assert scanner.next_object() is not None  # nosec B101
    assert scanner.next_object() is None  # nosec B101
    assert scanner.state is ScannerState.TERMINAL_SEEN  # nosec B101


def test_unterminated_complete_object_is_dropped_at_end():
    scanner = StreamScanner([ACK_FRAME.rstrip(b"\n")])
    with pytest.raises(AbnormalEndError):
        scanner.next_object()


@pytest.mark.parametrize("poison", [False, True])
def test_source_cut_mid_frame_is_abnormal_end(poison):
    scanner = StreamScanner([ACK_FRAME, b'data: {"choices":[{"ind'], poison_on_malformed=poison)
    assert scanner.next_object().get_content_at(0) == "ack"  # nosec B101

    for _ in range(3):
        with pytest.raises(AbnormalEndError):
            scanner.next_object()
    assert scanner.state is ScannerState.ABNORMAL_END  # nosec B101
    assert scanner.buffered == 0  # nosec B101


def _tb_depth(exc: BaseException) -> int:
    depth, tb = 0, exc.__traceback__
    while tb is not None:
        depth, tb = depth + 1, tb.tb_next
    return depth


def test_repeated_failed_pulls_do_not_grow_traceback():
    scanner = StreamScanner([ACK_FRAME])
    scanner.next_object()
    depths = []
    for _ in range(4):
        with pytest.raises(AbnormalEndError) as info:
            scanner.next_object()
        depths.append(_tb_depth(info.value))
    assert len(set(depths[1:])) == 1  # nosec B101


def test_file_like_source():
    scanner = StreamScanner(io.BytesIO(ACK_FRAME + DONE_FRAME))
    assert scanner.next_object().get_content_at(0) == "ack"  # nosec B101
    assert scanner.next_object() is None  # nosec B101


def test_text_chunks_are_accepted():
    scanner = StreamScanner([ACK_FRAME.decode(), DONE_FRAME.decode()])
    assert scanner.next_object().get_content_at(0) == "ack"  # nosec B101
    assert scanner.next_object() is None  # nosec B101


def test_read_failure_is_wrapped_and_sticky():
    cause = OSError("connection reset by peer")

    def source():
        yield ACK_FRAME
        raise cause

    scanner = StreamScanner(source())
    assert scanner.next_object() is not None  # nosec B101
    with pytest.raises(TransportReadError) as info:
        scanner.next_object()
    assert info.value.raw is cause  # nosec B101
    assert info.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert scanner.state is ScannerState.FAILED  # nosec B101

    with pytest.raises(TransportReadError) as again:
        scanner.next_object()
    assert again.value is info.value  # nosec B101


def test_read_timeout_is_classified():
    def source():
        raise httpx.ReadTimeout("read timed out")
        yield b""  # pragma: no cover

    with pytest.raises(TransportReadError) as info:
        StreamScanner(source()).next_object()
    assert info.value.code is ErrorCode.TIMEOUT  # nosec B101


def test_cancellation_passes_through_unwrapped():
    token = CancellationToken()
    scanner = StreamScanner(guard_chunks([ACK_FRAME, DONE_FRAME], token))
    assert scanner.next_object() is not None  # nosec B101

    token.cancel("user abort")
    with pytest.raises(CancelledError) as info:
        scanner.next_object()
    assert not isinstance(info.value, TransportReadError)  # nosec B101
    assert str(info.value) == "user abort"  # nosec B101
    assert scanner.state is ScannerState.FAILED  # nosec B101

"""Stream scanner: pull-based decoding of a live event-stream body.

Purpose
-------
Own a byte source (chunks arriving over time from the transport), buffer its
bytes, cut complete frames at blank-line boundaries and run each through
:func:`parse_frame` and :func:`decode_payload`. Callers pull one decoded
chunk at a time with :meth:`StreamScanner.next_object`; bytes are only read
when the buffer holds no complete frame.

State machine
-------------
``OPEN -> (frame -> emit)* -> TERMINAL_SEEN``
``OPEN -> ABNORMAL_END`` when the source ends before ``[DONE]``
``OPEN -> FAILED`` on a read failure (or a malformed frame when
``poison_on_malformed`` is set)

After ``TERMINAL_SEEN`` every pull returns ``None``. After ``ABNORMAL_END``
or ``FAILED`` every pull re-raises the error that ended the stream.

Failure semantics
-----------------
- Read failures are raised as :class:`TransportReadError` wrapping the
  transport exception. :class:`CancelledError` passes through unwrapped.
- Malformed frames raise :class:`MalformedFrameError`. By default the scanner
  stays open and the next pull continues with the following frame.
- Nothing is logged here; every error goes to the caller of the pull.

Concurrency
-----------
Single owner. The buffer and state are mutated in place without locking; do
not pull from one scanner on several threads.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from ..base.cancellation import CancelledError
from ..base.errors import (
    AbnormalEndError,
    ClientError,
    MalformedFrameError,
    TransportReadError,
    classify_exception,
)
from ..config.defaults import STREAM_READ_CHUNK_SIZE
from ..models.streaming import StreamingCompletionObject
from .frame_parser import RawFrame, parse_frame
from .payload_decoder import STREAM_DONE, decode_payload

# Leftmost match wins, so "\r\n\r\n" is preferred over its "\n\r\n" suffix.
_BOUNDARY = re.compile(rb"\r\n\r\n|\r\n\n|\n\r\n|\n\n|\r\r")
_MAX_BOUNDARY_LEN = 4


class ScannerState(str, Enum):
    OPEN = "open"
    TERMINAL_SEEN = "terminal_seen"
    ABNORMAL_END = "abnormal_end"
    FAILED = "failed"


def iter_source(source: Any, chunk_size: int = STREAM_READ_CHUNK_SIZE) -> Iterator[bytes]:
    """Adapt a byte source to an iterator of chunks.

    Accepts an ``httpx.Response`` opened with ``stream=True`` (read through
    ``iter_bytes`` so content-encoding is undone), a file-like object with
    ``read(n)``, or any iterable of ``bytes``.
    """
    iter_bytes = getattr(source, "iter_bytes", None)
    if callable(iter_bytes):
        return iter(iter_bytes())
    read = getattr(source, "read", None)
    if callable(read):
        return _read_chunks(read, chunk_size)
    return iter(source)


def _read_chunks(read, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = read(chunk_size)
        if not chunk:
            return
        yield chunk


class StreamScanner:
    """Incrementally decode streamed chat completion chunks from a byte source.

    Parameters:
        source: Chunk iterable, file-like object or streamed ``httpx.Response``
            (see :func:`iter_source`).
        poison_on_malformed: When ``True`` a malformed frame ends the stream
            like a read failure. Defaults to ``False``: later pulls continue
            with the next frame.
    """

    def __init__(self, source: Iterable[bytes] | Any, *, poison_on_malformed: bool = False) -> None:
        self._chunks = iter_source(source)
        self._buffer = bytearray()
        self._search_from = 0
        self._source_done = False
        self._state = ScannerState.OPEN
        self._error: Optional[BaseException] = None
        self._poison_on_malformed = poison_on_malformed

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def buffered(self) -> int:
        """Number of bytes read but not yet consumed by an emitted frame."""
        return len(self._buffer)

    def next_object(self) -> Optional[StreamingCompletionObject]:
        """Return the next decoded chunk, or ``None`` once ``[DONE]`` was seen.

        Raises:
            AbnormalEndError: The source ended before ``[DONE]``.
            TransportReadError: The source failed mid-read.
            CancelledError: The source observed a cancellation.
            MalformedFrameError: The next frame's payload could not be decoded.
        """
        if self._state is ScannerState.TERMINAL_SEEN:
            return None
        if self._error is not None:
            # fresh traceback per pull
            raise self._error.with_traceback(None)
        while True:
            frame = self._next_frame()
            if frame is None:
                err = AbnormalEndError()
                self._fail(err, ScannerState.ABNORMAL_END)
                raise err
            data = frame.data
            if data is None:
                # keep-alive comment or a frame without data
                continue
            try:
                decoded = decode_payload(data)
            except MalformedFrameError as e:
                if self._poison_on_malformed:
                    self._fail(e)
                raise
            if decoded.terminal:
                self._state = ScannerState.TERMINAL_SEEN
                self._buffer.clear()
                return None
            return decoded.obj

    def __iter__(self) -> Iterator[StreamingCompletionObject]:
        while True:
            obj = self.next_object()
            if obj is None:
                return
            yield obj

    def _fail(self, err: BaseException, state: ScannerState = ScannerState.FAILED) -> None:
        self._state = state
        self._error = err
        self._buffer.clear()

    def _next_frame(self) -> Optional[RawFrame]:
        """Return the next complete frame, reading more bytes as needed.

        Returns ``None`` when the source is exhausted. Leftover bytes without
        a trailing blank line only count when they hold the ``[DONE]``
        sentinel; any other unterminated frame is dropped, so the pull ends
        the stream abnormally.
        """
        while True:
            raw = self._cut_frame()
            if raw is not None:
                return parse_frame(raw)
            if self._source_done:
                residual = bytes(self._buffer)
                self._buffer.clear()
                if residual.strip():
                    frame = parse_frame(residual)
                    if frame.data == STREAM_DONE:
                        return frame
                return None
            self._fill()

    def _cut_frame(self) -> Optional[bytes]:
        match = _BOUNDARY.search(self._buffer, self._search_from)
        if match is None:
            self._search_from = max(0, len(self._buffer) - (_MAX_BOUNDARY_LEN - 1))
            return None
        raw = bytes(self._buffer[: match.start()])
        del self._buffer[: match.end()]
        self._search_from = 0
        return raw

    def _fill(self) -> None:
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._source_done = True
            return
        except CancelledError as e:
            self._fail(e)
            raise
        except ClientError as e:
            self._fail(e)
            raise
        except Exception as e:
            err = TransportReadError(f"error reading stream: {e}", code=classify_exception(e), raw=e)
            self._fail(err)
            raise err from e
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._buffer.extend(chunk)


__all__ = ["ScannerState", "StreamScanner", "iter_source"]

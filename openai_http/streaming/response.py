"""Streaming response handle.

The object client code holds for a streamed chat completion: a
:class:`StreamScanner` plus ownership of the transport resource that feeds it
(normally the streamed ``httpx.Response``).

Resource contract
-----------------
The caller must call :meth:`close` exactly once, whether the stream finished,
failed or was abandoned. The handle never closes the transport on its own.
Using it as a context manager is the caller opting in to that call.

Concurrency
-----------
Single owner; see :mod:`openai_http.streaming.scanner`.
"""
from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Union

from ..base.errors import ResourceReleaseError
from ..models.streaming import StreamingCompletionObject
from .scanner import ScannerState, StreamScanner

Closer = Union[Callable[[], Any], Any]


class StreamingCompletionResponse:
    """Pull decoded chunks of a streamed chat completion.

    Parameters:
        scanner: Scanner reading the response body.
        closer: Object with a ``close()`` method, or a zero-argument callable,
            that releases the transport.

    Example::

        stream = chat.create_streaming_completion(model, messages)
        try:
            while (chunk := stream.next()) is not None:
                print(chunk.get_content_at(0) or "", end="")
        finally:
            stream.close()
    """

    def __init__(self, scanner: StreamScanner, closer: Closer) -> None:
        self._scanner = scanner
        self._closer = closer
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> ScannerState:
        return self._scanner.state

    def next(self) -> Optional[StreamingCompletionObject]:
        """Return the next chunk, or ``None`` once the stream completed.

        Keeps returning ``None`` on further calls after completion. Errors
        from the scanner propagate unchanged.
        """
        return self._scanner.next_object()

    def __iter__(self) -> Iterator[StreamingCompletionObject]:
        return iter(self._scanner)

    def close(self) -> None:
        """Release the transport resource.

        Raises:
            ResourceReleaseError: The release failed. Chunks already returned
                stay valid.
        """
        close = getattr(self._closer, "close", None)
        release = close if callable(close) else self._closer
        try:
            release()
        except Exception as e:
            raise ResourceReleaseError(e) from e
        finally:
            self._closed = True

    def __enter__(self) -> "StreamingCompletionResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["StreamingCompletionResponse"]

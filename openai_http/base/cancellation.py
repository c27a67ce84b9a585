"""Cooperative cancellation primitives (public API facade).

Notes
-----
- The streaming decoder implements no timeout or cancellation logic of its
  own. Cancellation reaches it through the byte source: a source guarded by
  :func:`guard_chunks` raises ``CancelledError`` on the pull that follows a
  ``cancel()``.
- ``CancelledError`` is never wrapped by the decoder.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken


def guard_chunks(chunks: Iterable[bytes], token: Optional[CancellationToken]) -> Iterator[bytes]:
    """Yield ``chunks`` while checking ``token`` before each read.

    When ``token`` is ``None`` the chunks are passed through untouched.
    """
    if token is None:
        yield from chunks
        return
    iterator = iter(chunks)
    while True:
        token.raise_if_cancelled()
        try:
            chunk = next(iterator)
        except StopIteration:
            return
        token.raise_if_cancelled()
        yield chunk


__all__ = ["CancellationToken", "CancelledError", "guard_chunks"]

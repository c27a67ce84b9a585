"""Cancellation token polled by streamed reads.

A consumer thread pulls chunks from a stream while another thread (a UI
handler, a deadline watcher) may call :meth:`CancellationToken.cancel`.
The chat service checks the token around every body read, so the consumer's
next pull raises :class:`CancelledError`.
"""

from __future__ import annotations

import threading
from typing import Optional

from .cancelled_error import CancelledError

DEFAULT_REASON = "stream cancelled"


class CancellationToken:
    """One-shot, thread-safe cancellation flag with an optional reason.

    ``cancel`` may be called from any thread; only the first call records a
    reason. Tokens created with ``parent`` are cancelled together with it.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None
        self._lock = threading.Lock()
        self._linked: list = []
        if parent is not None:
            parent._link(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Later calls are no-ops."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            linked = list(self._linked)
        for token in linked:
            token.cancel(reason)

    def child(self) -> "CancellationToken":
        """Return a new token cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or DEFAULT_REASON)

    def _link(self, token: "CancellationToken") -> None:
        with self._lock:
            already = self._event.is_set()
            if not already:
                self._linked.append(token)
        if already:
            token.cancel(self._reason)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "DEFAULT_REASON"]

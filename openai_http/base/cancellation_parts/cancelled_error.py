"""Cancellation error type.

Defines the public ``CancelledError`` raised when a pull from a stream
observes a cancelled :class:`CancellationToken`.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes caller-requested cancellation from transport failures so the
    streaming decoder can let it pass through unwrapped.
    """

__all__ = ["CancelledError"]

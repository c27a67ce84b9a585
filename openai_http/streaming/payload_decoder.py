"""Payload decoder for streamed chat completion frames.

A frame's ``data`` value is one of:
    1. the ``[DONE]`` sentinel, reported as a terminal result. The check runs
       before any JSON parsing.
    2. a JSON chunk, decoded into a ``StreamingCompletionObject``.
    3. anything else, raised as :class:`MalformedFrameError` carrying the
       original text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ..base.errors import MalformedFrameError
from ..models.streaming import StreamingCompletionObject

STREAM_DONE = "[DONE]"


@dataclass(frozen=True)
class DecodedPayload:
    """Outcome of decoding one data payload.

    Exactly one of ``terminal`` (sentinel seen) or ``obj`` is meaningful.
    """

    terminal: bool = False
    obj: Optional[StreamingCompletionObject] = None


TERMINAL = DecodedPayload(terminal=True)


def decode_payload(value: str) -> DecodedPayload:
    """Decode a frame's data value.

    Raises:
        MalformedFrameError: ``value`` is neither the sentinel nor a JSON
            object of the chunk shape.
    """
    if value == STREAM_DONE:
        return TERMINAL
    try:
        obj = StreamingCompletionObject.from_wire_json(value)
    except ValidationError as e:
        raise MalformedFrameError(value, raw=e) from e
    return DecodedPayload(obj=obj)


__all__ = ["STREAM_DONE", "DecodedPayload", "TERMINAL", "decode_payload"]

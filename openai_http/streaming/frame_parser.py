"""Event-stream frame parser.

Turns the bytes of one event-stream record (everything between two blank-line
delimiters) into a :class:`RawFrame`.

Parsing rules:
    - Lines end in CRLF, CR or LF.
    - Lines starting with ``:`` are comments and ignored.
    - ``field: value`` lines lose exactly one space after the colon.
    - Lines without a ``:`` separator are skipped as noise; they do not fail
      the frame.
    - Repeated ``data`` lines are joined with ``"\\n"``; any other repeated
      field keeps its last value.
    - A frame with no fields parses to an empty ``RawFrame``. Interpreting
      that is the caller's job.
"""
from __future__ import annotations

import re
from typing import Optional

DATA_FIELD = "data"

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


class RawFrame(dict):
    """Named text fields of one event-stream record, in arrival order."""

    @property
    def data(self) -> Optional[str]:
        """Value of the ``data`` field, ``None`` when the frame has none."""
        return self.get(DATA_FIELD)


def parse_frame(raw: bytes | str) -> RawFrame:
    """Parse one event-stream record into a :class:`RawFrame`.

    Parameters:
        raw: The record without its trailing blank line. Bytes are decoded as
            UTF-8 with replacement characters for invalid sequences.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else raw
    frame = RawFrame()
    for line in _LINE_SPLIT.split(text):
        if not line or line.startswith(":"):
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        if value.startswith(" "):
            value = value[1:]
        if name == DATA_FIELD and name in frame:
            frame[name] = f"{frame[name]}\n{value}"
        else:
            frame[name] = value
    return frame


__all__ = ["RawFrame", "parse_frame", "DATA_FIELD"]

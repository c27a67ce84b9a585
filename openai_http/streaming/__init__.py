"""Streaming response decoder public surface.

Leaves first: :mod:`frame_parser` (one record -> fields),
:mod:`payload_decoder` (data value -> chunk / sentinel / error),
:mod:`scanner` (byte source -> pulled chunks) and :mod:`response` (scanner
plus transport ownership).
"""

from .frame_parser import DATA_FIELD, RawFrame, parse_frame
from .payload_decoder import STREAM_DONE, TERMINAL, DecodedPayload, decode_payload
from .scanner import ScannerState, StreamScanner, iter_source
from .response import StreamingCompletionResponse

__all__ = [
    "DATA_FIELD",
    "RawFrame",
    "parse_frame",
    "STREAM_DONE",
    "TERMINAL",
    "DecodedPayload",
    "decode_payload",
    "ScannerState",
    "StreamScanner",
    "iter_source",
    "StreamingCompletionResponse",
]

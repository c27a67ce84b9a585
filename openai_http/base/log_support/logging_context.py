"""Request context attached to structured log events.

:class:`LogContext` carries the HTTP method and path, the model and the
server's request id. ``extra`` holds anything else. ``to_dict`` flattens it
all into one mapping without ``None`` values, ready to merge into an event.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    method: Optional[str] = None
    path: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {
            "method": self.method,
            "path": self.path,
            "model": self.model,
            "request_id": self.request_id,
            **self.extra,
        }
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]

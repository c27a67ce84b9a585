"""Chat completions service."""

from .service import COMPLETIONS_PATH, ChatService, build_completion_body

__all__ = ["ChatService", "build_completion_body", "COMPLETIONS_PATH"]

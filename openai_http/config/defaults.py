"""openai_http.config.defaults
===========================

Central place for small, stable default values. These can be overridden via
environment variables or an external config file but provide sensible
fallbacks for local development and tests.

This module intentionally imports nothing from the rest of the package to
avoid circular imports. Only plain constants live here.
"""

from __future__ import annotations

# ---- API endpoint ----
DEFAULT_BASE_URL = "https://api.openai.com/v1"

# ---- Models ----
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_EMBEDDINGS_MODEL = "text-embedding-ada-002"

# ---- Streaming ----
# Chunk size used when a stream source is a file-like object read with read(n).
STREAM_READ_CHUNK_SIZE = 4096

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CHAT_MODEL",
    "DEFAULT_EMBEDDINGS_MODEL",
    "STREAM_READ_CHUNK_SIZE",
]

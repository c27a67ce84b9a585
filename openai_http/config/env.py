"""openai_http.config.env
======================

Environment variable names and helpers for API credentials.

Design Notes
------------
- ``API_KEY_ENV_CANDIDATES`` lists acceptable variables in priority order,
  canonical first.
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

API_KEY_ENV = "OPENAI_API_KEY"
API_KEY_ENV_CANDIDATES: Tuple[str, ...] = (API_KEY_ENV, "OPENAI_HTTP_API_KEY")

# ClientConfig field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "base_url": "OPENAI_BASE_URL",
    "organization": "OPENAI_ORGANIZATION",
    "chat_model": "OPENAI_MODEL",
    "embeddings_model": "OPENAI_EMBEDDINGS_MODEL",
    "timeout_seconds": "OPENAI_HTTP_TIMEOUT_SECONDS",
}

CONFIG_FILE_ENV = "OPENAI_HTTP_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate; ``(None, None)`` when nothing usable is set.
    """
    for name in API_KEY_ENV_CANDIDATES:
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "API_KEY_ENV",
    "API_KEY_ENV_CANDIDATES",
    "ENV_FIELD_MAP",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "resolve_api_key",
]

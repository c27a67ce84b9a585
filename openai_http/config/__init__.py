"""Unified configuration layer for the client.

Goals
-----
* Centralize defaults (base URL, models, timeouts).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``OPENAI_HTTP_CONFIG_FILE``
    3. Environment variables (``OPENAI_API_KEY``, ``OPENAI_BASE_URL``, ...)
    4. In-code overrides passed to :func:`get_client_config`
* Hand callers one fully-formed :class:`ClientConfig` value instead of a
  chain of option closures.

External Config File
--------------------
A flat mapping, JSON tried first, then YAML::

    base_url: https://api.openai.com/v1
    chat_model: gpt-4o-mini
    timeout_seconds: 30

Public API
----------
* ClientConfig
* get_client_config(overrides: dict | None = None) -> ClientConfig
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .defaults import DEFAULT_BASE_URL, DEFAULT_CHAT_MODEL, DEFAULT_EMBEDDINGS_MODEL
from .env import CONFIG_FILE_ENV, ENV_FIELD_MAP, is_placeholder, resolve_api_key


@dataclass(frozen=True)
class ClientConfig:
    """Resolved client configuration.

    Attributes:
        api_key: Bearer token sent in the ``Authorization`` header.
        base_url: API root that request paths are joined onto.
        organization: Optional ``OpenAI-Organization`` header value.
        timeout_seconds: Per-read timeout override; ``None`` uses
            :func:`openai_http.base.timeouts.get_timeout_config`.
        chat_model: Default model for chat completions.
        embeddings_model: Default model for embeddings.
    """

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    organization: Optional[str] = None
    timeout_seconds: Optional[float] = None
    chat_model: str = DEFAULT_CHAT_MODEL
    embeddings_model: str = DEFAULT_EMBEDDINGS_MODEL


_FIELD_NAMES = frozenset(f.name for f in fields(ClientConfig))
_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def _load_external_config() -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE[path] = data
    return data


def reset_config_cache() -> None:
    """Forget previously loaded config files (used by tests)."""
    _FILE_CACHE.clear()


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field_name, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val:
            out[field_name] = val
    key, _ = resolve_api_key()
    if key:
        out["api_key"] = key
    return out


def _coerce(values: Dict[str, Any], *, drop_placeholders: bool = True) -> Dict[str, Any]:
    out = {k: v for k, v in values.items() if k in _FIELD_NAMES}
    if out.get("timeout_seconds") is not None:
        out["timeout_seconds"] = float(out["timeout_seconds"])
    if drop_placeholders and out.get("api_key") is not None and is_placeholder(out["api_key"]):
        out.pop("api_key")
    return out


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> ClientConfig:
    """Return the merged :class:`ClientConfig`.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored; unknown keys are dropped.
    """
    merged: Dict[str, Any] = {}
    merged |= _coerce(_load_external_config())
    merged |= _coerce(_env_overrides())
    if overrides:
        merged |= _coerce({k: v for k, v in overrides.items() if v is not None}, drop_placeholders=False)
    return replace(ClientConfig(), **merged)


__all__ = [
    "ClientConfig",
    "get_client_config",
    "reset_config_cache",
]

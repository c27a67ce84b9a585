"""Pytest configuration for the openai_http test suite.

Provides:
- an autouse fixture isolating tests from the developer's environment
  (API keys, base URL and config file variables);
- ``sse`` to build event-stream bodies from data payloads;
- ``chunked`` to split a body into small chunks, mimicking a slow transport;
- ``mock_http`` to build an ``httpx.Client`` over ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator, List, Union

import httpx
import pytest

from openai_http.config import reset_config_cache

_ISOLATED_ENV = (
    "OPENAI_API_KEY",
    "OPENAI_HTTP_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_ORGANIZATION",
    "OPENAI_MODEL",
    "OPENAI_EMBEDDINGS_MODEL",
    "OPENAI_HTTP_TIMEOUT_SECONDS",
    "OPENAI_HTTP_CONNECT_TIMEOUT_SECONDS",
    "OPENAI_HTTP_CONFIG_FILE",
    "OPENAI_HTTP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear client environment variables and config caches for each test."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


Payload = Union[str, dict]


def _encode(payloads: tuple, sep: str) -> bytes:
    out: List[str] = []
    for p in payloads:
        data = p if isinstance(p, str) else json.dumps(p, ensure_ascii=False)
        out.append(f"data: {data}{sep}{sep}")
    return "".join(out).encode("utf-8")


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    """Return a builder: ``sse(payload, ..., sep="\\n")`` -> event-stream bytes.

    Dict payloads are JSON-encoded; strings are used verbatim.
    """

    def build(*payloads: Payload, sep: str = "\n") -> bytes:
        return _encode(payloads, sep)

    return build


@pytest.fixture()
def chunked() -> Callable[[bytes, int], List[bytes]]:
    """Return a splitter: ``chunked(body, size)`` -> list of ``size``-byte chunks."""

    def split(body: bytes, size: int = 1) -> List[bytes]:
        return [body[i : i + size] for i in range(0, len(body), size)]

    return split


@pytest.fixture()
def mock_http() -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]]:
    """Return a factory building ``httpx.Client`` instances over a handler."""
    clients: List[httpx.Client] = []

    def make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield make
    for c in clients:
        c.close()


def chunk_payload(content: Any = "ack", *, index: int = 0, finish_reason: Any = None) -> dict:
    """Build a minimal streamed chunk payload (importable helper for tests)."""
    choice: dict = {"index": index, "delta": {"role": "assistant", "content": content}}
    if finish_reason is not None:
        choice["finish_reason"] = finish_reason
    return {"id": "chatcmpl-1", "object": "chat.completion.chunk", "created": 1, "model": "m", "choices": [choice]}


@pytest.fixture()
def make_chunk() -> Callable[..., dict]:
    return chunk_payload

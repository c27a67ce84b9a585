"""Top-level API client.

Builds the shared :class:`ServiceClient` from a resolved
:class:`ClientConfig` and exposes the chat and embeddings services::

    with OpenAIClient() as client:
        stream = client.chat.create_streaming_completion(
            None, [Message(role="user", content="Hello")]
        )
        ...
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .base.http import ServiceClient
from .base.logging import get_logger, log_event
from .base.timeouts import get_timeout_config
from .chat import ChatService
from .config import ClientConfig, get_client_config
from .embeddings import EmbeddingsService


class OpenAIClient:
    """Client for an OpenAI-compatible API.

    Parameters:
        config: Resolved configuration; defaults to :func:`get_client_config`.
        http_client: Optional ``httpx.Client`` to send through. It stays open
            when this client is closed.
    """

    def __init__(self, config: Optional[ClientConfig] = None, *, http_client: Optional[httpx.Client] = None) -> None:
        self.config = config or get_client_config()
        self._logger = get_logger("openai_http.client")
        if not self.config.api_key:
            log_event(self._logger, "client.missing_api_key", level=logging.WARNING, base_url=self.config.base_url)
        timeout = None
        if self.config.timeout_seconds is not None:
            timeout = httpx.Timeout(
                self.config.timeout_seconds, connect=get_timeout_config().connect_timeout_seconds
            )
        self._service = ServiceClient(
            self.config.base_url,
            self.config.api_key,
            http_client=http_client,
            organization=self.config.organization,
            timeout=timeout,
        )
        self.chat = ChatService(self._service, default_model=self.config.chat_model)
        self.embeddings = EmbeddingsService(self._service, default_model=self.config.embeddings_model)

    def close(self) -> None:
        self._service.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["OpenAIClient"]

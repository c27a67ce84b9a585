"""Embeddings service.

Wraps the ``/embeddings`` endpoint. Non-streaming only: one request, one
decoded :class:`EmbeddingsResponse`.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..base.http import ServiceClient
from ..config.defaults import DEFAULT_EMBEDDINGS_MODEL
from ..models.embeddings import EmbeddingsOptions, EmbeddingsResponse

EMBEDDINGS_PATH = "/embeddings"


def build_embeddings_body(
    model: str,
    inputs: Iterable[str],
    options: Optional[EmbeddingsOptions] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"model": model, "input": list(inputs)}
    if options is not None:
        body |= options.to_wire()
    return body


class EmbeddingsService:
    """Embeddings against an OpenAI-compatible API."""

    def __init__(self, client: ServiceClient, *, default_model: str = DEFAULT_EMBEDDINGS_MODEL) -> None:
        self._client = client
        self._default_model = default_model

    def create_embeddings(
        self,
        model: Optional[str],
        inputs: Iterable[str],
        options: Optional[EmbeddingsOptions] = None,
    ) -> EmbeddingsResponse:
        """Create one embedding per input string."""
        body = build_embeddings_body(model or self._default_model, inputs, options)
        api_key = options.api_key if options is not None else None
        request = self._client.build_request("POST", EMBEDDINGS_PATH, body, api_key=api_key)
        return self._client.send_json(request, EmbeddingsResponse)


__all__ = ["EmbeddingsService", "build_embeddings_body", "EMBEDDINGS_PATH"]

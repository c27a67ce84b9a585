"""Chat completions service.

Purpose:
    Wrap the ``/chat/completions`` endpoint: build the request body from a
    message list and a :class:`ChatCompletionOptions` value, then either
    decode the JSON response or hand the streamed body to the streaming
    decoder.

Failure semantics:
    - HTTP and transport failures raise from :class:`ServiceClient`
      (``UnexpectedStatusError`` / ``ClientError``).
    - Once a streaming response is returned, all further errors come from
      ``StreamingCompletionResponse.next()``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from ..base.cancellation import CancellationToken, guard_chunks
from ..base.http import ServiceClient
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config.defaults import DEFAULT_CHAT_MODEL
from ..models.chat import ChatCompletionOptions, CompletionResponse, Message
from ..streaming import StreamScanner, StreamingCompletionResponse

COMPLETIONS_PATH = "/chat/completions"

MessageLike = Union[Message, Mapping[str, Any]]


def _coerce_messages(messages: Iterable[MessageLike]) -> List[Message]:
    return [m if isinstance(m, Message) else Message.model_validate(m) for m in messages]


def build_completion_body(
    model: str,
    messages: Iterable[MessageLike],
    options: Optional[ChatCompletionOptions] = None,
    *,
    stream: Optional[bool] = None,
) -> Dict[str, Any]:
    """Return the JSON body for a chat completion request.

    ``stream`` (when given) overrides ``options.stream``.

    Raises:
        InvalidFunctionCallSettingError: ``options.function_call`` has neither
            a value nor a name.
    """
    body: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_wire() for m in _coerce_messages(messages)],
    }
    if options is not None:
        body |= options.to_wire()
    if stream is not None:
        body["stream"] = stream
    return body


class ChatService:
    """Chat completions against an OpenAI-compatible API.

    Parameters:
        client: Shared :class:`ServiceClient`.
        default_model: Model used when a call passes ``model=None``.
    """

    def __init__(
        self,
        client: ServiceClient,
        *,
        default_model: str = DEFAULT_CHAT_MODEL,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._default_model = default_model
        self._logger = logger or get_logger("openai_http.chat")

    def _build_request(
        self,
        model: Optional[str],
        messages: Iterable[MessageLike],
        options: Optional[ChatCompletionOptions],
        *,
        stream: Optional[bool] = None,
    ) -> httpx.Request:
        body = build_completion_body(model or self._default_model, messages, options, stream=stream)
        api_key = options.api_key if options is not None else None
        return self._client.build_request("POST", COMPLETIONS_PATH, body, api_key=api_key)

    def do_completion(
        self,
        model: Optional[str],
        messages: Iterable[MessageLike],
        options: Optional[ChatCompletionOptions] = None,
    ) -> httpx.Response:
        """Low-level call returning the raw successful ``httpx.Response``."""
        return self._client.send(self._build_request(model, messages, options))

    def create_completion(
        self,
        model: Optional[str],
        messages: Iterable[MessageLike],
        options: Optional[ChatCompletionOptions] = None,
    ) -> CompletionResponse:
        """Generate a completion and return the decoded response."""
        return self._client.send_json(self._build_request(model, messages, options), CompletionResponse)

    def create_streaming_completion(
        self,
        model: Optional[str],
        messages: Iterable[MessageLike],
        options: Optional[ChatCompletionOptions] = None,
        *,
        cancellation: Optional[CancellationToken] = None,
        poison_on_malformed: bool = False,
    ) -> StreamingCompletionResponse:
        """Generate a completion as a stream of chunks.

        ``stream`` is forced to ``true`` in the request body. The caller owns
        the returned handle and must ``close()`` it.

        Parameters:
            cancellation: Token checked before each read of the body; once
                cancelled, the next pull raises ``CancelledError``.
            poison_on_malformed: Passed to :class:`StreamScanner`.
        """
        request = self._build_request(model, messages, options, stream=True)
        response = self._client.send(request, stream=True)
        try:
            normalized_log_event(
                self._logger,
                "stream.open",
                LogContext(method=request.method, path=request.url.path, model=model or self._default_model),
                phase="open",
                status_code=response.status_code,
                streamed=True,
                content_type=response.headers.get("content-type"),
            )
            scanner = StreamScanner(
                guard_chunks(response.iter_bytes(), cancellation),
                poison_on_malformed=poison_on_malformed,
            )
        except BaseException:
            response.close()
            raise
        return StreamingCompletionResponse(scanner, response)


__all__ = ["ChatService", "build_completion_body", "COMPLETIONS_PATH"]

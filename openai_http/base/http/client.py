"""HTTP glue for API services.

Purpose:
    Build authenticated JSON requests against the API base URL, send them
    through an ``httpx.Client`` and turn failures into the client error
    taxonomy. Every service (chat, embeddings) goes through one
    :class:`ServiceClient`.

External dependencies:
    - ``httpx`` for the synchronous HTTP client. Any object with
      ``build_request`` and ``send`` that behaves like ``httpx.Client`` can be
      injected (tests use ``httpx.MockTransport``).

Timeout strategy:
    - A client created here takes its timeouts from
      :func:`get_timeout_config` unless an explicit ``timeout`` is given. No
      other timeout logic exists in the library.

Lifecycle:
    - A ``ServiceClient`` closes the ``httpx.Client`` it created; an injected
      client belongs to the caller and is left open.
    - Streamed responses (``send(..., stream=True)``) are returned open and
      must be closed by whoever consumes them.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import ClientError, ErrorCode, UnexpectedStatusError, classify_exception, code_for_status
from ..logging import LogContext, get_logger, normalized_log_event
from ..timeouts import get_timeout_config

ModelT = TypeVar("ModelT", bound=BaseModel)


def join_url(base_url: str, path: str) -> str:
    """Join ``path`` onto ``base_url`` keeping the base path.

    ``join_url("https://api.openai.com/v1", "/chat/completions")`` gives
    ``https://api.openai.com/v1/chat/completions``.
    """
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def encode_body(body: Any) -> bytes:
    """Serialize a request body (mapping or pydantic model) to JSON bytes."""
    if isinstance(body, BaseModel):
        body = body.model_dump(exclude_none=True)
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


class ServiceClient:
    """Authenticated request builder and sender shared by the API services.

    Parameters:
        base_url: API root; request paths are joined onto it.
        api_key: Default bearer token. A non-empty per-request key wins.
        http_client: Optional ``httpx.Client`` to send through.
        organization: Optional ``OpenAI-Organization`` header value.
        timeout: Timeout for a client created here.
        logger: Logger for ``http.*`` events.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        organization: Optional[str] = None,
        timeout: Optional[httpx.Timeout] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url
        self._api_key = api_key
        self._organization = organization
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout or get_timeout_config().to_httpx())
        self._logger = logger or get_logger("openai_http.http")

    @property
    def http(self) -> httpx.Client:
        return self._http

    def build_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        api_key: Optional[str] = None,
    ) -> httpx.Request:
        """Create a request for ``path`` with JSON body and auth headers."""
        headers: Dict[str, str] = {}
        content: Optional[bytes] = None
        if body is not None:
            content = encode_body(body)
            headers["Content-Type"] = "application/json"
        key = api_key or self._api_key
        if key:
            headers["Authorization"] = f"Bearer {key}"
        if self._organization:
            headers["OpenAI-Organization"] = self._organization
        return self._http.build_request(method, join_url(self.base_url, path), content=content, headers=headers)

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        """Send ``request`` and return the successful response.

        With ``stream=True`` the body is left unread and the caller owns the
        open response.

        Raises:
            UnexpectedStatusError: Non-2xx status. The body has been read and
                the response closed.
            ClientError: The request could not be performed.
        """
        ctx = LogContext(method=request.method, path=request.url.path)
        normalized_log_event(self._logger, "http.request", ctx, phase="start", streamed=stream, level=logging.DEBUG)
        t0 = time.perf_counter()
        try:
            response = self._http.send(request, stream=stream)
        except Exception as e:
            code = classify_exception(e)
            normalized_log_event(
                self._logger,
                "http.error",
                ctx,
                phase="send",
                streamed=stream,
                latency_ms=(time.perf_counter() - t0) * 1000.0,
                error_code=code.value,
                error=str(e),
                level=logging.WARNING,
            )
            raise ClientError(code=code, message=f"error performing HTTP request: {e}", raw=e) from e

        latency_ms = (time.perf_counter() - t0) * 1000.0
        if not response.is_success:
            try:
                response.read()
            finally:
                response.close()
            err = UnexpectedStatusError(
                expected=int(httpx.codes.OK),
                actual=response.status_code,
                response=response,
                code=code_for_status(response.status_code),
            )
            normalized_log_event(
                self._logger,
                "http.error",
                ctx,
                phase="status",
                status_code=response.status_code,
                latency_ms=latency_ms,
                streamed=stream,
                error_code=err.code.value,
                level=logging.WARNING,
            )
            raise err

        normalized_log_event(
            self._logger,
            "http.response",
            ctx,
            phase="headers" if stream else "complete",
            status_code=response.status_code,
            latency_ms=latency_ms,
            streamed=stream,
            request_id=response.headers.get("x-request-id"),
        )
        return response

    def send_json(self, request: httpx.Request, model: Type[ModelT]) -> ModelT:
        """Send ``request`` and decode the JSON body into ``model``.

        An empty body decodes to ``model()`` with its defaults.

        Raises:
            ClientError: ``VALIDATION`` when the body does not match ``model``.
        """
        response = self.send(request)
        try:
            data = response.read()
            if not data.strip():
                return model()
            return model.model_validate_json(data)
        except ValidationError as e:
            raise ClientError(
                code=ErrorCode.VALIDATION,
                message=f"error decoding {model.__name__}: {e.error_count()} validation error(s)",
                raw=e,
            ) from e
        finally:
            response.close()

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ServiceClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ServiceClient", "join_url", "encode_body"]

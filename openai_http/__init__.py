"""openai_http package

Client library for OpenAI-compatible text and embedding generation APIs, with
an incremental decoder for Server-Sent-Event chat completion streams.

Public API (re-exported):
    - Version: ``__version__``
    - Client and services: :class:`OpenAIClient`, :class:`ChatService`,
      :class:`EmbeddingsService`, :class:`ServiceClient`
    - Configuration: :class:`ClientConfig`, :func:`get_client_config`
    - Streaming: :class:`StreamingCompletionResponse`, :class:`StreamScanner`
    - Models: messages, options, responses and streamed chunks
    - Errors: :class:`ClientError` and its subclasses, :class:`ErrorCode`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    AbnormalEndError,
    ClientError,
    ErrorCode,
    InvalidFunctionCallSettingError,
    MalformedFrameError,
    ResourceReleaseError,
    TransportReadError,
    UnexpectedStatusError,
)
from .base.http import ServiceClient
from .chat import ChatService
from .client import OpenAIClient
from .config import ClientConfig, get_client_config
from .embeddings import EmbeddingsService
from .models import (
    ChatCompletionOptions,
    CompletionResponse,
    Embedding,
    EmbeddingsOptions,
    EmbeddingsResponse,
    FunctionCall,
    FunctionCallSetting,
    FunctionDefinition,
    Message,
    StreamingCompletionChoice,
    StreamingCompletionDelta,
    StreamingCompletionObject,
)
from .streaming import StreamScanner, StreamingCompletionResponse

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OpenAIClient",
    "ChatService",
    "EmbeddingsService",
    "ServiceClient",
    "ClientConfig",
    "get_client_config",
    "StreamScanner",
    "StreamingCompletionResponse",
    "CancellationToken",
    "CancelledError",
    "ChatCompletionOptions",
    "CompletionResponse",
    "Embedding",
    "EmbeddingsOptions",
    "EmbeddingsResponse",
    "FunctionCall",
    "FunctionCallSetting",
    "FunctionDefinition",
    "Message",
    "StreamingCompletionChoice",
    "StreamingCompletionDelta",
    "StreamingCompletionObject",
    "ClientError",
    "ErrorCode",
    "TransportReadError",
    "MalformedFrameError",
    "AbnormalEndError",
    "ResourceReleaseError",
    "UnexpectedStatusError",
    "InvalidFunctionCallSettingError",
]

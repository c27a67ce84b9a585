"""Wire models public surface.

Re-exports the pydantic models under ``openai_http.models`` so callers can
import them from one place.
"""

from .function_call import FunctionCall, FunctionCallSetting, FunctionDefinition
from .chat import (
    ChatCompletionOptions,
    CompletionChoice,
    CompletionResponse,
    Message,
    Usage,
)
from .streaming import (
    StreamingCompletionChoice,
    StreamingCompletionDelta,
    StreamingCompletionObject,
)
from .embeddings import Embedding, EmbeddingsOptions, EmbeddingsResponse, EmbeddingsUsage

__all__ = [
    "FunctionCall",
    "FunctionCallSetting",
    "FunctionDefinition",
    "Message",
    "ChatCompletionOptions",
    "CompletionChoice",
    "CompletionResponse",
    "Usage",
    "StreamingCompletionDelta",
    "StreamingCompletionChoice",
    "StreamingCompletionObject",
    "EmbeddingsOptions",
    "Embedding",
    "EmbeddingsUsage",
    "EmbeddingsResponse",
]

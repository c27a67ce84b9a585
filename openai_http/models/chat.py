"""
Chat completion request and response models.

Requests are described by a `Message` list plus a `ChatCompletionOptions`
value holding every optional request field by name; unset fields are simply
left out of the JSON body. Responses decode into `CompletionResponse`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .function_call import FunctionCall, FunctionCallSetting, FunctionDefinition


class Message(BaseModel):
    """A message in a chat prompt.

    ``content`` is always serialized (``null`` when absent, as for assistant
    messages that only carry a function call); ``name`` and
    ``function_call`` are omitted when unset.
    """

    role: str
    content: Optional[str] = None
    name: Optional[str] = None
    function_call: Optional[FunctionCall] = None

    def to_wire(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        if self.function_call is not None:
            data["function_call"] = self.function_call.model_dump()
        return data


class ChatCompletionOptions(BaseModel):
    """Optional fields of a chat completion request.

    ``api_key`` is not part of the request body; when set it replaces the
    client's key for this one request.
    """

    functions: Optional[List[FunctionDefinition]] = None
    function_call: Optional[FunctionCallSetting] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    stop: Optional[List[str]] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, float]] = None
    user: Optional[str] = None
    api_key: Optional[str] = Field(default=None, exclude=True, repr=False)

    def to_wire(self) -> Dict[str, Any]:
        """Return the request-body fields that are set."""
        data = self.model_dump(exclude_none=True, exclude={"function_call", "functions"})
        if self.functions:
            data["functions"] = [f.model_dump(exclude_none=True) for f in self.functions]
        if self.function_call is not None:
            data["function_call"] = self.function_call.to_wire()
        return data


class CompletionChoice(BaseModel):
    """A completion choice in a completion response."""

    index: int = 0
    message: Message
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionResponse(BaseModel):
    """A non-streaming chat completion response."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[CompletionChoice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    def get_choice_at(self, index: int) -> Optional[CompletionChoice]:
        """Return the choice at ``index`` or ``None`` when out of range."""
        if index < 0 or index >= len(self.choices):
            return None
        return self.choices[index]

    def get_content_at(self, index: int) -> Optional[str]:
        choice = self.get_choice_at(index)
        return choice.message.content if choice is not None else None

    def get_function_call_at(self, index: int) -> Optional[FunctionCall]:
        choice = self.get_choice_at(index)
        return choice.message.function_call if choice is not None else None


__all__ = [
    "Message",
    "ChatCompletionOptions",
    "CompletionChoice",
    "Usage",
    "CompletionResponse",
]

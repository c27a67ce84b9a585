"""
Streaming chat completion chunk models.

Each SSE ``data`` frame of a streamed chat completion decodes into one
`StreamingCompletionObject`. Every field has a default so servers that send
partial chunks (only ``choices``, say) still decode.

Absent vs. ``null``
-------------------
Pydantic records which fields were present in the payload
(``model_fields_set``). A delta whose ``content`` was omitted and one whose
``content`` was an explicit ``null`` both read as ``None``, but
``to_wire_json`` re-emits exactly the fields that were present, so a decoded
chunk re-encodes to the same shape.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .function_call import FunctionCall


class StreamingCompletionDelta(BaseModel):
    """The incremental part of one choice.

    Attributes:
        role: Author role, usually only on the first delta of a choice.
        content: New text, ``None`` when this delta adds none.
        function_call: Function-call fragment (name first, then argument
            fragments).
    """

    role: Optional[str] = None
    content: Optional[str] = None
    function_call: Optional[FunctionCall] = None


class StreamingCompletionChoice(BaseModel):
    """One choice delta inside a streamed chunk.

    ``finish_reason`` is only set on the final delta for a given ``index``.
    """

    index: int = 0
    delta: StreamingCompletionDelta = Field(default_factory=StreamingCompletionDelta)
    finish_reason: Optional[str] = None


class StreamingCompletionObject(BaseModel):
    """A single chunk of a streaming chat completion response."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[StreamingCompletionChoice] = Field(default_factory=list)

    def get_choice_at(self, index: int) -> Optional[StreamingCompletionChoice]:
        """Return the choice at position ``index`` or ``None`` when out of range."""
        if index < 0 or index >= len(self.choices):
            return None
        return self.choices[index]

    def get_content_at(self, index: int) -> Optional[str]:
        choice = self.get_choice_at(index)
        return choice.delta.content if choice is not None else None

    def get_function_call_at(self, index: int) -> Optional[FunctionCall]:
        choice = self.get_choice_at(index)
        return choice.delta.function_call if choice is not None else None

    def to_wire_json(self) -> str:
        """Encode to the wire JSON form, keeping only fields that were set."""
        return self.model_dump_json(exclude_unset=True)

    @classmethod
    def from_wire_json(cls, text: str | bytes) -> "StreamingCompletionObject":
        """Decode the wire JSON form.

        Raises:
            pydantic.ValidationError: Invalid JSON or wrong shape.
        """
        return cls.model_validate_json(text)


__all__ = [
    "StreamingCompletionDelta",
    "StreamingCompletionChoice",
    "StreamingCompletionObject",
]

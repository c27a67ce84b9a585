"""
Function-calling wire models shared by chat requests, responses and streams.

Purpose
-------
Pydantic models for the function-calling surface of the chat API: the call a
model asks for (`FunctionCall`), the functions a caller offers
(`FunctionDefinition`) and the caller's steering of which one is used
(`FunctionCallSetting`).

`FunctionCall.arguments` stays a raw JSON string, exactly as sent by the
server. In streams it arrives in fragments that are only valid JSON once
concatenated, so it is never parsed here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from ..base.errors import InvalidFunctionCallSettingError


class FunctionCall(BaseModel):
    """A request from the model to call a function.

    Attributes:
        name: Function name. Empty on stream deltas that only carry further
            argument fragments.
        arguments: JSON-encoded arguments (or a fragment of them in streams).
    """

    name: str = ""
    arguments: str = ""


class FunctionDefinition(BaseModel):
    """A function the model may call.

    Attributes:
        name: Function name.
        description: Optional natural-language description.
        parameters: JSON Schema describing the arguments.
    """

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Any = Field(default_factory=dict)


class FunctionCallSetting(BaseModel):
    """How the model should choose a function.

    Exactly one of ``value`` (a predefined mode such as ``"none"`` or
    ``"auto"``) or ``name`` (force a specific function) should be set. On the
    wire the former is a bare string and the latter ``{"name": ...}``.
    """

    value: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def by_setting(cls, value: str) -> "FunctionCallSetting":
        """Use a predefined mode such as ``"none"`` or ``"auto"``."""
        return cls(value=value)

    @classmethod
    def by_name(cls, name: str) -> "FunctionCallSetting":
        """Force the function called ``name``."""
        return cls(name=name)

    def to_wire(self) -> Union[str, Dict[str, str]]:
        """Return the JSON-ready form.

        Raises:
            InvalidFunctionCallSettingError: Neither value nor name is set.
        """
        if self.value:
            return self.value
        if self.name:
            return {"name": self.name}
        raise InvalidFunctionCallSettingError()

    @classmethod
    def from_wire(cls, raw: Any) -> "FunctionCallSetting":
        """Parse the wire form (string or ``{"name": ...}`` mapping)."""
        if isinstance(raw, str) and raw:
            return cls(value=raw)
        if isinstance(raw, dict) and raw.get("name"):
            return cls(name=str(raw["name"]))
        raise InvalidFunctionCallSettingError()


__all__ = ["FunctionCall", "FunctionDefinition", "FunctionCallSetting"]

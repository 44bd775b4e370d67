"""
Message types exchanged with chat LLMs.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ToolCall(BaseModel):
    """A tool call requested by the model. ``arguments`` is raw JSON text."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: str = "{}"


class ChatMessage(BaseModel):
    """
    A single chat message.

    Assistant messages carry requested tool calls in
    ``additional_kwargs["tool_calls"]``; tool messages carry ``name`` and
    ``tool_call_id``.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    role: MessageRole = MessageRole.USER
    content: Optional[str] = ""
    additional_kwargs: Dict[str, Any] = Field(default_factory=dict)

    @property
    def tool_calls(self) -> List[ToolCall]:
        return list(self.additional_kwargs.get("tool_calls") or [])

    @classmethod
    def system_message(cls, content: str) -> 'ChatMessage':
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user_message(cls, content: str) -> 'ChatMessage':
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant_message(cls, content: Optional[str], tool_calls: Optional[List[ToolCall]] = None) -> 'ChatMessage':
        kwargs = {"tool_calls": list(tool_calls)} if tool_calls else {}
        return cls(role=MessageRole.ASSISTANT, content=content, additional_kwargs=kwargs)

    @classmethod
    def tool_message(cls, content: str, name: str, tool_call_id: str) -> 'ChatMessage':
        return cls(
            role=MessageRole.TOOL,
            content=content,
            additional_kwargs={"name": name, "tool_call_id": tool_call_id},
        )

    def __str__(self) -> str:
        return f"{self.role.value}: {self.content or ''}"


class ChatResponse(BaseModel):
    """Response of a chat call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: ChatMessage
    raw: Optional[Any] = None

    def __str__(self) -> str:
        return str(self.message)

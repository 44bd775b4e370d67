"""
Base LLM interface.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .types import ChatMessage, ChatResponse

ToolChoice = Union[str, Dict[str, Any]]


class LLM(BaseModel, ABC):
    """
    Abstract base class for chat models.

    Implementations accept an ordered message list plus optional tool schemas
    and return a single assistant message.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    @abstractmethod
    async def chat(
        self,
        messages: Sequence[ChatMessage],
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[ToolChoice] = None,
        **kwargs
    ) -> ChatResponse:
        """
        Send a chat request.

        Args:
            messages: Conversation so far, oldest first
            tools: Tool schemas in OpenAI ``function`` format
            tool_choice: ``"auto"``, ``"none"`` or a specific tool selector
            **kwargs: Provider specific parameters

        Returns:
            The assistant reply
        """
        pass

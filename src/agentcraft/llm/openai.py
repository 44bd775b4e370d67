import logging
import os
import re
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI
from pydantic import ConfigDict, Field

from .base import LLM, ToolChoice
from .types import ChatMessage, ChatResponse, MessageRole, ToolCall
from ..settings import get_settings

logger = logging.getLogger(__name__)

THINKING_PATTERN = re.compile(r"<think>(?P<reasoning>.*)</think>(?P<answer>.*)", flags=re.DOTALL)


def strip_thinking(content: Optional[str]) -> Optional[str]:
    """Drop a leading ``<think>...</think>`` block emitted by reasoning models."""
    if not content:
        return content
    match = THINKING_PATTERN.match(content)
    if match:
        return match.group("answer").strip()
    return content


def to_openai_message(message: ChatMessage) -> Dict[str, Any]:
    """Convert a ChatMessage into the chat-completions wire format."""
    msg: Dict[str, Any] = {"role": message.role.value, "content": message.content}
    if message.role == MessageRole.ASSISTANT and message.tool_calls:
        msg["tool_calls"] = [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments},
            }
            for call in message.tool_calls
        ]
    elif message.role == MessageRole.TOOL:
        msg["tool_call_id"] = message.additional_kwargs.get("tool_call_id")
    return msg


def from_openai_message(message: Any) -> ChatMessage:
    """Convert a chat-completions response message into a ChatMessage."""
    tool_calls = [
        ToolCall(id=call.id, name=call.function.name, arguments=call.function.arguments or "{}")
        for call in (getattr(message, "tool_calls", None) or [])
    ]
    return ChatMessage.assistant_message(strip_thinking(message.content), tool_calls=tool_calls)


class OpenAI(LLM):
    """
    Chat model backed by the OpenAI chat-completions API.

    Works with any OpenAI compatible endpoint through ``base_url``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: str = Field(default="gpt-3.5-turbo-1106")
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.1
    timeout: float = 60.0
    aclient: Any = Field(default=None, description="AsyncOpenAI client")

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        aclient: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize the OpenAI chat model.

        Args:
            model: Model name. Defaults to the ``llm_model`` setting
            api_key: API key. Falls back to settings, then OPENAI_API_KEY
            base_url: Base URL for API endpoint. Defaults to OpenAI's API
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            aclient: Pre-built async client, mostly for tests
        """
        settings = get_settings()
        super().__init__(
            model=model or settings.llm_model,
            api_key=api_key or settings.openai_api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url or settings.openai_base_url,
            temperature=settings.llm_temperature if temperature is None else temperature,
            timeout=timeout or settings.llm_timeout,
        )
        if aclient is None:
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key must be provided either via api_key parameter, "
                    "AGENTCRAFT_OPENAI_API_KEY or OPENAI_API_KEY environment variable"
                )
            aclient = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        self.aclient = aclient

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[ToolChoice] = None,
        **kwargs
    ) -> ChatResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [to_openai_message(m) for m in messages],
            "temperature": self.temperature,
            **kwargs,
        }
        if tools:
            request["tools"] = tools
            request["tool_choice"] = tool_choice or "auto"

        logger.debug(f"Sending {len(messages)} messages to {self.model} with {len(tools or [])} tools")
        response = await self.aclient.chat.completions.create(**request)
        message = from_openai_message(response.choices[0].message)
        return ChatResponse(message=message, raw=response)

    def __repr__(self) -> str:
        return f"OpenAI(model='{self.model}')"

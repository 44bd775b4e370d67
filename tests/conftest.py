"""
Pytest configuration and shared fixtures for agentcraft tests.
"""
import hashlib
import re
from typing import Any, Dict, List, Optional, Sequence

import pytest
from pydantic import Field

from agentcraft import ChatMessage, ChatResponse, Embeddings, FunctionTool, LLM, ToolCall


class MockLLM(LLM):
    """LLM returning scripted assistant messages and recording every request."""

    responses: List[ChatMessage] = Field(default_factory=list)
    requests: List[Dict[str, Any]] = Field(default_factory=list)

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[Any] = None,
        **kwargs
    ) -> ChatResponse:
        self.requests.append({"messages": list(messages), "tools": tools, "tool_choice": tool_choice})
        if not self.responses:
            raise AssertionError("MockLLM ran out of scripted responses")
        return ChatResponse(message=self.responses.pop(0))


class MockEmbeddings(Embeddings):
    """Bag-of-words embeddings so that texts sharing words are close."""

    dimension: int = 256

    def _embed(self, text: str) -> List[float]:
        vector = [0.01] * self.dimension
        for word in re.findall(r"[a-z]+", text.lower()):
            bucket = int(hashlib.md5(word.encode("utf-8")).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        return vector

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [self._embed(text) for text in texts]

    async def embed_query(self, text: str) -> List[float]:
        return self._embed(text)


def assistant(content: Optional[str] = None, *calls: ToolCall) -> ChatMessage:
    return ChatMessage.assistant_message(content, tool_calls=list(calls))


def call(name: str, arguments: str, call_id: str = "call_1") -> ToolCall:
    return ToolCall(id=call_id, name=name, arguments=arguments)


def add(a: int, b: int) -> int:
    """Add two integers a and b."""
    return a + b


def get_weather(city: str) -> str:
    """Get the current weather for a city."""
    return f"Sunny in {city}"


@pytest.fixture
def add_tool():
    return FunctionTool.from_defaults(add)


@pytest.fixture
def weather_tool():
    return FunctionTool.from_defaults(get_weather)


@pytest.fixture
def mock_embeddings():
    return MockEmbeddings()


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )

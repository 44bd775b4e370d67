"""
Tool interface for agents.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..async_utils import run_sync

DEFAULT_PARAMETERS = {"type": "object", "properties": {}}


class ToolMetadata(BaseModel):
    """What an LLM is told about a tool."""

    name: str
    description: str
    parameters: Dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_PARAMETERS))

    def to_openai_tool(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolOutput(BaseModel):
    """
    Result of a single tool invocation.

    ``content`` is the text handed back to the LLM. Failures are recorded with
    ``is_error=True`` and a readable message instead of being raised.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: str
    tool_name: str
    raw_input: Dict[str, Any] = Field(default_factory=dict)
    raw_output: Any = None
    is_error: bool = False

    def __str__(self) -> str:
        return self.content


class BaseTool(BaseModel, ABC):
    """
    Abstract base class for tools.

    A tool advertises its metadata to the LLM and is invoked with the parsed
    JSON arguments of a tool call.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    metadata: ToolMetadata

    @property
    def name(self) -> str:
        return self.metadata.name

    @abstractmethod
    async def acall(self, **kwargs) -> ToolOutput:
        """
        Invoke the tool.

        Args:
            **kwargs: Parsed tool arguments

        Returns:
            The tool output

        Raises:
            Exception: Any failure of the underlying capability
        """
        pass

    def call(self, **kwargs) -> ToolOutput:
        """Synchronous version of acall."""
        return run_sync(self.acall(**kwargs))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.metadata.name})"

"""
Where an agent worker gets its tools from.

Exactly one source is chosen when the worker is built: a fixed list, or a
retriever queried with the task input.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import AgentConfigurationError
from ..retriever.base import Retriever
from ..tools.types import BaseTool


class ToolSource(BaseModel, ABC):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @abstractmethod
    async def get_tools(self, input: str) -> List[BaseTool]:
        pass


class StaticToolSource(ToolSource):
    tools: List[BaseTool] = Field(default_factory=list)

    async def get_tools(self, input: str) -> List[BaseTool]:
        return list(self.tools)


class RetrievedToolSource(ToolSource):
    retriever: Retriever

    async def get_tools(self, input: str) -> List[BaseTool]:
        return list(await self.retriever.aretrieve(input))


def resolve_tool_source(
    tools: Optional[Sequence[BaseTool]] = None,
    tool_retriever: Optional[Retriever] = None,
) -> ToolSource:
    """
    Pick the tool source for a worker.

    Raises:
        AgentConfigurationError: If both a non-empty tool list and a retriever are given
    """
    tools = list(tools or [])
    if tools and tool_retriever is not None:
        raise AgentConfigurationError("Cannot specify both tools and tool_retriever")
    if tool_retriever is not None:
        return RetrievedToolSource(retriever=tool_retriever)
    return StaticToolSource(tools=tools)

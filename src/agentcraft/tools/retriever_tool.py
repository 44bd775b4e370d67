"""
RetrieverTool for exposing retrievers to agents.
"""
import logging
from typing import Callable, List, Optional

from pydantic import ConfigDict, Field

from .types import BaseTool, ToolMetadata, ToolOutput
from ..node import MetadataMode, NodeWithScore
from ..retriever.base import Retriever

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = """Search for relevant documents.

Args:
    query: The search query

Returns:
    Retrieved documents as formatted text"""

QUERY_PARAMETERS = {
    "type": "object",
    "properties": {"query": {"type": "string", "description": "The search query"}},
    "required": ["query"],
}


def default_formatter(results: List[NodeWithScore]) -> str:
    if not results:
        return "No relevant documents found."

    formatted_results = []
    for i, result in enumerate(results, start=1):
        content = result.node.get_content(MetadataMode.LLM)
        formatted_results.append(f"Document {i} (relevance: {result.score:.3f}):\n{content}\n")
    return "\n".join(formatted_results)


class RetrieverTool(BaseTool):
    """
    Tool wrapper for retrievers.

    The LLM calls it with a single ``query`` argument and gets the retrieved
    documents back as text.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    retriever: Retriever
    formatter: Callable[[List[NodeWithScore]], str] = Field(default=default_formatter)

    def __init__(
        self,
        retriever: Retriever,
        name: str = "search_documents",
        description: Optional[str] = None,
        formatter: Optional[Callable[[List[NodeWithScore]], str]] = None
    ):
        """
        Initialize the RetrieverTool.

        Args:
            retriever: The retriever to wrap
            name: Name of the tool (default: "search_documents")
            description: Tool description for the LLM
            formatter: Custom formatter for results (optional)
        """
        metadata = ToolMetadata(
            name=name,
            description=description or DEFAULT_DESCRIPTION,
            parameters=QUERY_PARAMETERS,
        )
        super().__init__(metadata=metadata, retriever=retriever, formatter=formatter or default_formatter)

    async def acall(self, query: str, **kwargs) -> ToolOutput:
        logger.info(f"Retrieving documents for query: {query}")
        results = await self.retriever.aretrieve(query)
        logger.info(f"Retrieved {len(results)} documents")
        return ToolOutput(
            content=self.formatter(results),
            tool_name=self.metadata.name,
            raw_input={"query": query},
            raw_output=results,
        )

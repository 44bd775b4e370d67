import logging
from typing import List

from pydantic import Field

from .base import Retriever
from ..node import NodeWithScore
from ..vector_store.base import VectorStore

logger = logging.getLogger(__name__)


class VectorIndexRetriever(Retriever[NodeWithScore]):
    """
    Retriever that embeds the query and runs a similarity search against a
    vector store.
    """

    vector_store: VectorStore = Field(description="Vector store to search")

    async def _retrieve(self, query: str, top_k: int, **kwargs) -> List[NodeWithScore]:
        query_embedding = await self.vector_store.embed_query(query)
        results = await self.vector_store.similarity_search(query_embedding, k=top_k, **kwargs)
        logger.debug(f"Retrieved {len(results)} nodes for query: {query}")
        return [NodeWithScore(node=node, score=score) for node, score in results]

    def __repr__(self) -> str:
        return f"VectorIndexRetriever(top_k={self.top_k})"

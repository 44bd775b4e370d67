from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..node import MetadataMode, Node


class VectorStore(BaseModel, ABC):
    """
    Abstract base class for vector store implementations.

    Similarity search itself is delegated to the backing service; the store
    only converts between nodes and the service's records. Nodes without an
    embedding are embedded with the configured embeddings model on insert.
    """

    _embeddings: Any = PrivateAttr(default=None)

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    @property
    def embeddings(self):
        return self._embeddings

    async def embed_query(self, text: str) -> List[float]:
        """
        Embed a query text using the vector store's embeddings model.

        Args:
            text: Query text to embed

        Returns:
            Embedding vector
        """
        if self._embeddings is None:
            raise ValueError("Embeddings model not configured for this vector store")
        return await self._embeddings.embed_query(text)

    async def _ensure_embeddings(self, nodes: List[Node]) -> None:
        missing = [node for node in nodes if not node.embedding]
        if not missing:
            return
        if self._embeddings is None:
            raise ValueError("Node missing embedding and no embeddings model configured")
        vectors = await self._embeddings.embed_documents([node.get_content(MetadataMode.EMBED) for node in missing])
        for node, vector in zip(missing, vectors):
            node.embedding = vector

    @abstractmethod
    async def insert_nodes(self, nodes: List[Node], show_progress: bool = False) -> List[str]:
        """
        Add nodes to the vector store.

        Args:
            nodes: Nodes to add, with or without embeddings
            show_progress: Whether to show a progress bar

        Returns:
            List of node IDs that were added
        """
        pass

    @abstractmethod
    async def similarity_search(
        self,
        query_embedding: List[float],
        k: int = 4,
        **kwargs
    ) -> List[Tuple[Node, float]]:
        """
        Search for similar nodes using a query embedding.

        Args:
            query_embedding: The embedding vector to search with
            k: Number of results to return
            **kwargs: Additional search parameters

        Returns:
            List of tuples containing (node, similarity_score)
        """
        pass

    @abstractmethod
    async def delete(self, doc_id: str) -> None:
        """
        Delete every node that belongs to a document.

        Args:
            doc_id: The document ID shared by the nodes to delete
        """
        pass

    @abstractmethod
    async def get_node(self, node_id: str) -> Optional[Node]:
        """
        Retrieve a single node by its ID.

        Args:
            node_id: The ID of the node to retrieve

        Returns:
            The node if found, None otherwise
        """
        pass

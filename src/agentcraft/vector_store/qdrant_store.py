import logging
from typing import List, Dict, Any, Optional, Tuple, Type

from pydantic import BaseModel, Field, ConfigDict
from qdrant_client import QdrantClient
from qdrant_client.http import models
from tqdm import tqdm

from .base import VectorStore
from ..embeddings import Embeddings
from ..node import Node, ObjectNode
from ..settings import get_settings

logger = logging.getLogger(__name__)

NODE_CLASSES: Dict[str, Type[Node]] = {
    'Node': Node,
    'ObjectNode': ObjectNode,
}


class QdrantConfig(BaseModel):
    """Configuration for Qdrant vector store."""
    url: Optional[str] = None
    api_key: Optional[str] = None
    collection_name: str = "default"
    distance: str = "Cosine"  # Can be "Cosine", "Euclid", or "Dot"
    batch_size: int = 100


class QdrantVectorStore(VectorStore):
    """
    Qdrant implementation of the VectorStore interface.

    The collection is created on the first insert, sized from the first
    node's embedding, unless it already exists.
    """

    client: Any = Field(description="QdrantClient instance")
    collection_name: str = Field(description="Name of the collection")
    distance: str = Field(default="Cosine", description="Distance metric (Cosine, Euclid, or Dot)")
    batch_size: int = Field(default=100, ge=1, description="Points per upsert request")
    _collection_initialized: bool = False

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    def __init__(
        self,
        client: Optional[QdrantClient] = None,
        collection_name: str = "default",
        embeddings: Optional[Embeddings] = None,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        distance: str = "Cosine",
        batch_size: int = 100,
        **kwargs
    ):
        """
        Initialize the Qdrant vector store.

        Args:
            client: QdrantClient instance. Built from url/api_key when omitted
            collection_name: Name of the collection to use
            embeddings: Embeddings model for nodes without embeddings
            url: Qdrant URL
            api_key: Qdrant API key
            distance: Distance metric to use ("Cosine", "Euclid", or "Dot")
            batch_size: Number of points to upload in a single request
        """
        if client is None:
            if not url:
                raise ValueError("QdrantVectorStore requires either a client or a url")
            client = QdrantClient(url=url, api_key=api_key)

        super().__init__(
            client=client,
            collection_name=collection_name,
            distance=distance,
            batch_size=batch_size,
            **kwargs
        )
        self._embeddings = embeddings
        self._collection_initialized = False

    @classmethod
    def from_config(cls, config: Dict[str, Any], embeddings: Optional[Embeddings] = None) -> 'QdrantVectorStore':
        """
        Create a vector store from a configuration dictionary.

        Keys missing from ``config`` fall back to the agentcraft settings.
        """
        settings = get_settings()
        merged = QdrantConfig(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key,
            collection_name=settings.collection_name,
            batch_size=settings.batch_size,
        ).model_copy(update=config)
        return cls(
            collection_name=merged.collection_name,
            embeddings=embeddings,
            url=merged.url,
            api_key=merged.api_key,
            distance=merged.distance,
            batch_size=merged.batch_size,
        )

    def _collection_exists(self) -> bool:
        collections = self.client.get_collections().collections
        return self.collection_name in [collection.name for collection in collections]

    def _initialize_collection(self, vector_size: int) -> None:
        if not self._collection_exists():
            logger.info(f"Creating collection {self.collection_name} (size={vector_size}, distance={self.distance})")
            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(
                    size=vector_size,
                    distance=getattr(models.Distance, self.distance.upper()),
                ),
            )
        self._collection_initialized = True

    def _to_point(self, node: Node) -> models.PointStruct:
        payload = node.model_dump(mode="json")
        vector = payload.pop('embedding')
        payload['_doc_class'] = node.__class__.__name__
        return models.PointStruct(id=node.id, vector=vector, payload=payload)

    def _from_payload(self, point_id: Any, payload: Dict[str, Any]) -> Node:
        doc_dict = dict(payload)
        node_class = NODE_CLASSES.get(doc_dict.pop('_doc_class', None), Node)
        doc_dict.setdefault('id', str(point_id))
        return node_class.model_validate(doc_dict)

    async def insert_nodes(self, nodes: List[Node], show_progress: bool = False) -> List[str]:
        if not nodes:
            return []

        await self._ensure_embeddings(nodes)
        if not self._collection_initialized:
            self._initialize_collection(len(nodes[0].embedding))

        points = [self._to_point(node) for node in nodes]
        batches = range(0, len(points), self.batch_size)
        if show_progress:
            batches = tqdm(batches, desc="Upserting points")

        for start in batches:
            self.client.upsert(
                collection_name=self.collection_name,
                points=points[start:start + self.batch_size],
            )
        return [node.id for node in nodes]

    async def similarity_search(
        self,
        query_embedding: List[float],
        k: int = 4,
        **kwargs
    ) -> List[Tuple[Node, float]]:
        if not self._collection_initialized and not self._collection_exists():
            return []

        search_result = self.client.query_points(
            collection_name=self.collection_name,
            query=query_embedding,
            limit=k,
            query_filter=kwargs.pop('query_filter', None),
            **kwargs
        )
        return [(self._from_payload(hit.id, hit.payload), hit.score) for hit in search_result.points]

    async def delete(self, doc_id: str) -> None:
        self.client.delete(
            collection_name=self.collection_name,
            points_selector=models.FilterSelector(
                filter=models.Filter(
                    must=[models.FieldCondition(key="doc_id", match=models.MatchValue(value=doc_id))]
                )
            ),
        )

    async def get_node(self, node_id: str) -> Optional[Node]:
        points = self.client.retrieve(
            collection_name=self.collection_name,
            ids=[node_id],
            with_payload=True,
            with_vectors=True,
        )
        if not points:
            return None
        node = self._from_payload(points[0].id, points[0].payload)
        node.embedding = points[0].vector
        return node

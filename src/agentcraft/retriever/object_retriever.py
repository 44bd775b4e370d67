"""
Retrieval of arbitrary objects (typically tools) through a vector store.
"""
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .base import Retriever
from .vector_index_retriever import VectorIndexRetriever
from ..node import ObjectNode
from ..tools.types import BaseTool
from ..vector_store.base import VectorStore

logger = logging.getLogger(__name__)

O = TypeVar('O')


def tool_to_node(tool: BaseTool) -> ObjectNode:
    """Index a tool by its name and description."""
    return ObjectNode(
        text=f"{tool.metadata.name}: {tool.metadata.description}",
        object_id=tool.metadata.name,
        object_type=tool.__class__.__name__,
        metadata={"name": tool.metadata.name},
        excluded_embed_metadata_keys=["name"],
    )


class ObjectMapper(BaseModel):
    """Keeps the objects behind ObjectNodes, keyed by ``object_id``."""

    _object_map: Dict[Any, Any] = PrivateAttr(default_factory=dict)

    def get(self, object_id: Any) -> Any:
        return self._object_map.get(object_id)

    def set(self, object_id: Any, obj: Any) -> None:
        self._object_map[object_id] = obj

    def __len__(self) -> int:
        return len(self._object_map)


class ObjectRetriever(Retriever[O], Generic[O]):
    """
    Retriever that resolves ObjectNode hits back to the original objects.

    Used as a tool retriever: the agent worker passes the task input and
    gets back the tools whose descriptions best match it.
    """

    retriever: Retriever = Field(description="Retriever returning scored ObjectNodes")
    object_mapper: ObjectMapper = Field(default_factory=ObjectMapper)

    async def _retrieve(self, query: str, top_k: int, **kwargs) -> List[O]:
        nodes = await self.retriever.aretrieve(query, top_k=top_k, **kwargs)
        objects = []
        for scored in nodes:
            obj = self.object_mapper.get(getattr(scored.node, "object_id", None))
            if obj is None:
                logger.warning(f"No object registered for node {scored.node.id}")
                continue
            objects.append(obj)
        return objects


class ObjectIndex(BaseModel, Generic[O]):
    """
    Vector index over a set of objects.

    Each object is turned into an ObjectNode by ``to_node`` and stored in the
    vector store; the mapper remembers which object belongs to which node.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    vector_store: VectorStore
    object_mapper: ObjectMapper = Field(default_factory=ObjectMapper)

    @classmethod
    async def from_objects(
        cls,
        objects: Sequence[O],
        vector_store: VectorStore,
        to_node: Optional[Callable[[O], ObjectNode]] = None,
        show_progress: bool = False,
    ) -> 'ObjectIndex[O]':
        """
        Build an index from objects.

        Args:
            objects: Objects to index (tools by default)
            vector_store: Store holding the object nodes
            to_node: Converter from object to ObjectNode (default: tool_to_node)
            show_progress: Whether to show a progress bar while inserting

        Returns:
            ObjectIndex instance
        """
        index = cls(vector_store=vector_store)
        await index.insert_objects(objects, to_node=to_node, show_progress=show_progress)
        return index

    async def insert_objects(
        self,
        objects: Sequence[O],
        to_node: Optional[Callable[[O], ObjectNode]] = None,
        show_progress: bool = False,
    ) -> List[str]:
        to_node = to_node or tool_to_node
        nodes = []
        for obj in objects:
            node = to_node(obj)
            self.object_mapper.set(node.object_id, obj)
            nodes.append(node)
        logger.info(f"Indexing {len(nodes)} objects")
        return await self.vector_store.insert_nodes(nodes, show_progress=show_progress)

    def as_retriever(self, top_k: int = 2) -> ObjectRetriever[O]:
        return ObjectRetriever(
            retriever=VectorIndexRetriever(vector_store=self.vector_store, top_k=top_k),
            object_mapper=self.object_mapper,
            top_k=top_k,
        )

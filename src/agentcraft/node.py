from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, PrivateAttr
from uuid import uuid4
import hashlib
import json

DEFAULT_TEXT_TEMPLATE = "{metadata_str}\n\n{content}"


class MetadataMode(str, Enum):
    """Which metadata keys are rendered into a node's content."""
    ALL = "all"
    EMBED = "embed"
    LLM = "llm"
    NONE = "none"


class Node(BaseModel):
    """
    A piece of text stored in a vector store.

    Nodes from the same source document share ``doc_id``; deleting by
    ``doc_id`` removes all of them.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    embedding: Optional[List[float]] = None

    # Document reference
    doc_id: Optional[str] = None

    # Metadata keys hidden from the embedding model / the LLM
    excluded_embed_metadata_keys: List[str] = Field(default_factory=list)
    excluded_llm_metadata_keys: List[str] = Field(default_factory=list)
    text_template: str = DEFAULT_TEXT_TEMPLATE

    # Cached hash (not persisted)
    _hash: Optional[str] = PrivateAttr(default=None)

    model_config = {
        "arbitrary_types_allowed": True,
    }

    @property
    def hash(self) -> str:
        """
        MD5 hash of text + metadata for change detection.

        Returns:
            MD5 hash as hex string
        """
        if self._hash is None:
            metadata_str = json.dumps(self.metadata, sort_keys=True, default=str)
            content = f"{self.text}|{metadata_str}"
            self._hash = hashlib.md5(content.encode('utf-8')).hexdigest()
        return self._hash

    def get_metadata_str(self, mode: MetadataMode = MetadataMode.ALL) -> str:
        if mode == MetadataMode.NONE:
            return ""
        excluded = set()
        if mode == MetadataMode.EMBED:
            excluded = set(self.excluded_embed_metadata_keys)
        elif mode == MetadataMode.LLM:
            excluded = set(self.excluded_llm_metadata_keys)
        return "\n".join(f"{key}: {value}" for key, value in self.metadata.items() if key not in excluded)

    def get_content(self, mode: MetadataMode = MetadataMode.NONE) -> str:
        """Render the node text, optionally prefixed by metadata via ``text_template``."""
        metadata_str = self.get_metadata_str(mode).strip()
        if not metadata_str:
            return self.text
        return self.text_template.format(metadata_str=metadata_str, content=self.text).strip()


class ObjectNode(Node):
    """
    A node standing in for an arbitrary Python object (e.g. a tool).

    The text is what gets embedded; ``object_id`` is the key used to map the
    node back to the object after retrieval.
    """
    object_id: Any = Field(description="The object_id", default_factory=lambda: str(uuid4()))
    object_type: Any = Field(description="The object_type", default=None)


class NodeWithScore(BaseModel):
    """
    Wrapper class that pairs a Node with its relevance score.
    """

    node: Node = Field(description="The document node")
    score: float = Field(description="Relevance score (typically 0.0 to 1.0)")

    model_config = {
        "arbitrary_types_allowed": True,
    }

    def __repr__(self) -> str:
        return f"NodeWithScore(score={self.score:.3f}, node_id={self.node.id[:8]}, {self.node.text[:100]}...)"

    @property
    def text(self) -> str:
        return self.node.text

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.node.metadata

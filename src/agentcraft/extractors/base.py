"""
Metadata extractors.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field
from tqdm import tqdm

from ..node import MetadataMode, Node

logger = logging.getLogger(__name__)

DEFAULT_NODE_TEXT_TEMPLATE = (
    "[Excerpt from document]\n{metadata_str}\n"
    "Excerpt:\n-----\n{content}\n-----\n"
)


class BaseExtractor(BaseModel, ABC):
    """
    Abstract base class for extractors.

    An extractor computes one metadata dict per node; ``process_nodes``
    stamps the results onto the nodes.
    """

    show_progress: bool = Field(default=False, description="Whether to show a progress bar")
    metadata_mode: MetadataMode = MetadataMode.ALL
    node_text_template: str = DEFAULT_NODE_TEXT_TEMPLATE
    disable_template_rewrite: bool = False
    in_place: bool = Field(default=True, description="Modify the given nodes instead of copies")

    @abstractmethod
    async def aextract(self, nodes: Sequence[Node]) -> List[Dict[str, Any]]:
        """
        Extract metadata for each node.

        Args:
            nodes: Nodes to extract metadata from

        Returns:
            One metadata dict per node, in order
        """
        pass

    async def process_nodes(
        self,
        nodes: Sequence[Node],
        excluded_embed_metadata_keys: Optional[List[str]] = None,
        excluded_llm_metadata_keys: Optional[List[str]] = None,
    ) -> List[Node]:
        """
        Extract metadata and merge it into the nodes.

        Args:
            nodes: Nodes to process
            excluded_embed_metadata_keys: Keys to hide from the embedding model
            excluded_llm_metadata_keys: Keys to hide from the LLM

        Returns:
            The processed nodes
        """
        if self.in_place:
            new_nodes = list(nodes)
        else:
            new_nodes = [node.model_copy(deep=True) for node in nodes]

        metadata_list = await self.aextract(new_nodes)
        if len(metadata_list) != len(new_nodes):
            raise ValueError(
                f"{self.__class__.__name__} returned {len(metadata_list)} metadata entries for {len(new_nodes)} nodes"
            )

        iterator = zip(new_nodes, metadata_list)
        if self.show_progress:
            iterator = tqdm(iterator, total=len(new_nodes), desc="Extracting metadata")

        for node, metadata in iterator:
            node.metadata.update(metadata)
            if excluded_embed_metadata_keys:
                node.excluded_embed_metadata_keys.extend(excluded_embed_metadata_keys)
            if excluded_llm_metadata_keys:
                node.excluded_llm_metadata_keys.extend(excluded_llm_metadata_keys)
            if not self.disable_template_rewrite:
                node.text_template = self.node_text_template

        logger.debug(f"{self.__class__.__name__} processed {len(new_nodes)} nodes")
        return new_nodes

from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel, ConfigDict

from ..async_utils import run_sync


class Embeddings(BaseModel, ABC):
    """
    Abstract base class for embedding models.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    @abstractmethod
    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        """
        Embed a list of documents.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors
        """
        pass

    @abstractmethod
    async def embed_query(self, text: str) -> List[float]:
        """
        Embed a single query text.

        Args:
            text: Query text to embed

        Returns:
            Embedding vector
        """
        pass

    def embed_documents_sync(self, texts: List[str]) -> List[List[float]]:
        return run_sync(self.embed_documents(texts))

    def embed_query_sync(self, text: str) -> List[float]:
        return run_sync(self.embed_query(text))

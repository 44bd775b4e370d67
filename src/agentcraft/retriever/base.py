"""
Base retriever interface.
"""
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..async_utils import run_sync

T = TypeVar('T')


class Retriever(BaseModel, ABC, Generic[T]):
    """
    Abstract base class for retriever implementations.

    Retrievers accept natural language queries and return ranked results.
    Unlike vector stores, which work with embeddings, retrievers handle the
    embedding of the query themselves.
    """

    top_k: int = Field(default=4, ge=1, description="Number of results to return")
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    def retrieve(self, query: str, top_k: Optional[int] = None, **kwargs) -> List[T]:
        """
        Synchronous version of aretrieve.

        Args:
            query: The query text
            top_k: Override for the number of results
            **kwargs: Additional retrieval parameters

        Returns:
            Retrieved results, best first
        """
        return run_sync(self.aretrieve(query, top_k=top_k, **kwargs))

    async def aretrieve(self, query: str, top_k: Optional[int] = None, **kwargs) -> List[T]:
        return await self._retrieve(query=query, top_k=top_k or self.top_k, **kwargs)

    @abstractmethod
    async def _retrieve(self, query: str, top_k: int, **kwargs: Any) -> List[T]:
        pass

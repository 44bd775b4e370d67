import asyncio
import os
from typing import Any, List, Optional

from openai import AsyncOpenAI
from pydantic import ConfigDict, Field

from .base import Embeddings
from ..settings import get_settings


class OpenAIEmbeddings(Embeddings):
    """
    OpenAI embeddings implementation.

    Supports both OpenAI API and compatible endpoints (e.g., Azure OpenAI, local models).
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = "text-embedding-3-small"
    timeout: float = 60.0
    max_concurrency: int = 10
    aclient: Any = Field(default=None, description="AsyncOpenAI client")

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 60.0,
        aclient: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize OpenAI embeddings.

        Args:
            api_key: API key. Falls back to settings, then OPENAI_API_KEY
            base_url: Base URL for API endpoint. Defaults to OpenAI's API
            model: Model name (default: the ``embedding_model`` setting)
            timeout: Request timeout in seconds
            aclient: Pre-built async client
        """
        settings = get_settings()
        super().__init__(
            api_key=api_key or settings.openai_api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url or settings.openai_base_url,
            model=model or settings.embedding_model,
            timeout=timeout,
        )
        if aclient is None:
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key must be provided either via api_key parameter "
                    "or OPENAI_API_KEY environment variable"
                )
            aclient = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        self.aclient = aclient

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        async def _embed(sem: asyncio.Semaphore, text: str):
            async with sem:
                response = await self.aclient.embeddings.create(input=text, model=self.model)
                return response.data[0].embedding

        sem = asyncio.Semaphore(self.max_concurrency)
        return list(await asyncio.gather(*[_embed(sem, text) for text in texts]))

    async def embed_query(self, text: str) -> List[float]:
        embeddings = await self.embed_documents([text])
        return embeddings[0]

    def __repr__(self) -> str:
        return f"OpenAIEmbeddings(model='{self.model}')"

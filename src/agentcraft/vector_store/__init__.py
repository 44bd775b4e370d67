from .base import VectorStore
from .qdrant_store import QdrantVectorStore, QdrantConfig

__all__ = ['VectorStore', 'QdrantVectorStore', 'QdrantConfig']

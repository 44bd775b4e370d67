from .base import Retriever
from .object_retriever import ObjectIndex, ObjectMapper, ObjectRetriever, tool_to_node
from .vector_index_retriever import VectorIndexRetriever

__all__ = [
    'Retriever',
    'VectorIndexRetriever',
    'ObjectIndex',
    'ObjectMapper',
    'ObjectRetriever',
    'tool_to_node',
]

"""
agentcraft - building blocks for tool-using RAG agents.

This package provides chat memory, tools, an OpenAI tool-calling agent
worker with its runner, and the retrieval pieces (embeddings, vector
stores, retrievers) used to select tools and documents.
"""

from .agents import (
    AgentChatResponse,
    AgentRunner,
    BaseAgent,
    OpenAIAgent,
    OpenAIAgentWorker,
    Task,
    TaskStep,
    TaskStepOutput,
)
from .embeddings import Embeddings, OpenAIEmbeddings
from .errors import (
    AgentcraftError,
    AgentConfigurationError,
    StepInProgressError,
    StreamingNotSupportedError,
    TaskNotFoundError,
    ToolNotFoundError,
)
from .extractors import BaseExtractor
from .llm import LLM, ChatMessage, ChatResponse, MessageRole, OpenAI, ToolCall
from .memory import ChatMemoryBuffer
from .node import MetadataMode, Node, NodeWithScore, ObjectNode
from .retriever import ObjectIndex, ObjectRetriever, Retriever, VectorIndexRetriever
from .settings import AgentcraftSettings, get_settings
from .tools import BaseTool, FunctionTool, RetrieverTool, ToolMetadata, ToolOutput
from .vector_store import QdrantConfig, QdrantVectorStore, VectorStore

__all__ = [
    'AgentChatResponse',
    'AgentRunner',
    'BaseAgent',
    'OpenAIAgent',
    'OpenAIAgentWorker',
    'Task',
    'TaskStep',
    'TaskStepOutput',
    'Embeddings',
    'OpenAIEmbeddings',
    'AgentcraftError',
    'AgentConfigurationError',
    'StepInProgressError',
    'StreamingNotSupportedError',
    'TaskNotFoundError',
    'ToolNotFoundError',
    'BaseExtractor',
    'LLM',
    'ChatMessage',
    'ChatResponse',
    'MessageRole',
    'OpenAI',
    'ToolCall',
    'ChatMemoryBuffer',
    'MetadataMode',
    'Node',
    'NodeWithScore',
    'ObjectNode',
    'ObjectIndex',
    'ObjectRetriever',
    'Retriever',
    'VectorIndexRetriever',
    'AgentcraftSettings',
    'get_settings',
    'BaseTool',
    'FunctionTool',
    'RetrieverTool',
    'ToolMetadata',
    'ToolOutput',
    'QdrantConfig',
    'QdrantVectorStore',
    'VectorStore',
]

from .base import LLM
from .openai import OpenAI
from .types import ChatMessage, ChatResponse, MessageRole, ToolCall

__all__ = [
    'LLM',
    'OpenAI',
    'ChatMessage',
    'ChatResponse',
    'MessageRole',
    'ToolCall',
]

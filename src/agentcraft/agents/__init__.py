"""
Agent implementations.
"""

from .base import BaseAgent
from .openai import OpenAIAgent, OpenAIAgentWorker
from .runner import AgentRunner
from .tool_source import RetrievedToolSource, StaticToolSource, ToolSource
from .types import AgentChatResponse, AgentWorker, Task, TaskState, TaskStep, TaskStepOutput

__all__ = [
    'BaseAgent',
    'AgentRunner',
    'AgentWorker',
    'AgentChatResponse',
    'OpenAIAgent',
    'OpenAIAgentWorker',
    'Task',
    'TaskState',
    'TaskStep',
    'TaskStepOutput',
    'ToolSource',
    'StaticToolSource',
    'RetrievedToolSource',
]

"""
Base agent interface.
"""
from abc import ABC, abstractmethod

from ..async_utils import run_sync
from .types import AgentChatResponse


class BaseAgent(ABC):
    """
    Abstract base class for agent implementations.

    Agents provide conversational interfaces that can use tools
    like retrievers to answer questions and perform tasks.
    """

    @abstractmethod
    async def chat(self, message: str, **kwargs) -> AgentChatResponse:
        """
        Send a message to the agent.

        Args:
            message: The user message
            **kwargs: Additional parameters

        Returns:
            The agent's response
        """
        pass

    def chat_sync(self, message: str, **kwargs) -> AgentChatResponse:
        """
        Synchronous version of chat.

        Raises:
            RuntimeError: If called while an event loop is running
        """
        return run_sync(self.chat(message, **kwargs))

from typing import List, Optional, Sequence

from ..runner import AgentRunner
from .worker import OpenAIAgentWorker
from ...llm.base import LLM
from ...llm.types import ChatMessage
from ...memory import ChatMemoryBuffer
from ...retriever.base import Retriever
from ...tools.types import BaseTool


class OpenAIAgent(AgentRunner):
    """
    Agent using the OpenAI tool-calling protocol.

    Example:
        agent = OpenAIAgent.from_tools([FunctionTool.from_defaults(add)])
        response = await agent.chat("What is 2 + 2?")
    """

    def __init__(
        self,
        tools: Optional[Sequence[BaseTool]] = None,
        llm: Optional[LLM] = None,
        memory: Optional[ChatMemoryBuffer] = None,
        prefix_messages: Optional[List[ChatMessage]] = None,
        verbose: Optional[bool] = None,
        max_function_calls: Optional[int] = None,
        tool_retriever: Optional[Retriever] = None,
    ):
        worker = OpenAIAgentWorker(
            tools=tools,
            llm=llm,
            prefix_messages=prefix_messages,
            verbose=verbose,
            max_function_calls=max_function_calls,
            tool_retriever=tool_retriever,
        )
        super().__init__(worker, memory=memory)

    @classmethod
    def from_tools(
        cls,
        tools: Optional[Sequence[BaseTool]] = None,
        tool_retriever: Optional[Retriever] = None,
        llm: Optional[LLM] = None,
        chat_history: Optional[List[ChatMessage]] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> 'OpenAIAgent':
        """
        Create an OpenAIAgent.

        Args:
            tools: Fixed list of tools
            tool_retriever: Retriever selecting tools per message (exclusive with tools)
            llm: Chat model (default: OpenAI built from settings)
            chat_history: Messages to seed the persistent memory with
            system_prompt: Sent as a system message before the history
            **kwargs: Passed to OpenAIAgentWorker

        Returns:
            OpenAIAgent instance
        """
        prefix_messages = kwargs.pop("prefix_messages", None) or []
        if system_prompt is not None:
            prefix_messages = [ChatMessage.system_message(system_prompt), *prefix_messages]
        return cls(
            tools=tools,
            tool_retriever=tool_retriever,
            llm=llm,
            memory=ChatMemoryBuffer.from_messages(chat_history),
            prefix_messages=prefix_messages,
            **kwargs
        )

    def __repr__(self) -> str:
        return f"OpenAIAgent(worker={self.agent_worker!r})"

"""
OpenAI tool-calling agent worker.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..tool_source import ToolSource, resolve_tool_source
from ..types import AgentChatResponse, AgentWorker, Task, TaskState, TaskStep, TaskStepOutput
from ..utils import add_user_step_to_memory
from ...errors import StreamingNotSupportedError
from ...llm.base import LLM, ToolChoice
from ...llm.openai import OpenAI
from ...llm.types import ChatMessage, ToolCall
from ...memory import ChatMemoryBuffer
from ...retriever.base import Retriever
from ...settings import get_settings
from ...tools.types import BaseTool, ToolOutput
from ...tools.utils import call_tool_by_name

logger = logging.getLogger(__name__)

FUNCTION_CALL_LIMIT_MESSAGE = "Function call limit of {limit} reached; {name} was not called."


class OpenAIAgentWorker(AgentWorker):
    """
    Agent worker driving the OpenAI tool-calling protocol.

    Each step sends the conversation to the LLM, runs every tool call the
    reply asks for and schedules another step, until the LLM answers without
    tool calls or the function call budget would be exceeded.

    The budget is checked before a batch of tool calls starts: a batch that
    would push the count past ``max_function_calls`` is not executed at all,
    so the number of completed calls never exceeds the bound.
    """

    def __init__(
        self,
        tools: Optional[Sequence[BaseTool]] = None,
        llm: Optional[LLM] = None,
        prefix_messages: Optional[List[ChatMessage]] = None,
        verbose: Optional[bool] = None,
        max_function_calls: Optional[int] = None,
        tool_retriever: Optional[Retriever] = None,
    ):
        """
        Initialize the worker.

        Args:
            tools: Fixed list of tools offered on every step
            llm: Chat model (default: OpenAI built from settings)
            prefix_messages: Messages sent before the history, e.g. a system prompt
            verbose: Log every function call at INFO level
            max_function_calls: Upper bound on tool calls per task
            tool_retriever: Retriever selecting tools from the task input

        Raises:
            AgentConfigurationError: If both tools and tool_retriever are given
        """
        settings = get_settings()
        self._tool_source: ToolSource = resolve_tool_source(tools, tool_retriever)
        self._llm = llm or OpenAI()
        self._verbose = settings.verbose if verbose is None else verbose
        self._max_function_calls = settings.max_function_calls if max_function_calls is None else max_function_calls
        self.prefix_messages: List[ChatMessage] = list(prefix_messages or [])

    @property
    def llm(self) -> LLM:
        return self._llm

    @property
    def max_function_calls(self) -> int:
        return self._max_function_calls

    async def get_tools(self, input: str) -> List[BaseTool]:
        return await self._tool_source.get_tools(input)

    def get_all_messages(self, task: Task) -> List[ChatMessage]:
        return [
            *self.prefix_messages,
            *task.memory.get(),
            *task.state.new_memory.get(),
        ]

    def get_latest_tool_calls(self, task: Task) -> List[ToolCall]:
        chat_history = task.state.new_memory.get_all()
        if not chat_history:
            return []
        return chat_history[-1].tool_calls

    def _get_llm_chat_kwargs(
        self,
        task: Task,
        openai_tools: List[Dict[str, Any]],
        tool_choice: ToolChoice = "auto",
    ) -> Dict[str, Any]:
        llm_chat_kwargs: Dict[str, Any] = {"messages": self.get_all_messages(task)}
        if openai_tools:
            llm_chat_kwargs["tools"] = openai_tools
            llm_chat_kwargs["tool_choice"] = tool_choice
        return llm_chat_kwargs

    async def _get_agent_response(self, task: Task, llm_chat_kwargs: Dict[str, Any]) -> AgentChatResponse:
        chat_response = await self._llm.chat(**llm_chat_kwargs)
        ai_message = chat_response.message
        task.state.new_memory.put(ai_message)
        return AgentChatResponse(response=ai_message.content or "", sources=task.state.sources)

    def _should_continue(self, tool_calls: List[ToolCall], n_function_calls: int) -> bool:
        if not tool_calls:
            return False
        if n_function_calls + len(tool_calls) > self._max_function_calls:
            return False
        return True

    async def call_function(
        self,
        tools: Sequence[BaseTool],
        tool_call: ToolCall,
        memory: ChatMemoryBuffer,
        sources: List[ToolOutput],
    ) -> ToolOutput:
        """Run one tool call and record its output in memory and sources."""
        log = logger.info if self._verbose else logger.debug
        log("=== Calling Function ===")
        log(f"Calling function: {tool_call.name} with args: {tool_call.arguments}")

        output = await call_tool_by_name(tools, tool_call)

        log(f"Got output: {output}")
        log("==========================")

        sources.append(output)
        memory.put(ChatMessage.tool_message(str(output), name=tool_call.name, tool_call_id=tool_call.id))
        return output

    def _skip_function_calls(self, tool_calls: List[ToolCall], task: Task) -> None:
        # Answer every pending call so the stored history stays valid for the next request
        logger.warning(
            f"Task {task.task_id}: function call limit of {self._max_function_calls} reached, "
            f"skipping {len(tool_calls)} call(s)"
        )
        for tool_call in tool_calls:
            message = FUNCTION_CALL_LIMIT_MESSAGE.format(limit=self._max_function_calls, name=tool_call.name)
            output = ToolOutput(
                content=message,
                tool_name=tool_call.name,
                raw_input={"arguments": tool_call.arguments},
                is_error=True,
            )
            task.state.sources.append(output)
            task.state.new_memory.put(ChatMessage.tool_message(message, name=tool_call.name, tool_call_id=tool_call.id))

    def initialize_step(self, task: Task, **kwargs) -> TaskStep:
        task.state = TaskState()
        return TaskStep(task_id=task.task_id, input=task.input)

    async def _run_step(self, step: TaskStep, task: Task, tool_choice: ToolChoice = "auto") -> TaskStepOutput:
        tools = await self.get_tools(task.input)

        if step.input:
            add_user_step_to_memory(step, task.state.new_memory, self._verbose)

        openai_tools = [tool.metadata.to_openai_tool() for tool in tools]
        llm_chat_kwargs = self._get_llm_chat_kwargs(task, openai_tools, tool_choice)
        agent_chat_response = await self._get_agent_response(task, llm_chat_kwargs)

        latest_tool_calls = self.get_latest_tool_calls(task)

        if not self._should_continue(latest_tool_calls, task.state.n_function_calls):
            if latest_tool_calls:
                self._skip_function_calls(latest_tool_calls, task)
            is_done = True
            new_steps = []
        else:
            is_done = False
            for tool_call in latest_tool_calls:
                await self.call_function(tools, tool_call, task.state.new_memory, task.state.sources)
                task.state.n_function_calls += 1
            new_steps = [step.get_next_step()]

        return TaskStepOutput(
            output=agent_chat_response,
            task_step=step,
            next_steps=new_steps,
            is_done=is_done,
        )

    async def run_step(self, step: TaskStep, task: Task, tool_choice: ToolChoice = "auto", **kwargs) -> TaskStepOutput:
        return await self._run_step(step, task, tool_choice=tool_choice)

    async def stream_step(self, step: TaskStep, task: Task, **kwargs) -> TaskStepOutput:
        raise StreamingNotSupportedError(
            f"{self.__class__.__name__} does not support streaming responses; use run_step instead"
        )

    def finalize_task(self, task: Task, **kwargs) -> None:
        task.memory.set(task.memory.get() + task.state.new_memory.get())
        task.state.new_memory.reset()

    def __repr__(self) -> str:
        return f"OpenAIAgentWorker(llm={self._llm!r}, max_function_calls={self._max_function_calls})"

"""
Agent runner: drives a worker through the steps of each task.
"""
import logging
from collections import deque
from typing import Deque, Dict, List, Optional

from .base import BaseAgent
from .types import AgentChatResponse, AgentWorker, Task, TaskStep, TaskStepOutput
from ..errors import StepInProgressError, TaskNotFoundError
from ..llm.base import ToolChoice
from ..llm.types import ChatMessage
from ..memory import ChatMemoryBuffer

logger = logging.getLogger(__name__)


class AgentRunner(BaseAgent):
    """
    Owns the task lifecycle for an agent worker.

    ``chat`` creates a task from the message, runs steps until the worker
    marks one as done, merges the task's messages into the runner's chat
    history and returns the last step's response. Only one step per task may
    run at a time.
    """

    def __init__(
        self,
        agent_worker: AgentWorker,
        memory: Optional[ChatMemoryBuffer] = None,
    ):
        self.agent_worker = agent_worker
        self.memory = memory if memory is not None else ChatMemoryBuffer()
        self._tasks: Dict[str, Task] = {}
        self._step_queues: Dict[str, Deque[TaskStep]] = {}
        self._completed_steps: Dict[str, List[TaskStepOutput]] = {}

    @property
    def chat_history(self) -> List[ChatMessage]:
        return self.memory.get_all()

    def reset(self) -> None:
        self.memory.reset()

    def create_task(self, input: str) -> Task:
        task = Task(input=input, memory=self.memory)
        initial_step = self.agent_worker.initialize_step(task)
        self._tasks[task.task_id] = task
        self._step_queues[task.task_id] = deque([initial_step])
        self._completed_steps[task.task_id] = []
        logger.debug(f"Created task {task.task_id}")
        return task

    def get_task(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(f"Unknown task: {task_id}") from None

    def delete_task(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)
        self._step_queues.pop(task_id, None)
        self._completed_steps.pop(task_id, None)

    def get_completed_steps(self, task_id: str) -> List[TaskStepOutput]:
        self.get_task(task_id)
        return list(self._completed_steps[task_id])

    async def _run_step(self, task_id: str, stream: bool = False, **kwargs) -> TaskStepOutput:
        task = self.get_task(task_id)
        if task.step_in_progress:
            raise StepInProgressError(f"Task {task_id} already has a step in progress")

        step_queue = self._step_queues[task_id]
        if not step_queue:
            raise ValueError(f"Task {task_id} has no steps left to run")

        step = step_queue.popleft()
        scratch = task.state.new_memory.get()
        sources = list(task.state.sources)
        n_function_calls = task.state.n_function_calls
        task.step_in_progress = True
        try:
            if stream:
                output = await self.agent_worker.stream_step(step, task, **kwargs)
            else:
                output = await self.agent_worker.run_step(step, task, **kwargs)
        except Exception:
            # A failed step leaves the task as it was before the step
            task.state.new_memory.set(scratch)
            task.state.sources[:] = sources
            task.state.n_function_calls = n_function_calls
            step_queue.appendleft(step)
            raise
        finally:
            task.step_in_progress = False

        self._completed_steps[task_id].append(output)
        step_queue.extend(output.next_steps)
        return output

    async def run_step(self, task_id: str, tool_choice: ToolChoice = "auto") -> TaskStepOutput:
        """Run the next queued step of a task."""
        return await self._run_step(task_id, tool_choice=tool_choice)

    async def stream_step(self, task_id: str) -> TaskStepOutput:
        return await self._run_step(task_id, stream=True)

    def finalize_response(self, task_id: str) -> AgentChatResponse:
        """
        Finish a task and return its final response.

        Raises:
            ValueError: If the task's last step is not done yet
        """
        task = self.get_task(task_id)
        completed = self._completed_steps[task_id]
        if not completed or not completed[-1].is_done:
            raise ValueError(f"Task {task_id} is not finished")

        self.agent_worker.finalize_task(task)
        self.delete_task(task_id)
        return completed[-1].output

    async def _chat(self, message: str, stream: bool, tool_choice: ToolChoice = "auto") -> AgentChatResponse:
        task = self.create_task(message)
        try:
            while True:
                if stream:
                    step_output = await self.stream_step(task.task_id)
                else:
                    step_output = await self.run_step(task.task_id, tool_choice=tool_choice)
                if step_output.is_done:
                    break
                # A forced tool choice would otherwise repeat on every step
                tool_choice = "auto"
        except Exception:
            self.delete_task(task.task_id)
            raise
        return self.finalize_response(task.task_id)

    async def chat(self, message: str, tool_choice: ToolChoice = "auto", **kwargs) -> AgentChatResponse:
        return await self._chat(message, stream=False, tool_choice=tool_choice)

    async def stream_chat(self, message: str, **kwargs) -> AgentChatResponse:
        """
        Streaming chat.

        Raises:
            StreamingNotSupportedError: If the worker cannot stream
        """
        return await self._chat(message, stream=True)

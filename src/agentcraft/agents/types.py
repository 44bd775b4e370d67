"""
Core types of the agent task-execution loop.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..memory import ChatMemoryBuffer
from ..tools.types import ToolOutput


class AgentChatResponse(BaseModel):
    """Agent response with the tool outputs it was based on."""

    response: str = ""
    sources: List[ToolOutput] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.response


class TaskState(BaseModel):
    """
    Per-task scratch state owned by the worker.

    ``new_memory`` collects the messages of the running task; they are moved
    into the task's persistent memory when the task is finalized.
    """

    sources: List[ToolOutput] = Field(default_factory=list)
    new_memory: ChatMemoryBuffer = Field(default_factory=ChatMemoryBuffer)
    n_function_calls: int = 0


class Task(BaseModel):
    """One user message and everything the agent does to answer it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    task_id: str = Field(default_factory=lambda: str(uuid4()))
    input: str
    memory: ChatMemoryBuffer = Field(default_factory=ChatMemoryBuffer, description="Persistent chat history")
    state: TaskState = Field(default_factory=TaskState)
    step_in_progress: bool = False


class TaskStep(BaseModel):
    """One LLM-call/tool-dispatch iteration. Only the first step carries input."""

    task_id: str
    step_id: str = Field(default_factory=lambda: str(uuid4()))
    input: Optional[str] = None

    def get_next_step(self, step_id: Optional[str] = None, input: Optional[str] = None) -> 'TaskStep':
        return TaskStep(task_id=self.task_id, step_id=step_id or str(uuid4()), input=input)


class TaskStepOutput(BaseModel):
    output: AgentChatResponse
    task_step: TaskStep
    next_steps: List[TaskStep] = Field(default_factory=list)
    is_done: bool = False

    def __str__(self) -> str:
        return str(self.output)


class AgentWorker(ABC):
    """Runs the individual steps of a task."""

    @abstractmethod
    def initialize_step(self, task: Task, **kwargs) -> TaskStep:
        """Reset the task's scratch state and return its first step."""

    @abstractmethod
    async def run_step(self, step: TaskStep, task: Task, **kwargs) -> TaskStepOutput:
        """Run one step and report whether the task is done."""

    @abstractmethod
    async def stream_step(self, step: TaskStep, task: Task, **kwargs) -> TaskStepOutput:
        """Streaming variant of run_step."""

    @abstractmethod
    def finalize_task(self, task: Task, **kwargs) -> None:
        """Move the task's scratch memory into its persistent memory."""

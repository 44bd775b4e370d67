import logging

from ..llm.types import ChatMessage
from ..memory import ChatMemoryBuffer
from .types import TaskStep

logger = logging.getLogger(__name__)


def add_user_step_to_memory(step: TaskStep, memory: ChatMemoryBuffer, verbose: bool = False) -> None:
    """Append the step input to memory as a user message."""
    memory.put(ChatMessage.user_message(step.input))
    if verbose:
        logger.info(f"Added user message to memory: {step.input}")

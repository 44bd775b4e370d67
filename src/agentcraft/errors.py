"""
Exception hierarchy for agentcraft.
"""


class AgentcraftError(Exception):
    """Base class for all agentcraft errors."""


class AgentConfigurationError(AgentcraftError, ValueError):
    """Raised when an agent or worker is configured inconsistently."""


class StreamingNotSupportedError(AgentConfigurationError):
    """Raised when a streaming response is requested from a worker that cannot stream."""


class StepInProgressError(AgentcraftError, RuntimeError):
    """Raised when a second step is started on a task that is still running one."""


class TaskNotFoundError(AgentcraftError, KeyError):
    """Raised when a task id is unknown to the runner."""


class ToolNotFoundError(AgentcraftError, KeyError):
    """Raised when a tool call references a tool that is not available."""

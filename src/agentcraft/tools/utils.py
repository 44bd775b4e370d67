"""
Helpers for dispatching tool calls requested by an LLM.
"""
import json
import logging
from typing import Any, Dict, Optional, Sequence

from ..errors import ToolNotFoundError
from ..llm.types import ToolCall
from .types import BaseTool, ToolOutput

logger = logging.getLogger(__name__)


def get_function_by_name(tools: Sequence[BaseTool], name: str) -> BaseTool:
    """
    Find a tool by exact name.

    Raises:
        ToolNotFoundError: If no tool has that name
    """
    for tool in tools:
        if tool.metadata.name == name:
            return tool
    raise ToolNotFoundError(f"Tool with name {name} not found")


async def call_tool_with_error_handling(
    tool: BaseTool,
    input_dict: Dict[str, Any],
    error_message: Optional[str] = None,
    raise_error: bool = False,
) -> ToolOutput:
    """
    Invoke a tool, turning any failure into an error ToolOutput.

    Args:
        tool: The tool to call
        input_dict: Parsed arguments
        error_message: Message to use instead of the exception text
        raise_error: Re-raise instead of wrapping

    Returns:
        The tool output, with ``is_error`` set on failure
    """
    try:
        output = await tool.acall(**input_dict)
        if not isinstance(output, ToolOutput):
            output = ToolOutput(content=str(output), tool_name=tool.metadata.name, raw_input=input_dict, raw_output=output)
        return output
    except Exception as e:
        if raise_error:
            raise
        logger.warning(f"Tool {tool.metadata.name} failed: {e}")
        return ToolOutput(
            content=error_message or f"Encountered error: {e}",
            tool_name=tool.metadata.name,
            raw_input=input_dict,
            raw_output=e,
            is_error=True,
        )


def _error_output(tool_call: ToolCall, message: str, error: Exception) -> ToolOutput:
    logger.warning(message)
    return ToolOutput(
        content=message,
        tool_name=tool_call.name,
        raw_input={"arguments": tool_call.arguments},
        raw_output=error,
        is_error=True,
    )


async def call_tool_by_name(tools: Sequence[BaseTool], tool_call: ToolCall) -> ToolOutput:
    """
    Resolve, parse and invoke one tool call. Never raises.

    Unknown tool names, malformed JSON arguments and invocation failures all
    come back as ToolOutputs with ``is_error=True``.
    """
    try:
        tool = get_function_by_name(tools, tool_call.name)
    except ToolNotFoundError as e:
        return _error_output(tool_call, f"Tool with name {tool_call.name} not found", e)

    try:
        arguments = json.loads(tool_call.arguments or "{}")
    except json.JSONDecodeError as e:
        return _error_output(tool_call, f"Invalid JSON arguments for tool {tool_call.name}: {e}", e)
    if not isinstance(arguments, dict):
        error = TypeError(f"expected a JSON object, got {type(arguments).__name__}")
        return _error_output(tool_call, f"Invalid JSON arguments for tool {tool_call.name}: {error}", error)

    return await call_tool_with_error_handling(tool, arguments)

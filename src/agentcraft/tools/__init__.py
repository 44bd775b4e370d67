from .types import BaseTool, ToolMetadata, ToolOutput
from .function_tool import FunctionTool
from .utils import call_tool_by_name, call_tool_with_error_handling, get_function_by_name
from .retriever_tool import RetrieverTool

__all__ = [
    'BaseTool',
    'ToolMetadata',
    'ToolOutput',
    'FunctionTool',
    'RetrieverTool',
    'call_tool_by_name',
    'call_tool_with_error_handling',
    'get_function_by_name',
]

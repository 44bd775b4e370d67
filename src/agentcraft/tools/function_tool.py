import inspect
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, PrivateAttr, create_model

from .types import BaseTool, ToolMetadata, ToolOutput


def _build_args_model(fn: Callable, name: str) -> Type[BaseModel]:
    """Create a pydantic model mirroring the keyword parameters of ``fn``."""
    fields: Dict[str, Any] = {}
    for param in inspect.signature(fn).parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        annotation = Any if param.annotation is inspect.Parameter.empty else param.annotation
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param.name] = (annotation, default)
    return create_model(f"{name}_args", **fields)


def _schema_for(args_model: Type[BaseModel]) -> Dict[str, Any]:
    schema = args_model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


class FunctionTool(BaseTool):
    """
    Tool wrapping a plain Python callable.

    The JSON parameter schema is derived from the function signature, and
    incoming arguments are validated against it before the call. Both regular
    and ``async`` functions are supported.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    fn: Callable[..., Any]
    _args_model: Type[BaseModel] = PrivateAttr()

    def __init__(self, fn: Callable[..., Any], metadata: ToolMetadata, args_model: Type[BaseModel]):
        super().__init__(fn=fn, metadata=metadata)
        self._args_model = args_model

    @classmethod
    def from_defaults(
        cls,
        fn: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> 'FunctionTool':
        """
        Create a FunctionTool from a callable.

        Args:
            fn: The function to expose
            name: Tool name (default: the function name)
            description: Tool description (default: the docstring)

        Returns:
            FunctionTool instance
        """
        name = name or fn.__name__
        args_model = _build_args_model(fn, name)
        if description is None:
            description = inspect.getdoc(fn) or f"{name}{inspect.signature(fn)}"
        metadata = ToolMetadata(name=name, description=description, parameters=_schema_for(args_model))
        return cls(fn=fn, metadata=metadata, args_model=args_model)

    async def acall(self, **kwargs) -> ToolOutput:
        args = self._args_model.model_validate(kwargs)
        call_kwargs = {field: getattr(args, field) for field in self._args_model.model_fields}
        result = self.fn(**call_kwargs)
        if inspect.isawaitable(result):
            result = await result
        return ToolOutput(
            content=str(result),
            tool_name=self.metadata.name,
            raw_input=kwargs,
            raw_output=result,
        )

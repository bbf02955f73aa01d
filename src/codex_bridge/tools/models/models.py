from typing import Optional, Any, Callable, Type

from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool exposed over MCP.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The callable implementing the tool's logic. May be a coroutine function.
        parameters: The JSON schema advertised as the tool's ``inputSchema``.
        args_model: Optional Pydantic model used for validating and coercing arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None

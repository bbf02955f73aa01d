from .models import ToolDefinition, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry, MCPToolRegistry
from .schema import SchemaValidator
from .dispatcher import ToolDispatcher

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "MCPToolRegistry",
    "SchemaValidator",
    "ToolDispatcher",
]

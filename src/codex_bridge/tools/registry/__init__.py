"""Tool registries: the provider-neutral base and the MCP flavour served to clients."""

from .base import ToolRegistry
from .mcp_registry import MCPToolRegistry

__all__ = ["ToolRegistry", "MCPToolRegistry"]

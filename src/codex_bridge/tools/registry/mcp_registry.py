from typing import List

from mcp.types import Tool

from .base import ToolRegistry


class MCPToolRegistry(ToolRegistry):
    """Registry whose tool listing is the ``tools/list`` payload of an MCP server."""

    @property
    def tool_object(self) -> List[Tool]:
        """Returns one MCP ``Tool`` per registered definition, in registration order."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.parameters or {"type": "object", "properties": {}},
            )
            for tool in self.tools.values()
        ]

"""Data models for tool dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from mcp.types import CallToolResult, TextContent


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a single inbound tool call."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of a tool call: one text block and an error flag."""

    name: str
    text: str
    is_error: bool = False

    def to_envelope(self) -> CallToolResult:
        """Wrap the result in the MCP response envelope.

        Returns:
            A ``CallToolResult`` with a single text content block.
        """
        return CallToolResult(content=[TextContent(type="text", text=self.text)], isError=self.is_error)

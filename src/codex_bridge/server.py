"""MCP stdio server wiring the Codex tools to a dispatcher."""

import sys
from typing import Any, Dict, List, Optional

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from .codex import CodexTools, EnvironmentProbe, SubprocessRunner
from .config import BridgeSettings
from .logger import get_logger
from .tools import MCPToolRegistry, ToolDispatcher

logger = get_logger(__name__)

READY_MESSAGE = "Codex Bridge MCP Server running on stdio"


class CodexBridgeServer:
    """One MCP server bound to one dispatcher for the lifetime of the process."""

    def __init__(self, settings: BridgeSettings, dispatcher: ToolDispatcher, registry: MCPToolRegistry) -> None:
        """Initialize the server and register its request handlers.

        Args:
            settings: Server identity and runtime limits.
            dispatcher: Dispatcher that answers ``tools/call``.
            registry: Registry whose listing answers ``tools/list``.
        """
        self.settings = settings
        self.dispatcher = dispatcher
        self.registry = registry
        self.server: Server = Server(settings.server_name, version=settings.server_version)
        self._register_handlers()

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> "CodexBridgeServer":
        """Build the full object graph: runners, probe, tools, registry and dispatcher."""
        runner = SubprocessRunner(timeout=settings.execution_timeout, max_output_bytes=settings.max_output_bytes)
        probe = EnvironmentProbe(runner, executable=settings.executable, probe_timeout=settings.probe_timeout)
        tools = CodexTools(probe, runner, executable=settings.executable)

        registry = MCPToolRegistry()
        tools.register_into(registry)
        return cls(settings, ToolDispatcher(registry), registry)

    def _register_handlers(self) -> None:
        # Arguments are validated by the dispatcher so malformed input yields the same envelope.
        @self.server.list_tools()  # type: ignore[misc]
        async def list_tools() -> List[Tool]:
            return self.registry.tool_object

        @self.server.call_tool(validate_input=False)  # type: ignore[misc]
        async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
            return await self.dispatcher.dispatch(name, arguments)

    async def run(self) -> None:
        """Serve over stdio until the client disconnects."""
        logger.info("Starting %s %s.", self.settings.server_name, self.settings.server_version)
        try:
            async with stdio_server() as (read_stream, write_stream):
                print(READY_MESSAGE, file=sys.stderr, flush=True)
                await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        finally:
            logger.info("%s stopped.", self.settings.server_name)

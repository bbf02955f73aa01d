"""Codex Bridge - an MCP server exposing the OpenAI Codex CLI as tools."""

from .config import BridgeSettings
from .codex import CodexTools, EnvironmentProbe, ExecutionOptions, SubprocessRunner, SubprocessResult
from .codex import build_command, build_command_line
from .logger import get_logger, setup_logging
from .server import CodexBridgeServer
from .tools import MCPToolRegistry, ToolDispatcher, ToolRegistry

__all__ = [
    "BridgeSettings",
    "CodexTools",
    "EnvironmentProbe",
    "ExecutionOptions",
    "SubprocessRunner",
    "SubprocessResult",
    "build_command",
    "build_command_line",
    "get_logger",
    "setup_logging",
    "CodexBridgeServer",
    "MCPToolRegistry",
    "ToolDispatcher",
    "ToolRegistry",
]

"""Codex CLI integration: command construction, subprocess execution, probing and the tool handlers."""

from .command import ExecutionOptions, build_command, build_command_line
from .runner import SubprocessRunner, SubprocessResult
from .probe import EnvironmentProbe
from .handlers import CodexTools

__all__ = [
    "ExecutionOptions",
    "build_command",
    "build_command_line",
    "SubprocessRunner",
    "SubprocessResult",
    "EnvironmentProbe",
    "CodexTools",
]

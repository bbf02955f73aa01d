"""
Custom exception classes for the codex bridge.

This module defines the hierarchy of exceptions raised while registering and
dispatching tools, while running the Codex CLI as a subprocess, and by the tool
handlers when a call must be answered with an error envelope.
"""


class CodexBridgeError(Exception):
    """Base exception for all bridge errors."""

    pass


class ToolRegistrationError(CodexBridgeError):
    """Raised when there is an error registering a tool."""

    pass


class ToolValidationError(CodexBridgeError):
    """Raised when tool arguments or a tool definition are invalid."""

    pass


class UnknownToolError(CodexBridgeError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class CodexToolError(CodexBridgeError):
    """Raised by a tool handler; the message is the complete user-facing response text."""

    pass


class NotAuthenticatedError(CodexToolError):
    """Raised when the Codex CLI has no credential file."""

    pass


class NotInstalledError(CodexToolError):
    """Raised when the Codex CLI executable cannot be run."""

    pass


class DirectoryNotFoundError(CodexToolError):
    """Raised when a requested project directory does not exist."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class CodexExecutionError(CodexToolError):
    """Raised when a Codex CLI run could not complete."""

    pass


class SubprocessRunError(CodexBridgeError):
    """Base exception for subprocess failures.

    Attributes:
        stdout: Output captured before the failure, decoded as text.
        stderr: Error output captured before the failure, decoded as text.
    """

    def __init__(self, message: str, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr


class SubprocessTimeoutError(SubprocessRunError):
    """Raised when a subprocess exceeds its wall-clock timeout."""

    pass


class BufferOverflowError(SubprocessRunError):
    """Raised when a subprocess produces more output than the capture limit."""

    pass


class SubprocessSpawnError(SubprocessRunError):
    """Raised when a subprocess could not be started at all."""

    pass

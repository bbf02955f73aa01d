"""Export the exception hierarchy shared by the dispatcher, handlers and subprocess runner."""

from .exceptions import (
    CodexBridgeError,
    ToolRegistrationError,
    ToolValidationError,
    UnknownToolError,
    CodexToolError,
    NotAuthenticatedError,
    NotInstalledError,
    DirectoryNotFoundError,
    CodexExecutionError,
    SubprocessRunError,
    SubprocessTimeoutError,
    BufferOverflowError,
    SubprocessSpawnError,
)

__all__ = [
    "CodexBridgeError",
    "ToolRegistrationError",
    "ToolValidationError",
    "UnknownToolError",
    "CodexToolError",
    "NotAuthenticatedError",
    "NotInstalledError",
    "DirectoryNotFoundError",
    "CodexExecutionError",
    "SubprocessRunError",
    "SubprocessTimeoutError",
    "BufferOverflowError",
    "SubprocessSpawnError",
]

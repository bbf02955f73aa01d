"""Build Codex CLI invocations from execution options."""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

ExecutionMode = Literal["interactive", "exec", "non-interactive"]
SandboxMode = Literal["read-only", "workspace-write", "danger-full-access"]

DEFAULT_EXECUTABLE = "codex"
DEFAULT_MODE: ExecutionMode = "exec"
DEFAULT_MODEL = "gpt-4"
DEFAULT_SANDBOX: SandboxMode = "workspace-write"

# Arguments placed between the executable and the shared --model/--sandbox flags.
_MODE_PREFIXES: Dict[str, Tuple[str, ...]] = {
    "interactive": (),
    "exec": ("exec",),
    "non-interactive": ("exec", "--ask-for-approval", "never"),
}


class ExecutionOptions(BaseModel):
    """Fully resolved options for one ``codex_execute`` call.

    Attributes:
        prompt: Task description handed to Codex.
        mode: How Codex is launched.
        working_directory: Directory the run happens in; the server's cwd when None.
        model: Model identifier passed through ``--model``.
        sandbox: Permission tier passed through ``--sandbox``.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    prompt: str = Field(min_length=1)
    mode: ExecutionMode = DEFAULT_MODE
    working_directory: Optional[str] = None
    model: str = DEFAULT_MODEL
    sandbox: SandboxMode = DEFAULT_SANDBOX


def build_command(options: ExecutionOptions, executable: str = DEFAULT_EXECUTABLE) -> List[str]:
    """Build the argument vector for a Codex run.

    The prompt is a single argument and is never interpreted by a shell.
    Unrecognised modes fall back to the ``exec`` shape.

    Args:
        options: The resolved execution options.
        executable: Name or path of the Codex CLI.

    Returns:
        The argument vector, executable first.
    """
    prefix = _MODE_PREFIXES.get(options.mode, _MODE_PREFIXES["exec"])
    return [
        executable,
        *prefix,
        "--model",
        options.model,
        "--sandbox",
        options.sandbox,
        options.prompt,
    ]


def build_command_line(options: ExecutionOptions, executable: str = DEFAULT_EXECUTABLE) -> str:
    """Render the command as the text a user would type, prompt in double quotes.

    Only used for display and logging; ``build_command`` is what gets executed.

    Args:
        options: The resolved execution options.
        executable: Name or path of the Codex CLI.

    Returns:
        e.g. ``codex exec --model gpt-4 --sandbox workspace-write "hello"``.
    """
    *flags, prompt = build_command(options, executable)
    return f'{" ".join(flags)} "{prompt}"'


def version_command(executable: str = DEFAULT_EXECUTABLE) -> List[str]:
    return [executable, "--version"]

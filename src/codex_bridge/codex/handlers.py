"""The four Codex tools exposed by the bridge.

Each public coroutine is registered as an MCP tool; its signature defines the
input schema and its docstring the tool description. Outcomes that must be
reported as errors are raised as ``CodexToolError`` subclasses whose message
is the complete response text.
"""

# No postponed annotations: the registry reads the Annotated metadata at runtime.
import os
from pathlib import Path
from typing import Annotated, Optional

from pydantic import Field

from ..exceptions import (
    CodexExecutionError,
    DirectoryNotFoundError,
    NotAuthenticatedError,
    NotInstalledError,
    SubprocessRunError,
)
from ..logger import get_logger
from ..tools.registry import ToolRegistry
from . import formatter
from .command import (
    DEFAULT_EXECUTABLE,
    DEFAULT_MODE,
    DEFAULT_MODEL,
    DEFAULT_SANDBOX,
    ExecutionMode,
    ExecutionOptions,
    SandboxMode,
    build_command,
    build_command_line,
)
from .probe import EnvironmentProbe
from .runner import SubprocessRunner

logger = get_logger(__name__)

GIT_MARKER = ".git"
AGENTS_FILE = "AGENTS.md"


class CodexTools:
    """Handlers for ``codex_execute``, ``codex_status``, ``codex_login`` and ``codex_project_init``."""

    def __init__(
        self,
        probe: EnvironmentProbe,
        runner: SubprocessRunner,
        executable: str = DEFAULT_EXECUTABLE,
    ) -> None:
        self.probe = probe
        self.runner = runner
        self.executable = executable

    def register_into(self, registry: ToolRegistry) -> None:
        """Register all four tools, in the order clients list them."""
        registry.register(self.codex_execute)
        registry.register(self.codex_status)
        registry.register(self.codex_login)
        registry.register(self.codex_project_init)

    async def codex_execute(
        self,
        prompt: Annotated[str, Field(description="Prompt or task description for Codex", min_length=1)],
        mode: Annotated[
            ExecutionMode,
            Field(
                description="Execution mode (interactive: conversational, exec: non-interactive run, "
                "non-interactive: auto-approve)"
            ),
        ] = DEFAULT_MODE,
        working_directory: Annotated[
            Optional[str], Field(description="Directory to work in (optional)")
        ] = None,
        model: Annotated[str, Field(description="Model to use (e.g. gpt-4, o1-preview)")] = DEFAULT_MODEL,
        sandbox: Annotated[SandboxMode, Field(description="Sandbox mode")] = DEFAULT_SANDBOX,
    ) -> str:
        """Run a coding task with the OpenAI Codex CLI."""
        if not self.probe.is_authenticated():
            raise NotAuthenticatedError(formatter.not_authenticated())

        options = ExecutionOptions(
            prompt=prompt,
            mode=mode,
            working_directory=working_directory,
            model=model,
            sandbox=sandbox,
        )
        logger.debug("Running: %s", build_command_line(options, self.executable))

        try:
            result = await self.runner.run(
                build_command(options, self.executable), working_directory=options.working_directory
            )
        except SubprocessRunError as exc:
            raise CodexExecutionError(formatter.execution_failure(exc)) from exc

        if result.exited_non_zero:
            logger.info("Codex exited with status %d.", result.returncode)
            raise CodexExecutionError(
                formatter.execution_exit_failure(result.stdout, result.stderr, result.returncode)
            )
        return formatter.execution_output(result.stdout, result.stderr)

    async def codex_status(self) -> str:
        """Check Codex CLI installation and authentication status."""
        installed = await self.probe.is_installed()
        authenticated = self.probe.is_authenticated()

        version: Optional[str] = None
        if installed:
            try:
                version = await self.probe.version()
            except (SubprocessRunError, RuntimeError) as exc:
                logger.warning("Codex is installed but its version could not be read: %s", exc)

        auth_modified = None
        if authenticated:
            try:
                auth_modified = self.probe.auth_modified_time()
            except OSError as exc:
                logger.warning("Could not read the Codex auth file: %s", exc)

        return formatter.status_report(installed, version, authenticated, auth_modified)

    async def codex_login(
        self,
        headless: Annotated[bool, Field(description="Whether the server runs in a headless environment")] = False,
    ) -> str:
        """Help with signing in to the Codex CLI with a ChatGPT account."""
        if not await self.probe.is_installed():
            raise NotInstalledError(formatter.not_installed())
        return formatter.login_instructions(headless)

    async def codex_project_init(
        self,
        working_directory: Annotated[Optional[str], Field(description="Project directory path")] = None,
    ) -> str:
        """Prepare a project directory for working with Codex."""
        target_dir = working_directory or os.getcwd()
        target = Path(target_dir)

        if target.exists() and not target.is_dir():
            raise DirectoryNotFoundError(formatter.not_a_directory(target_dir), target_dir)
        if not target.is_dir():
            raise DirectoryNotFoundError(formatter.directory_not_found(target_dir), target_dir)

        is_git_repo = (target / GIT_MARKER).exists()
        has_agents_file = (target / AGENTS_FILE).exists()
        logger.debug("Project %s: git=%s, AGENTS.md=%s", target_dir, is_git_repo, has_agents_file)

        return formatter.project_init_report(target_dir, is_git_repo, has_agents_file)

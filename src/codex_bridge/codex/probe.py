"""Probe whether the Codex CLI is installed and signed in."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from ..exceptions import SubprocessRunError
from ..logger import get_logger
from .command import DEFAULT_EXECUTABLE, version_command
from .runner import SubprocessResult, SubprocessRunner

logger = get_logger(__name__)

HOME_ENV_VARS = ("HOME", "USERPROFILE")
AUTH_FILE_PARTS = (".codex", "auth.json")


class EnvironmentProbe:
    """Answers installation and authentication questions by looking at the machine.

    Nothing is cached; every call re-runs the version command or re-reads the
    filesystem, so the answers track changes made between tool calls.
    """

    def __init__(
        self,
        runner: SubprocessRunner,
        executable: str = DEFAULT_EXECUTABLE,
        probe_timeout: Optional[float] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._runner = runner
        self._executable = executable
        self._probe_timeout = probe_timeout
        self._environ = environ

    async def _run_version(self) -> SubprocessResult:
        return await self._runner.run(version_command(self._executable), timeout=self._probe_timeout)

    async def is_installed(self) -> bool:
        """Return True only if ``codex --version`` exits successfully. Never raises."""
        try:
            result = await self._run_version()
        except SubprocessRunError as exc:
            logger.debug("Version probe failed: %s", exc)
            return False
        return not result.exited_non_zero

    async def version(self) -> str:
        """Return the version string reported by the CLI.

        Raises:
            SubprocessRunError: If the version command could not be run.
            RuntimeError: If it exited with a non-zero status.
        """
        result = await self._run_version()
        if result.exited_non_zero:
            raise RuntimeError(f"'{self._executable} --version' exited with status {result.returncode}")
        return result.stdout.strip()

    def home_directory(self) -> str:
        """Resolve the home directory from HOME, then USERPROFILE; empty string if neither is set."""
        env = os.environ if self._environ is None else self._environ
        for var in HOME_ENV_VARS:
            value = env.get(var)
            if value:
                return value
        return ""

    def auth_file_path(self) -> Path:
        return Path(self.home_directory(), *AUTH_FILE_PARTS)

    def is_authenticated(self) -> bool:
        """Return whether the credential file exists. A missing home directory simply yields False."""
        try:
            return self.auth_file_path().exists()
        except OSError as exc:
            logger.warning("Could not check the Codex auth file: %s", exc)
            return False

    def auth_modified_time(self) -> datetime:
        """Return the local modification time of the credential file.

        Raises:
            OSError: If the file cannot be stat'ed.
        """
        return datetime.fromtimestamp(self.auth_file_path().stat().st_mtime)

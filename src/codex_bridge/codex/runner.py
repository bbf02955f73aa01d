"""Run Codex CLI subprocesses with a wall-clock timeout and an output cap."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import DEFAULT_EXECUTION_TIMEOUT, DEFAULT_MAX_OUTPUT_BYTES
from ..exceptions import BufferOverflowError, SubprocessSpawnError, SubprocessTimeoutError
from ..logger import get_logger

logger = get_logger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class SubprocessResult:
    """Output of a subprocess that ran to completion.

    Timeouts never produce a result; they raise ``SubprocessTimeoutError``.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def exited_non_zero(self) -> bool:
        return self.returncode != 0


class _OutputCapture:
    """Accumulates both output streams and enforces the shared byte cap."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.stdout = bytearray()
        self.stderr = bytearray()

    @property
    def total(self) -> int:
        return len(self.stdout) + len(self.stderr)

    def text(self, buffer: bytearray) -> str:
        return bytes(buffer).decode("utf-8", errors="replace")

    async def drain(self, stream: Optional[asyncio.StreamReader], buffer: bytearray) -> None:
        if stream is None:
            return
        while True:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                return
            buffer.extend(chunk)
            if self.total > self.limit:
                raise BufferOverflowError(
                    f"Output exceeded the {self.limit} byte limit.",
                    stdout=self.text(self.stdout),
                    stderr=self.text(self.stderr),
                )


class SubprocessRunner:
    """Executes argument vectors without a shell.

    Each run is awaited to completion. There are no retries: a failed run is
    reported once through an exception carrying whatever output was captured.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_EXECUTION_TIMEOUT,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    ) -> None:
        """Initialize the runner.

        Args:
            timeout: Default wall-clock limit in seconds.
            max_output_bytes: Cap on combined stdout and stderr.
        """
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes

    async def run(
        self,
        argv: Sequence[str],
        working_directory: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> SubprocessResult:
        """Run a command and capture its output.

        Args:
            argv: Argument vector, executable first.
            working_directory: Directory to run in; the current directory when None.
            timeout: Overrides the runner's default timeout for this call.

        Returns:
            Decoded stdout and stderr plus the exit status. A non-zero exit is not an error.

        Raises:
            SubprocessSpawnError: If the process could not be started.
            SubprocessTimeoutError: If the process outlived the timeout. It is killed.
            BufferOverflowError: If the process wrote more than the output cap. It is killed.
        """
        limit = self.timeout if timeout is None else timeout
        args: List[str] = list(argv)
        logger.debug("Starting subprocess %s (cwd=%s, timeout=%ss).", args[0], working_directory, limit)

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=working_directory,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SubprocessSpawnError(f"Failed to start '{args[0]}': {exc}") from exc

        capture = _OutputCapture(self.max_output_bytes)
        try:
            returncode = await asyncio.wait_for(self._collect(process, capture), timeout=limit)
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.warning("Subprocess %s timed out after %ss.", args[0], limit)
            raise SubprocessTimeoutError(
                f"Command timed out after {limit:g} seconds.",
                stdout=capture.text(capture.stdout),
                stderr=capture.text(capture.stderr),
            ) from None
        except BufferOverflowError:
            await self._kill(process)
            logger.warning("Subprocess %s exceeded the %d byte output cap.", args[0], self.max_output_bytes)
            raise

        result = SubprocessResult(
            stdout=capture.text(capture.stdout),
            stderr=capture.text(capture.stderr),
            returncode=returncode,
        )
        logger.debug(
            "Subprocess %s exited with %d (%d bytes stdout, %d bytes stderr).",
            args[0],
            returncode,
            len(capture.stdout),
            len(capture.stderr),
        )
        return result

    @staticmethod
    async def _collect(process: asyncio.subprocess.Process, capture: _OutputCapture) -> int:
        readers = [
            asyncio.ensure_future(capture.drain(process.stdout, capture.stdout)),
            asyncio.ensure_future(capture.drain(process.stderr, capture.stderr)),
        ]
        try:
            await asyncio.gather(*readers)
        finally:
            for reader in readers:
                reader.cancel()
        return await process.wait()

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

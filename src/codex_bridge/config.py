"""Runtime settings for the codex bridge server."""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .logger import get_logger

logger = get_logger(__name__)

_ENV_PREFIX = "CODEX_BRIDGE_"

DEFAULT_EXECUTION_TIMEOUT = 300.0
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024


class BridgeSettings(BaseModel):
    """
    Settings controlling how the Codex CLI is located and executed.

    Attributes:
        server_name: Name announced to MCP clients during initialization.
        server_version: Version announced to MCP clients during initialization.
        executable: Name or path of the Codex CLI executable.
        execution_timeout: Wall-clock limit in seconds for a ``codex_execute`` run.
        probe_timeout: Wall-clock limit in seconds for the ``--version`` probe.
        max_output_bytes: Cap on the combined stdout and stderr captured from a run.
        log_level: Level passed to ``setup_logging`` at startup.
    """

    model_config = ConfigDict(frozen=True)

    server_name: str = "codex-bridge-mcp-server"
    server_version: str = "1.0.0"
    executable: str = Field(default="codex", min_length=1)
    execution_timeout: float = Field(default=DEFAULT_EXECUTION_TIMEOUT, gt=0)
    probe_timeout: float = Field(default=30.0, gt=0)
    max_output_bytes: int = Field(default=DEFAULT_MAX_OUTPUT_BYTES, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BridgeSettings":
        """Build settings from ``CODEX_BRIDGE_*`` environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            The validated settings.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        overrides = {
            "executable": env.get(f"{_ENV_PREFIX}EXECUTABLE"),
            "execution_timeout": env.get(f"{_ENV_PREFIX}TIMEOUT"),
            "probe_timeout": env.get(f"{_ENV_PREFIX}PROBE_TIMEOUT"),
            "max_output_bytes": env.get(f"{_ENV_PREFIX}MAX_OUTPUT_BYTES"),
            "log_level": env.get(f"{_ENV_PREFIX}LOG_LEVEL", "").upper() or None,
        }
        values = {key: value for key, value in overrides.items() if value not in (None, "")}
        if values:
            logger.debug("Settings overridden from environment: %s", sorted(values))
        return cls.model_validate(values)

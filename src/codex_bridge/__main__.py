"""Process entry point: ``codex-bridge-mcp`` or ``python -m codex_bridge``."""

import asyncio

from dotenv import load_dotenv, find_dotenv

from .config import BridgeSettings
from .logger import get_logger, setup_logging
from .server import CodexBridgeServer

logger = get_logger(__name__)


def main() -> None:
    """Load settings, configure logging and serve until stdin closes."""
    load_dotenv(find_dotenv(usecwd=True))
    settings = BridgeSettings.from_env()
    setup_logging(settings.log_level)

    server = CodexBridgeServer.from_settings(settings)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server stopped by user.")


if __name__ == "__main__":
    main()

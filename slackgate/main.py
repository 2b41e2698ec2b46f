"""Slackgate — Main entry point."""

import asyncio
import logging
import sys
from typing import Optional

from .config import GatewaySettings, load_settings
from .errors import StartupFailure
from .gateway import Gateway
from .slack import SlackClient

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("slackgate")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Send logs to stderr (stdout carries the protocol) and optionally a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(format=_log_format, handlers=handlers, force=True)
    logging.getLogger("slackgate").setLevel(level.upper())


def create_client(settings: GatewaySettings) -> SlackClient:
    """Open a Slack client with the configured credentials.

    Raises:
        StartupFailure: no usable credentials
    """
    credentials = settings.credentials()
    logger.info(f"Using {credentials.scheme} authentication")
    return SlackClient(
        token=credentials.token,
        cookie=credentials.cookie,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )


async def run(settings: Optional[GatewaySettings] = None) -> None:
    """Build the directory, then serve tool calls until stdin closes."""
    from .server import serve

    settings = settings or load_settings()
    async with create_client(settings) as client:
        gateway = await Gateway.start(client, settings)
        await serve(gateway)


def main(debug: bool = False) -> None:
    """Entry point."""
    configure_logging("DEBUG" if debug else "INFO")
    try:
        settings = load_settings()
    except ValueError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging("DEBUG" if debug else settings.log_level, settings.log_file)
    try:
        asyncio.run(run(settings))
    except StartupFailure as e:
        logger.critical(f"Fatal error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

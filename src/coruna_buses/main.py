"""Main entry point for the A Coruña buses web service."""

import asyncio
import logging
import sys

import aiohttp
import uvicorn

from coruna_buses.adapters.config import AppConfig
from coruna_buses.adapters.web import create_app
from coruna_buses.bootstrap import build_transit_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
        settings = config.to_transit_settings()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(
        f"Primary stop {settings.primary_stop_id}, interest lines: "
        f"{', '.join(settings.interest_lines) or 'all'}"
    )

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        service = build_transit_service(settings, session)
        app = create_app(service)

        server = uvicorn.Server(
            uvicorn.Config(app, host=config.host, port=config.port, log_level="info")
        )
        try:
            await server.serve()
        except KeyboardInterrupt:
            logger.info("Shutting down...")


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()

"""
League Hub API - Main entry point.

Serves discovery, location and chat endpoints for the mobile app.
Data source (Supabase or in-memory demo) is picked from DATA_SOURCE.
"""

import asyncio
import logging
import sys
from aiohttp import web
from adapters.api.app import create_api_app
from adapters.api.loader import build_container
from config.features import features
from config.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if features.DEBUG_MODE:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Silence noisy HTTP debug logs
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)


async def main():
    """Main function - starts the API server and runs until cancelled."""

    logger.info("=== League Hub API Starting ===")
    logger.info("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.info(f"  {key}: {value}")

    try:
        container = build_container()
    except (RuntimeError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    app = create_api_app(container)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.api_host, settings.api_port)
    await site.start()
    logger.info(f"API running on {settings.api_host}:{settings.api_port} (env: {settings.env}, data source: {settings.data_source})")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
        logger.info("API server stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("API stopped by user (Ctrl+C)")
    except SystemExit as e:
        sys.exit(e.code)

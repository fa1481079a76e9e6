"""
Plunge server entry point

    plunge                      # packaged config.yaml
    PLUNGE_CONFIG=/etc/plunge.yaml plunge

Loads configuration, builds the service container around the ScreenLogic
client and serves the API with uvicorn.
"""

import asyncio
import sys

import uvicorn
from fastapi import FastAPI

from plunge.api.main import create_app
from plunge.controller.controller_client_factory import create_controller_client
from plunge.managers.config_manager import ConfigManager
from plunge.models.enums import LogCategory
from plunge.services.service_container import ServiceContainer
from plunge.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


# ---------------------------------------------------------------------------
# API SERVER RUNNER
# ---------------------------------------------------------------------------

async def run_api_server(app: FastAPI, host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run FastAPI/Uvicorn in the current event loop until interrupted"""
    config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        loop="asyncio",
        log_level="info",
        access_log=False,
    )
    server = uvicorn.Server(config)

    try:
        log.info(f"Starting API server on {host}:{port}")
        await server.serve()
    except asyncio.CancelledError:
        log.debug("API server cancelled")
        raise


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def run() -> None:
    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config = config_manager.load()

    configure_logger(
        min_level=config.logging.log_level,
        use_colors=config.logging.use_colors
    )

    log.info("Initializing services...")
    services = ServiceContainer.build(
        config=config,
        client=create_controller_client(config.controller),
        demo_data_path=config_manager.demo_data_path,
    )

    app = create_app(
        services=services,
        docs_enabled=config.server.docs_enabled,
        cors_origins=config.server.cors_origins,
    )

    await run_api_server(app, host=config.server.host, port=config.server.port)
    log.info("Plunge shut down cleanly.")


def main() -> int:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}", error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

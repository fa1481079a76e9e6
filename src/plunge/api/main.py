"""
FastAPI Application Factory

Assembles the bridge API:
- Routes (circuits, bodies, equipment, connection, system) under /api
- CORS
- Exception handlers (flat {"error", "message"} bodies)
- Service container used by the route dependencies

Used by plunge.main for the real server and by the tests with a fake
controller client.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plunge import __version__
from plunge.api.dependencies import set_service_container
from plunge.api.middleware.error_handler import register_exception_handlers
from plunge.api.routes import bodies, circuits, connection, equipment, system
from plunge.models.enums import LogCategory
from plunge.services.service_container import ServiceContainer
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def create_app(
    services: Optional[ServiceContainer] = None,
    title: str = "Plunge Pool Bridge",
    description: str = "REST command bridge for Pentair ScreenLogic pool controllers",
    version: str = __version__,
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        services: Service container for the route dependencies (may be set later
                  via set_service_container)
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application ready to run
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    log.info(f"Creating FastAPI app: {title} v{version}")

    if services is not None:
        set_service_container(services)

    # =========================================================================
    # CORS Configuration
    # =========================================================================
    # Credential headers are custom, so allow_headers must not be narrowed.

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    log.debug(f"CORS enabled for origins: {cors_origins}")

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    for router in (circuits.router, bodies.router, equipment.router, connection.router, system.router):
        app.include_router(router, prefix="/api")

    log.debug(
        "Routes registered: /api/circuit, /api/temp, /api/heat, /api/lights, /api/status, "
        "/api/connection, /api/config, /api/system-time, /api/delay"
    )

    # =========================================================================
    # Health Check Endpoint
    # =========================================================================

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        """Simple health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "plunge-bridge",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": title,
                "docs": "/docs" if docs_enabled else None,
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created successfully: {title}")

    return app

"""
API Dependencies - Service container and auth mode for FastAPI endpoints

Pattern:
1. main.py (or a test) builds the ServiceContainer
2. create_app() calls set_service_container()
3. Endpoints use get_service_container / get_auth_mode via Depends()

Example:
    @router.get("/status")
    async def get_status(
        services: ServiceContainer = Depends(get_service_container),
        mode: AuthMode = Depends(get_auth_mode),
    ):
        ...
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from plunge.api.middleware.error_handler import InvalidCredentialsError
from plunge.api.services.command_service import CommandAPIService
from plunge.models.auth import AuthMode
from plunge.services.credential_resolver import CredentialsError
from plunge.services.service_container import ServiceContainer


# Global service container (set by create_app)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """
    Store the service container for API access.

    Args:
        services: The ServiceContainer, or None to clear it
    """
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Bridge may still be starting."
        )
    return _service_container


async def get_auth_mode(
    request: Request,
    services: ServiceContainer = Depends(get_service_container)
) -> AuthMode:
    """Resolve LiveMode/DemoMode from the credential headers of this request"""
    try:
        return services.resolver.resolve(request.headers)
    except CredentialsError as e:
        raise InvalidCredentialsError(e.message)


async def get_command_service(
    services: ServiceContainer = Depends(get_service_container)
) -> CommandAPIService:
    return CommandAPIService(bridge=services.bridge, demo_store=services.demo_store)

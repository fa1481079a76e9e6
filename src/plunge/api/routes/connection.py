"""
Connection Endpoints - how the bridge reaches the controller
"""

from fastapi import APIRouter, Depends

from plunge.api.dependencies import get_auth_mode, get_command_service, get_service_container
from plunge.api.schemas.error import ErrorResponse
from plunge.api.schemas.status import ConnectionInfoResponse, SuccessResponse
from plunge.api.services.command_service import CommandAPIService
from plunge.models.auth import AuthMode
from plunge.services.service_container import ServiceContainer

router = APIRouter(prefix="/connection", tags=["Connection"])


@router.get(
    "",
    response_model=ConnectionInfoResponse,
    response_model_exclude_none=True,
    summary="Get connection info",
    responses={500: {"model": ErrorResponse}},
)
async def get_connection(
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
    services: ServiceContainer = Depends(get_service_container),
) -> ConnectionInfoResponse:
    """Resolved gateway for the supplied credentials, or the demo backend"""
    info = await service.connection_info(auth_mode, services.config.demo.system_name)
    return ConnectionInfoResponse.model_validate(info)


@router.delete(
    "",
    response_model=SuccessResponse,
    summary="Forget discovered gateways",
)
async def clear_connection(
    services: ServiceContainer = Depends(get_service_container),
) -> SuccessResponse:
    """Clear the gateway discovery cache; the next command rediscovers"""
    services.bridge.clear_cache()
    return SuccessResponse()

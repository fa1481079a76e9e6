"""
Equipment Endpoints - color lights and the pool status snapshot
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from plunge.api.dependencies import get_auth_mode, get_command_service
from plunge.api.schemas.command import LightCommandRequest, LightCommandResponse
from plunge.api.schemas.error import ErrorResponse
from plunge.api.schemas.status import PoolStatusResponse
from plunge.api.services.command_service import CommandAPIService, build_command, parse_request
from plunge.models.auth import AuthMode
from plunge.models.commands import SendLightCommand
from plunge.models.enums import LogCategory
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Equipment"])


@router.post(
    "/lights",
    response_model=LightCommandResponse,
    response_model_exclude_none=True,
    summary="Send color light command",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def send_light_command(
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{"command": 1}]),
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> LightCommandResponse:
    """Send a color-light command code (all off, all on, color set, sync...)"""
    request = parse_request(LightCommandRequest, payload)
    command = build_command(SendLightCommand, command=request.command)

    result = await service.run(command, auth_mode, "Failed to send light command")
    log.info(f"Light command {request.command} sent", demo=result.demo)
    return LightCommandResponse.model_validate(result.to_dict())


@router.get(
    "/status",
    response_model=PoolStatusResponse,
    summary="Get pool status",
    responses={500: {"model": ErrorResponse}},
)
async def get_status(
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> PoolStatusResponse:
    """
    Current temperatures, set points, heat modes and circuit states.

    In demo mode the snapshot reflects every demo command sent so far.
    """
    status = await service.status(auth_mode)
    return PoolStatusResponse.model_validate(status.to_dict())

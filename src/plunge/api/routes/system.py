"""
System Endpoints - controller configuration, clock and equipment delays
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from plunge.api.dependencies import get_auth_mode, get_command_service, get_service_container
from plunge.api.schemas.command import CommandResponse, SystemTimeCommandResponse, SystemTimeRequest
from plunge.api.schemas.error import ErrorResponse
from plunge.api.schemas.status import SystemTimeResponse
from plunge.api.services.command_service import CommandAPIService, build_command, parse_request
from plunge.models.auth import AuthMode
from plunge.models.commands import CancelDelay, SetSystemTime
from plunge.models.enums import LogCategory
from plunge.services.service_container import ServiceContainer
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["System"])


@router.get(
    "/config",
    summary="Get controller configuration",
    responses={500: {"model": ErrorResponse}},
)
async def get_config(
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
    services: ServiceContainer = Depends(get_service_container),
) -> Dict[str, Any]:
    """Gateway, controller, circuit and body configuration"""
    return await service.configuration(auth_mode, services.config.demo.system_name)


@router.get(
    "/system-time",
    response_model=SystemTimeResponse,
    summary="Get controller clock",
    responses={500: {"model": ErrorResponse}},
)
async def get_system_time(
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> SystemTimeResponse:
    """
    Controller wall clock next to the server clock.

    offsetHours is the controller time minus server UTC, in whole hours.
    """
    system_time = await service.system_time(auth_mode)
    return SystemTimeResponse.model_validate(system_time.to_dict())


@router.post(
    "/system-time",
    response_model=SystemTimeCommandResponse,
    response_model_exclude_none=True,
    summary="Set controller clock",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def set_system_time(
    payload: Optional[Dict[str, Any]] = Body(
        None, examples=[{"date": "2026-06-01T14:30:00", "adjustForDST": True}, {"syncWithDevice": True}]
    ),
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> SystemTimeCommandResponse:
    """Set the controller clock to a date, or to the server clock with syncWithDevice"""
    request = parse_request(SystemTimeRequest, payload)
    if request.sync_with_device or request.date is None:
        date = datetime.now(timezone.utc)
    else:
        date = request.date
    command = build_command(SetSystemTime, date=date, adjust_for_dst=request.adjust_for_dst)

    result = await service.run(command, auth_mode, "Failed to set system time")
    log.info("System time set", date=date.isoformat(), demo=result.demo)
    return SystemTimeCommandResponse.model_validate(result.to_dict())


@router.delete(
    "/delay",
    response_model=CommandResponse,
    response_model_exclude_none=True,
    summary="Cancel equipment delays",
    responses={500: {"model": ErrorResponse}},
)
async def cancel_delay(
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> CommandResponse:
    """Cancel every pending equipment delay"""
    result = await service.run(CancelDelay(), auth_mode, "Failed to cancel delay")
    return CommandResponse.model_validate(result.to_dict())

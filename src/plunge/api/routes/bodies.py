"""
Body Endpoints - set points and heat modes for pool and spa

{body} is 'pool' (0), 'spa' (1) or an explicit body index.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from plunge.api.dependencies import get_auth_mode, get_command_service
from plunge.api.schemas.command import (
    HeatModeCommandResponse, HeatModeRequest, TemperatureCommandResponse, TemperatureRequest
)
from plunge.api.schemas.error import ErrorResponse
from plunge.api.services.command_service import (
    CommandAPIService, build_command, parse_body, parse_request
)
from plunge.models.auth import AuthMode
from plunge.models.commands import SetHeatMode, SetTemperature
from plunge.models.enums import HeatMode, LogCategory
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Bodies"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post(
    "/temp/{body}",
    response_model=TemperatureCommandResponse,
    response_model_exclude_none=True,
    summary="Set body temperature",
    responses=ERROR_RESPONSES,
)
async def set_temperature(
    body: str,
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{"temp": 84}]),
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> TemperatureCommandResponse:
    """
    Change the heat set point of a body (40-104 °F).

    **Example Response:**
    ```json
    {"success": true, "body": 0, "temp": 84}
    ```
    """
    request = parse_request(TemperatureRequest, payload)
    body_index = parse_body(body)
    command = build_command(SetTemperature, body_index=body_index, temp=request.temp)

    result = await service.run(command, auth_mode, "Failed to set temperature")
    log.info(f"Body {body_index} set point -> {request.temp}", demo=result.demo)
    return TemperatureCommandResponse.model_validate(result.to_dict())


@router.post(
    "/heat/{body}",
    response_model=HeatModeCommandResponse,
    response_model_exclude_none=True,
    summary="Set body heat mode",
    responses=ERROR_RESPONSES,
)
async def set_heat_mode(
    body: str,
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{"mode": 3}]),
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> HeatModeCommandResponse:
    """
    Select the heat source: 0 off, 1 solar, 2 solar preferred, 3 heater,
    4 leave unchanged.
    """
    request = parse_request(HeatModeRequest, payload)
    body_index = parse_body(body)
    command = build_command(SetHeatMode, body_index=body_index, mode=request.mode)

    result = await service.run(command, auth_mode, "Failed to set heat mode")
    log.info(f"Body {body_index} heat mode -> {HeatMode(request.mode).name}", demo=result.demo)
    return HeatModeCommandResponse.model_validate(result.to_dict())

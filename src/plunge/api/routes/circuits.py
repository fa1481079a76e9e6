"""
Circuit Endpoints - turn pumps, lights and aux outputs on or off
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path

from plunge.api.dependencies import get_auth_mode, get_command_service
from plunge.api.schemas.command import CircuitCommandResponse, CircuitStateRequest
from plunge.api.schemas.error import ErrorResponse
from plunge.api.services.command_service import CommandAPIService, build_command, parse_request
from plunge.models.auth import AuthMode
from plunge.models.commands import SetCircuit
from plunge.models.enums import LogCategory
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Circuits"])


@router.post(
    "/circuit/{circuit_id}",
    response_model=CircuitCommandResponse,
    response_model_exclude_none=True,
    summary="Set circuit state",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def set_circuit(
    circuit_id: int = Path(..., ge=0, description="Controller circuit id"),
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{"state": True}]),
    auth_mode: AuthMode = Depends(get_auth_mode),
    service: CommandAPIService = Depends(get_command_service),
) -> CircuitCommandResponse:
    """
    Turn a circuit on or off.

    **Request Body:**
    ```json
    {"state": true}
    ```

    **Example Response (demo):**
    ```json
    {"success": true, "circuitId": 505, "state": true, "demo": true}
    ```
    """
    request = parse_request(CircuitStateRequest, payload)
    command = build_command(SetCircuit, circuit_id=circuit_id, state=request.state)

    result = await service.run(command, auth_mode, "Failed to set circuit state")
    log.info(f"Circuit {circuit_id} -> {'ON' if request.state else 'OFF'}", demo=result.demo)
    return CircuitCommandResponse.model_validate(result.to_dict())

"""
Controller commands

Each command is an immutable value tagged with a CommandKind. Construction
validates the value ranges, so an invalid command cannot exist and never
reaches the bridge or the demo store.

A command knows how to send itself over an open controller session
(send()) and which fields it echoes back to the caller (echo()).
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from plunge.models.enums import BodyType, CommandKind, HeatMode

if TYPE_CHECKING:
    from plunge.controller.controller_interface import IControllerSession


MIN_SET_POINT = 40
MAX_SET_POINT = 104


def is_number(value: Any) -> bool:
    """JSON number check: int or finite float, bool excluded"""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SetCircuit:
    """Turn a circuit (pump, light, aux output) on or off"""
    circuit_id: int
    state: bool

    kind = CommandKind.SET_CIRCUIT

    def __post_init__(self):
        if not is_integer(self.circuit_id) or self.circuit_id < 0:
            raise ValueError("circuitId must be a non-negative integer")
        if not isinstance(self.state, bool):
            raise ValueError("state must be a boolean")

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.set_circuit_state(self.circuit_id, self.state)

    def echo(self) -> Dict[str, Any]:
        return {"circuitId": self.circuit_id, "state": self.state}


@dataclass(frozen=True)
class SetTemperature:
    """Change a body's heat set point"""
    body_index: int
    temp: Union[int, float]

    kind = CommandKind.SET_TEMPERATURE

    def __post_init__(self):
        if not is_integer(self.body_index) or self.body_index < 0:
            raise ValueError("body must be 'pool', 'spa' or a numeric index")
        if not is_number(self.temp) or not MIN_SET_POINT <= self.temp <= MAX_SET_POINT:
            raise ValueError(f"temp must be a number between {MIN_SET_POINT} and {MAX_SET_POINT}")

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.set_body_temperature(self.body_index, self.temp)

    def echo(self) -> Dict[str, Any]:
        return {"body": self.body_index, "temp": self.temp}


@dataclass(frozen=True)
class SetHeatMode:
    """Select the heat source for a body"""
    body_index: int
    mode: int

    kind = CommandKind.SET_HEAT_MODE

    def __post_init__(self):
        if not is_integer(self.body_index) or self.body_index < 0:
            raise ValueError("body must be 'pool', 'spa' or a numeric index")
        valid = [m.value for m in HeatMode]
        if not is_integer(self.mode) or self.mode not in valid:
            raise ValueError(f"mode must be a number between {min(valid)} and {max(valid)}")

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.set_heat_mode(self.body_index, self.mode)

    def echo(self) -> Dict[str, Any]:
        return {"body": self.body_index, "mode": self.mode}


@dataclass(frozen=True)
class SendLightCommand:
    """Send a color-light command (all lights off/on, color sets, sync...)"""
    command: int

    kind = CommandKind.SEND_LIGHT_COMMAND

    def __post_init__(self):
        if not is_integer(self.command) or self.command < 0:
            raise ValueError("command must be a number")

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.send_light_command(self.command)

    def echo(self) -> Dict[str, Any]:
        return {"command": self.command}


@dataclass(frozen=True)
class SetSystemTime:
    """Set the controller clock; adjust_for_dst None keeps the current setting"""
    date: datetime
    adjust_for_dst: Optional[bool] = None

    kind = CommandKind.SET_SYSTEM_TIME

    def __post_init__(self):
        if not isinstance(self.date, datetime):
            raise ValueError("date must be an ISO 8601 date-time")
        if self.adjust_for_dst is not None and not isinstance(self.adjust_for_dst, bool):
            raise ValueError("adjustForDST must be a boolean")

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.set_system_time(self.date, self.adjust_for_dst)

    def echo(self) -> Dict[str, Any]:
        echoed: Dict[str, Any] = {"date": self.date.isoformat()}
        if self.adjust_for_dst is not None:
            echoed["adjustForDST"] = self.adjust_for_dst
        return echoed


@dataclass(frozen=True)
class CancelDelay:
    """Cancel every pending equipment delay (pump, heater cool-down...)"""

    kind = CommandKind.CANCEL_DELAY

    async def send(self, session: 'IControllerSession') -> Any:
        return await session.cancel_delay()

    def echo(self) -> Dict[str, Any]:
        return {}


Command = Union[SetCircuit, SetTemperature, SetHeatMode, SendLightCommand, SetSystemTime, CancelDelay]


def parse_body_index(body: str) -> int:
    """
    Map a body path segment to a controller body index.

    'pool' -> 0, 'spa' -> 1, otherwise a non-negative integer.

    Raises:
        ValueError: segment is neither a known name nor an index
    """
    name = body.strip().lower()
    for body_type in BodyType:
        if name == body_type.name.lower():
            return body_type.value
    # isdigit() alone also accepts non-ASCII digits such as "²"
    if name.isascii() and name.isdigit():
        return int(name)
    raise ValueError("body must be 'pool', 'spa' or a numeric index")

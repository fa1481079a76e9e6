from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Union

from plunge.models.auth import Credentials
from plunge.models.status import PoolStatus, SystemTime


@dataclass(frozen=True)
class GatewayAddress:
    """Where a controller answered discovery"""
    ip_addr: str
    port: int
    name: str
    gateway_type: int = 0
    gateway_subtype: int = 0


class IControllerSession(Protocol):
    """
    One open connection to the controller.

    Command methods return the library acknowledgement. A literal False
    means the controller refused or answered garbage.
    """

    # -------------------------------
    # Commands
    # -------------------------------

    async def set_circuit_state(self, circuit_id: int, state: bool) -> Any:
        ...

    async def set_body_temperature(self, body_index: int, temp: Union[int, float]) -> Any:
        ...

    async def set_heat_mode(self, body_index: int, mode: int) -> Any:
        ...

    async def send_light_command(self, command: int) -> Any:
        ...

    async def set_system_time(self, date: datetime, adjust_for_dst: Optional[bool]) -> Any:
        """adjust_for_dst None keeps the controller's current DST setting"""
        ...

    async def cancel_delay(self) -> Any:
        """Cancel every active equipment delay (heater cool-down, valve delays)"""
        ...

    # -------------------------------
    # Reads
    # -------------------------------

    async def get_status(self) -> PoolStatus:
        ...

    async def get_config(self) -> Dict[str, Any]:
        """Controller configuration (circuit names, bodies, equipment)"""
        ...

    async def get_system_time(self) -> SystemTime:
        ...

    # -------------------------------
    # Lifecycle
    # -------------------------------

    async def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        ...


class IControllerClient(Protocol):

    async def discover_and_login(self, system_name: str) -> GatewayAddress:
        """Resolve the controller's network location"""
        ...

    async def connect(self, address: GatewayAddress, credentials: Credentials) -> IControllerSession:
        ...


class ControllerError(Exception):
    """Raised by controller adapters for failures the library does not report itself"""

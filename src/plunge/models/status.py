"""
Pool status models - snapshot of bodies and circuits

Used by both the live bridge (built from controller data) and the demo
backend (built from the in-memory store).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from plunge.models.enums import ConnectionType


def default_body_name(index: int) -> str:
    if index == 0:
        return "Pool"
    if index == 1:
        return "Spa"
    return f"Body {index + 1}"


@dataclass
class BodyStatus:
    index: int
    name: str
    current_temp: Union[int, float] = 0
    set_point: Union[int, float] = 0
    heat_mode: int = 0
    heat_status: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "currentTemp": self.current_temp,
            "setPoint": self.set_point,
            "heatMode": self.heat_mode,
            "heatStatus": self.heat_status,
        }


@dataclass
class CircuitStatus:
    id: int
    name: str
    state: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "state": self.state}


@dataclass
class PoolStatus:
    """Complete pool snapshot as returned by GET /api/status"""
    connection_type: ConnectionType
    air_temp: Union[int, float] = 0
    bodies: List[BodyStatus] = field(default_factory=list)
    circuits: List[CircuitStatus] = field(default_factory=list)
    freeze_mode: bool = False
    connected: bool = True
    last_updated: Optional[datetime] = None

    def copy(self) -> 'PoolStatus':
        """Deep copy (bodies and circuits are mutable)"""
        return replace(
            self,
            bodies=[replace(b) for b in self.bodies],
            circuits=[replace(c) for c in self.circuits],
        )

    def to_dict(self) -> Dict[str, Any]:
        updated = self.last_updated or datetime.now(timezone.utc)
        return {
            "connected": self.connected,
            "lastUpdated": updated.isoformat(),
            "airTemp": self.air_temp,
            "bodies": [b.to_dict() for b in self.bodies],
            "circuits": [c.to_dict() for c in self.circuits],
            "freezeMode": self.freeze_mode,
            "connectionType": self.connection_type.value,
        }


@dataclass(frozen=True)
class SystemTime:
    """Controller clock (local wall time as the controller reports it)"""
    date: datetime
    adjust_for_dst: bool

    def to_dict(self, server_time: Optional[datetime] = None) -> Dict[str, Any]:
        """
        {controllerTime, serverTime, offsetHours, adjustForDST}

        The controller has no time zone; offsetHours is its wall clock minus
        server UTC, rounded to whole hours.
        """
        server_time = server_time or datetime.now(timezone.utc)
        controller = self.date if self.date.tzinfo else self.date.replace(tzinfo=timezone.utc)
        offset = (controller - server_time).total_seconds() / 3600
        return {
            "controllerTime": controller.isoformat(),
            "serverTime": server_time.isoformat(),
            "offsetHours": int(round(offset)),
            "adjustForDST": self.adjust_for_dst,
        }

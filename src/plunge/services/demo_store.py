"""
Demo Store - in-memory stand-in for the controller

Holds circuit states and body temperatures for demo mode. It accepts the
same commands as the live bridge and never touches the network.

The store is owned by the ServiceContainer (one per app) and seeded lazily
on first access, either from an injected dict or from demo_data.yaml.
All reads and writes go through one asyncio.Lock so racing demo requests
cannot lose updates.
"""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from plunge.models.commands import (
    CancelDelay, Command, SendLightCommand, SetCircuit, SetHeatMode, SetSystemTime, SetTemperature
)
from plunge.models.enums import ConnectionType, HeatMode, LogCategory
from plunge.models.status import BodyStatus, CircuitStatus, PoolStatus, SystemTime, default_body_name
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.DEMO)


def status_from_seed(seed: Dict[str, Any]) -> PoolStatus:
    """Build the initial demo PoolStatus from seed data (demo_data.yaml layout)"""
    bodies = []
    for i, body in enumerate(seed.get("bodies") or []):
        index = int(body.get("index", i))
        heat_mode = int(body.get("heat_mode", HeatMode.OFF.value))
        bodies.append(BodyStatus(
            index=index,
            name=body.get("name") or default_body_name(index),
            current_temp=body.get("current_temp", 0),
            set_point=body.get("set_point", 0),
            heat_mode=heat_mode,
            heat_status=bool(body.get("heat_status", False)),
        ))

    circuits = [
        CircuitStatus(
            id=int(c["id"]),
            name=c.get("name") or f"Circuit {c['id']}",
            state=bool(c.get("state", False)),
        )
        for c in seed.get("circuits") or []
    ]

    return PoolStatus(
        connection_type=ConnectionType.DEMO,
        air_temp=seed.get("air_temp", 0),
        bodies=bodies,
        circuits=circuits,
        freeze_mode=bool(seed.get("freeze_mode", False)),
    )


class DemoStore:
    """
    Mutex-guarded demo pool state.

    Example:
        store = DemoStore(seed_path=Path("config/demo_data.yaml"))
        await store.apply(SetCircuit(505, True))
        status = await store.snapshot()
    """

    def __init__(self, seed_path: Optional[Path] = None, seed: Optional[Dict[str, Any]] = None):
        """
        Args:
            seed_path: YAML file with air_temp / bodies / circuits
            seed: Seed dict used instead of a file (tests, embedding)
        """
        self.seed_path = seed_path
        self._seed = seed
        self._status: Optional[PoolStatus] = None
        self._last_light_command: Optional[int] = None
        self._adjust_for_dst: Optional[bool] = None
        self._lock = asyncio.Lock()

    # === Internal ===

    def _load_seed(self) -> Dict[str, Any]:
        if self._seed is not None:
            return self._seed
        if self.seed_path is None:
            return {}
        with open(self.seed_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        log.info(f"Loaded demo data from {self.seed_path.name}", circuits=len(data.get("circuits") or []))
        return data

    def _ensure_loaded(self) -> PoolStatus:
        if self._status is None:
            seed = self._load_seed()
            self._status = status_from_seed(seed)
            self._adjust_for_dst = bool(seed.get("adjust_for_dst", True))
        return self._status

    def _body(self, status: PoolStatus, index: int) -> BodyStatus:
        for body in status.bodies:
            if body.index == index:
                return body
        body = BodyStatus(index=index, name=default_body_name(index))
        status.bodies.append(body)
        status.bodies.sort(key=lambda b: b.index)
        return body

    def _circuit(self, status: PoolStatus, circuit_id: int) -> CircuitStatus:
        for circuit in status.circuits:
            if circuit.id == circuit_id:
                return circuit
        circuit = CircuitStatus(id=circuit_id, name=f"Circuit {circuit_id}")
        status.circuits.append(circuit)
        status.circuits.sort(key=lambda c: c.id)
        return circuit

    # === Commands ===

    async def apply(self, command: Command) -> None:
        """Apply a command to the in-memory state"""
        async with self._lock:
            status = self._ensure_loaded()

            if isinstance(command, SetCircuit):
                self._circuit(status, command.circuit_id).state = command.state
            elif isinstance(command, SetTemperature):
                self._body(status, command.body_index).set_point = command.temp
            elif isinstance(command, SetHeatMode):
                body = self._body(status, command.body_index)
                if command.mode != HeatMode.UNCHANGED.value:
                    body.heat_mode = command.mode
                    body.heat_status = command.mode != HeatMode.OFF.value
            elif isinstance(command, SendLightCommand):
                self._last_light_command = command.command
            elif isinstance(command, SetSystemTime):
                # The demo clock is the server clock; only the DST flag is kept
                if command.adjust_for_dst is not None:
                    self._adjust_for_dst = command.adjust_for_dst
            elif isinstance(command, CancelDelay):
                pass
            else:
                raise TypeError(f"Unsupported demo command: {type(command).__name__}")

        log.info(f"[Demo] {command.kind.name}", **command.echo())

    # === Reads ===

    async def snapshot(self) -> PoolStatus:
        """Copy of the current state, stamped with the current time"""
        async with self._lock:
            status = self._ensure_loaded().copy()
        status.last_updated = datetime.now(timezone.utc)
        return status

    async def circuit_state(self, circuit_id: int) -> Optional[bool]:
        async with self._lock:
            for circuit in self._ensure_loaded().circuits:
                if circuit.id == circuit_id:
                    return circuit.state
        return None

    async def body(self, index: int) -> Optional[BodyStatus]:
        async with self._lock:
            for body in self._ensure_loaded().bodies:
                if body.index == index:
                    return BodyStatus(**vars(body))
        return None

    async def system_time(self) -> SystemTime:
        async with self._lock:
            self._ensure_loaded()
            adjust_for_dst = bool(self._adjust_for_dst)
        return SystemTime(date=datetime.now(timezone.utc), adjust_for_dst=adjust_for_dst)

    async def configuration(self, system_name: str) -> Dict[str, Any]:
        """Equipment configuration in the same layout the live controller reports"""
        async with self._lock:
            status = self._ensure_loaded()
            return {
                "gateway": {"name": system_name},
                "controller": {},
                "circuits": {str(c.id): c.name for c in status.circuits},
                "bodies": {str(b.index): b.name for b in status.bodies},
            }

    @property
    def last_light_command(self) -> Optional[int]:
        return self._last_light_command

    async def reset(self) -> None:
        """Drop all demo changes; next access re-seeds"""
        async with self._lock:
            self._status = None
            self._last_light_command = None
            self._adjust_for_dst = None
        log.info("Demo state reset")

"""
ScreenLogic controller client - adapter over screenlogicpy

screenlogicpy speaks the ScreenLogic protocol to a gateway on the local
network. This module only maps its API onto IControllerClient /
IControllerSession; no protocol handling happens here.

Data layout read by get_status() follows screenlogicpy's get_data() dict:
    data["controller"]["sensor"]["air_temperature"]["value"]
    data["body"][index]["last_temperature" | "heat_setpoint" | ...]["value"]
    data["circuit"][circuit_id]["name" | "value"]

The controller clock is read with async_get_datetime(), which answers a
(datetime, auto_dst) pair, and written with async_set_date_time().
"""

import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from screenlogicpy import ScreenLogicGateway, discovery

from plunge.controller.controller_interface import (
    ControllerError, GatewayAddress, IControllerClient, IControllerSession
)
from plunge.models.auth import Credentials
from plunge.models.enums import ConnectionType, LogCategory
from plunge.models.status import BodyStatus, CircuitStatus, PoolStatus, SystemTime, default_body_name
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONTROLLER)


def _value(entry: Any, key: str, default: Any = None) -> Any:
    """Read entry[key], unwrapping screenlogicpy's {"value": ...} wrappers"""
    if not isinstance(entry, dict) or key not in entry:
        return default
    item = entry[key]
    if isinstance(item, dict):
        return item.get("value", default)
    return item


def whole_degrees(temp: Union[int, float]) -> int:
    """Round a set point to whole degrees, halves up (84.5 -> 85)"""
    return int(math.floor(temp + 0.5))


async def _safe_disconnect(gateway: ScreenLogicGateway) -> None:
    """Drop a gateway that never became a session; errors are logged only"""
    try:
        await gateway.async_disconnect()
    except Exception as e:
        log.warn("Gateway disconnect failed", error=str(e) or type(e).__name__)


def status_from_data(data: Dict[str, Any]) -> PoolStatus:
    """Build a PoolStatus from screenlogicpy get_data() output"""
    controller = data.get("controller") or {}
    sensor = controller.get("sensor") or {}

    bodies: List[BodyStatus] = []
    for raw_index, body in sorted((data.get("body") or {}).items(), key=lambda kv: int(kv[0])):
        index = int(raw_index)
        heat_state = _value(body, "heat_state", 0)
        bodies.append(BodyStatus(
            index=index,
            name=_value(body, "name") or default_body_name(index),
            current_temp=_value(body, "last_temperature", 0),
            set_point=_value(body, "heat_setpoint", 0),
            heat_mode=_value(body, "heat_mode", 0),
            heat_status=bool(heat_state),
        ))

    circuits: List[CircuitStatus] = []
    for raw_id, circuit in sorted((data.get("circuit") or {}).items(), key=lambda kv: int(kv[0])):
        circuit_id = int(raw_id)
        circuits.append(CircuitStatus(
            id=circuit_id,
            name=_value(circuit, "name") or f"Circuit {circuit_id}",
            state=bool(_value(circuit, "value", 0)),
        ))

    return PoolStatus(
        connection_type=ConnectionType.LOCAL,
        air_temp=_value(sensor, "air_temperature", 0),
        bodies=bodies,
        circuits=circuits,
        freeze_mode=bool(_value(sensor, "freeze_mode", False)),
    )


class ScreenLogicSession(IControllerSession):
    """A connected ScreenLogicGateway, used for one command and closed"""

    def __init__(self, gateway: ScreenLogicGateway, address: GatewayAddress):
        self._gateway = gateway
        self._address = address
        self._closed = False

    async def set_circuit_state(self, circuit_id: int, state: bool) -> Any:
        return await self._gateway.async_set_circuit(circuit_id, 1 if state else 0)

    async def set_body_temperature(self, body_index: int, temp: Union[int, float]) -> Any:
        return await self._gateway.async_set_heat_temp(body_index, whole_degrees(temp))

    async def set_heat_mode(self, body_index: int, mode: int) -> Any:
        return await self._gateway.async_set_heat_mode(body_index, mode)

    async def send_light_command(self, command: int) -> Any:
        return await self._gateway.async_set_color_lights(command)

    async def set_system_time(self, date: datetime, adjust_for_dst: Optional[bool]) -> Any:
        if adjust_for_dst is None:
            adjust_for_dst = (await self.get_system_time()).adjust_for_dst
        if date.tzinfo is not None:
            # The controller clock has no zone; it keeps server local wall time
            date = date.astimezone().replace(tzinfo=None)
        return await self._gateway.async_set_date_time(date_time=date, auto_dst=int(adjust_for_dst))

    async def cancel_delay(self) -> Any:
        return await self._gateway.async_cancel_delays()

    async def get_status(self) -> PoolStatus:
        await self._gateway.async_update()
        return status_from_data(self._gateway.get_data())

    async def get_config(self) -> Dict[str, Any]:
        await self._gateway.async_update()
        data = self._gateway.get_data()
        return {
            "gateway": {
                "name": self._address.name,
                "address": self._address.ip_addr,
                "port": self._address.port,
            },
            "controller": data.get("controller") or {},
            "circuits": {
                str(cid): _value(c, "name") or f"Circuit {cid}"
                for cid, c in (data.get("circuit") or {}).items()
            },
            "bodies": {
                str(idx): _value(b, "name") or default_body_name(int(idx))
                for idx, b in (data.get("body") or {}).items()
            },
        }

    async def get_system_time(self) -> SystemTime:
        # screenlogicpy answers (datetime, auto_dst)
        date, auto_dst = await self._gateway.async_get_datetime()
        return SystemTime(date=date, adjust_for_dst=bool(auto_dst))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._gateway.async_disconnect()


class ScreenLogicClient(IControllerClient):
    """
    Discovers and connects to ScreenLogic gateways.

    Args:
        host: Fixed gateway address; discovery is skipped when set
        port: Port used with a fixed host
    """

    def __init__(self, host: Optional[str] = None, port: int = 80):
        self.host = host
        self.port = port

    async def discover_and_login(self, system_name: str) -> GatewayAddress:
        if self.host:
            log.debug("Using configured gateway address", address=self.host, port=self.port)
            return GatewayAddress(ip_addr=self.host, port=self.port, name=system_name)

        hosts = await discovery.async_discover()
        log.debug(f"Discovery found {len(hosts)} gateway(s)")

        for host in hosts:
            name = str(host.get("name", ""))
            if name.lower() == system_name.lower():
                return GatewayAddress(
                    ip_addr=host["ip"],
                    port=int(host["port"]),
                    name=name,
                    gateway_type=int(host.get("gtype", 0)),
                    gateway_subtype=int(host.get("gsubtype", 0)),
                )

        if not hosts:
            raise ControllerError("No ScreenLogic gateways found on the local network")
        raise ControllerError(f"Could not find gateway '{system_name}'")

    async def connect(self, address: GatewayAddress, credentials: Credentials) -> ScreenLogicSession:
        # The local ScreenLogic login does not carry the system password;
        # credentials select the gateway by name during discovery.
        gateway = ScreenLogicGateway()
        try:
            await gateway.async_connect(
                ip=address.ip_addr,
                port=address.port,
                gtype=address.gateway_type,
                gsubtype=address.gateway_subtype,
                name=address.name,
            )
        except BaseException:
            # The transport may be open even when connect failed or was cancelled
            await _safe_disconnect(gateway)
            raise
        if not gateway.is_connected:
            await _safe_disconnect(gateway)
            raise ControllerError(f"Gateway '{address.name}' refused the connection")
        return ScreenLogicSession(gateway, address)

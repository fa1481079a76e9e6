import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from plunge.api.dependencies import set_service_container
from plunge.api.main import create_app
from plunge.controller.controller_interface import GatewayAddress
from plunge.managers.config_manager import CONFIG_DIR
from plunge.models.auth import Credentials
from plunge.models.config import AppConfig, ControllerConfig
from plunge.models.enums import ConnectionType
from plunge.models.status import BodyStatus, CircuitStatus, PoolStatus, SystemTime
from plunge.services.demo_store import DemoStore
from plunge.services.service_container import ServiceContainer


LIVE_HEADERS = {"X-Pool-System-Name": "Pentair: 12-34-56", "X-Pool-Password": "secret"}


class FakeSession:
    """Controller session that records every call"""

    def __init__(self, client: 'FakeControllerClient'):
        self.client = client
        self.calls: List[tuple] = []
        self.closed = False

    async def _command(self, name: str, *args) -> Any:
        self.calls.append((name, *args))
        self.client.calls.append((name, *args))
        if self.client.command_delay:
            await asyncio.sleep(self.client.command_delay)
        if self.client.command_error is not None:
            raise self.client.command_error
        return self.client.command_ack

    async def set_circuit_state(self, circuit_id, state):
        return await self._command("set_circuit_state", circuit_id, state)

    async def set_body_temperature(self, body_index, temp):
        return await self._command("set_body_temperature", body_index, temp)

    async def set_heat_mode(self, body_index, mode):
        return await self._command("set_heat_mode", body_index, mode)

    async def send_light_command(self, command):
        return await self._command("send_light_command", command)

    async def set_system_time(self, date, adjust_for_dst):
        return await self._command("set_system_time", date, adjust_for_dst)

    async def cancel_delay(self):
        return await self._command("cancel_delay")

    async def get_status(self):
        await self._command("get_status")
        return self.client.status

    async def get_config(self):
        await self._command("get_config")
        return self.client.configuration

    async def get_system_time(self):
        await self._command("get_system_time")
        return self.client.system_time

    async def close(self):
        if self.closed:
            return
        self.closed = True
        self.client.closed += 1
        self.client.active -= 1
        if self.client.close_error is not None:
            raise self.client.close_error


class FakeControllerClient:
    """
    In-memory IControllerClient.

    Knobs (set before the call): discover_error, connect_error, connect_delay,
    command_error, command_delay, command_ack, close_error.
    """

    def __init__(self):
        self.address = GatewayAddress(ip_addr="192.168.1.50", port=80, name="Pentair: 12-34-56")
        self.discover_calls: List[str] = []
        self.connect_calls: List[Credentials] = []
        self.calls: List[tuple] = []
        self.sessions: List[FakeSession] = []
        self.opened = 0
        self.closed = 0
        self.active = 0
        self.max_active = 0

        self.discover_error: Optional[Exception] = None
        self.connect_error: Optional[Exception] = None
        self.connect_delay = 0.0
        self.command_error: Optional[Exception] = None
        self.command_delay = 0.0
        self.command_ack: Any = True
        self.close_error: Optional[Exception] = None

        self.status = PoolStatus(
            connection_type=ConnectionType.LOCAL,
            air_temp=71,
            bodies=[BodyStatus(0, "Pool", 79, 82, 3, True)],
            circuits=[CircuitStatus(505, "Pool", True)],
        )
        self.configuration: Dict[str, Any] = {
            "gateway": {"name": self.address.name},
            "circuits": {"505": {"name": "Pool"}},
        }
        self.system_time = SystemTime(date=datetime(2026, 6, 1, 14, 30), adjust_for_dst=True)

    async def discover_and_login(self, system_name: str) -> GatewayAddress:
        self.discover_calls.append(system_name)
        if self.discover_error is not None:
            raise self.discover_error
        return self.address

    async def connect(self, address: GatewayAddress, credentials: Credentials) -> FakeSession:
        self.connect_calls.append(credentials)
        if self.connect_delay:
            await asyncio.sleep(self.connect_delay)
        if self.connect_error is not None:
            raise self.connect_error
        session = FakeSession(self)
        self.sessions.append(session)
        self.opened += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        return session


@pytest.fixture
def fake_client():
    return FakeControllerClient()


@pytest.fixture
def controller_config():
    """Short timeouts so failure tests finish quickly"""
    return ControllerConfig(
        discovery_timeout=0.5,
        connect_timeout=0.5,
        command_timeout=0.5,
        queue_timeout=0.5,
    )


@pytest.fixture
def credentials():
    return Credentials(system_name="Pentair: 12-34-56", password="secret")


@pytest.fixture
def demo_store():
    return DemoStore(seed_path=CONFIG_DIR / "demo_data.yaml")


@pytest.fixture
def app_config(controller_config):
    return AppConfig(controller=controller_config)


@pytest.fixture
def services(app_config, fake_client, demo_store):
    return ServiceContainer.build(app_config, fake_client, demo_store=demo_store)


@pytest.fixture
def client(services):
    app = create_app(services=services)
    with TestClient(app) as test_client:
        yield test_client
    set_service_container(None)


@pytest.fixture
def live_headers():
    return dict(LIVE_HEADERS)


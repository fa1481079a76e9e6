"""Tests for GET /api/status, POST /api/lights and the app-level endpoints"""

from fastapi.testclient import TestClient

from plunge.api.dependencies import set_service_container
from plunge.api.main import create_app
from plunge.controller.controller_interface import ControllerError


class TestStatus:

    def test_demo_status(self, client, fake_client):
        response = client.get("/api/status")

        data = response.json()
        assert response.status_code == 200
        assert data["connectionType"] == "demo"
        assert data["connected"] is True
        assert data["airTemp"] == 78
        assert {"id": 505, "name": "Pool", "state": True} in data["circuits"]
        assert data["bodies"][0] == {
            "index": 0,
            "name": "Pool",
            "currentTemp": 82,
            "setPoint": 84,
            "heatMode": 1,
            "heatStatus": False,
        }
        assert fake_client.opened == 0

    def test_demo_status_reflects_commands(self, client):
        client.post("/api/circuit/506", json={"state": True})
        client.post("/api/temp/pool", json={"temp": 88})

        data = client.get("/api/status").json()
        assert {"id": 506, "name": "Waterfall", "state": True} in data["circuits"]
        assert data["bodies"][0]["setPoint"] == 88

    def test_live_status(self, client, fake_client, live_headers):
        data = client.get("/api/status", headers=live_headers).json()

        assert data["connectionType"] == "local"
        assert data["airTemp"] == 71
        assert data["bodies"][0]["heatStatus"] is True
        assert fake_client.opened == fake_client.closed == 1

    def test_live_status_failure(self, client, fake_client, live_headers):
        fake_client.connect_error = ControllerError("Gateway 'Pentair: 12-34-56' refused the connection")

        response = client.get("/api/status", headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to connect to pool",
            "message": "Gateway 'Pentair: 12-34-56' refused the connection",
        }


class TestLights:

    def test_demo_light_command(self, client, demo_store):
        response = client.post("/api/lights", json={"command": 2})

        assert response.json() == {"success": True, "command": 2, "demo": True}
        assert demo_store.last_light_command == 2

    def test_invalid_light_command(self, client):
        response = client.post("/api/lights", json={"command": "party"})

        assert response.status_code == 400
        assert response.json() == {"error": "command must be a number"}

    def test_live_light_failure(self, client, fake_client, live_headers):
        fake_client.command_error = RuntimeError("Light command rejected")

        response = client.post("/api/lights", json={"command": 7}, headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to send light command",
            "message": "Light command rejected",
        }


class TestApp:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_services_not_initialized(self):
        set_service_container(None)
        client = TestClient(create_app())

        response = client.get("/api/status")

        assert response.status_code == 503

    def test_unexpected_error(self, services, monkeypatch):
        async def broken(command):
            raise RuntimeError("store corrupted")

        monkeypatch.setattr(services.demo_store, "apply", broken)
        client = TestClient(create_app(services=services), raise_server_exceptions=False)

        response = client.post("/api/circuit/5", json={"state": True})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "store corrupted"}
        set_service_container(None)

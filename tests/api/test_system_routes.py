"""Tests for GET /api/config, GET/POST /api/system-time and DELETE /api/delay"""

from datetime import datetime, timedelta, timezone

import pytest

from plunge.controller.controller_interface import ControllerError


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestConfig:

    def test_demo_config(self, client, fake_client):
        response = client.get("/api/config")

        assert response.status_code == 200
        config = response.json()
        assert config["gateway"] == {"name": "demo"}
        assert config["circuits"]["505"] == "Pool"
        assert config["bodies"] == {"0": "Pool", "1": "Spa"}
        assert fake_client.discover_calls == []

    def test_live_config(self, client, fake_client, live_headers):
        response = client.get("/api/config", headers=live_headers)

        assert response.status_code == 200
        assert response.json() == fake_client.configuration
        assert fake_client.opened == fake_client.closed == 1

    def test_live_failure(self, client, fake_client, live_headers):
        fake_client.connect_error = ControllerError("Login rejected")

        response = client.get("/api/config", headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get config", "message": "Login rejected"}


class TestGetSystemTime:

    def test_demo_clock(self, client):
        response = client.get("/api/system-time")

        assert response.status_code == 200
        body = response.json()
        assert body["offsetHours"] == 0
        assert body["adjustForDST"] is True
        assert abs(parse_time(body["controllerTime"]) - parse_time(body["serverTime"])) < timedelta(seconds=5)

    def test_live_clock(self, client, fake_client, live_headers):
        response = client.get("/api/system-time", headers=live_headers)

        body = response.json()
        assert parse_time(body["controllerTime"]) == datetime(2026, 6, 1, 14, 30, tzinfo=timezone.utc)
        assert body["adjustForDST"] is True
        assert isinstance(body["offsetHours"], int)
        assert fake_client.closed == 1

    def test_live_failure(self, client, fake_client, live_headers):
        fake_client.command_error = RuntimeError("socket reset")

        response = client.get("/api/system-time", headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get system time", "message": "socket reset"}


class TestSetSystemTime:

    def test_demo_set(self, client):
        response = client.post("/api/system-time", json={"date": "2026-06-01T14:30:00", "adjustForDST": False})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["demo"] is True
        assert body["adjustForDST"] is False
        assert parse_time(body["date"]) == datetime(2026, 6, 1, 14, 30)

        assert client.get("/api/system-time").json()["adjustForDST"] is False

    def test_live_set(self, client, fake_client, live_headers):
        response = client.post(
            "/api/system-time",
            json={"date": "2026-06-01T14:30:00Z", "adjustForDST": True},
            headers=live_headers,
        )

        assert response.status_code == 200
        assert "demo" not in response.json()
        assert fake_client.calls == [
            ("set_system_time", datetime(2026, 6, 1, 14, 30, tzinfo=timezone.utc), True),
        ]

    def test_sync_with_device_uses_server_clock(self, client, fake_client, live_headers):
        response = client.post(
            "/api/system-time",
            json={"date": "2001-01-01T00:00:00", "syncWithDevice": True},
            headers=live_headers,
        )

        assert response.status_code == 200
        _, sent, adjust_for_dst = fake_client.calls[0]
        assert abs(sent - datetime.now(timezone.utc)) < timedelta(seconds=5)
        assert adjust_for_dst is None
        assert "adjustForDST" not in response.json()

    def test_empty_body_uses_server_clock(self, client):
        response = client.post("/api/system-time")

        assert response.status_code == 200
        assert abs(parse_time(response.json()["date"]) - datetime.now(timezone.utc)) < timedelta(seconds=5)

    @pytest.mark.parametrize("payload,error", [
        ({"date": "yesterday"}, "date must be an ISO 8601 date-time"),
        ({"date": 1700000000}, "date must be an ISO 8601 date-time"),
        ({"adjustForDST": "true"}, "adjustForDST must be a boolean"),
        ({"syncWithDevice": 1}, "syncWithDevice must be a boolean"),
    ])
    def test_invalid_body(self, client, fake_client, live_headers, payload, error):
        response = client.post("/api/system-time", json=payload, headers=live_headers)

        assert response.status_code == 400
        assert response.json() == {"error": error}
        assert fake_client.discover_calls == []

    def test_live_failure(self, client, fake_client, live_headers):
        fake_client.command_ack = False

        response = client.post("/api/system-time", json={"syncWithDevice": True}, headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to set system time",
            "message": "Controller did not acknowledge SET_SYSTEM_TIME",
        }


class TestCancelDelay:

    def test_demo(self, client, fake_client):
        response = client.delete("/api/delay")

        assert response.status_code == 200
        assert response.json() == {"success": True, "demo": True}
        assert fake_client.discover_calls == []

    def test_live(self, client, fake_client, live_headers):
        response = client.delete("/api/delay", headers=live_headers)

        assert response.json() == {"success": True}
        assert fake_client.calls == [("cancel_delay",)]
        assert fake_client.opened == fake_client.closed == 1

    def test_live_failure(self, client, fake_client, live_headers):
        fake_client.command_error = RuntimeError("socket reset")

        response = client.delete("/api/delay", headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to cancel delay", "message": "socket reset"}

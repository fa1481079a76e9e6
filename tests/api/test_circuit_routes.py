"""
Tests for POST /api/circuit/{id}

Demo requests (no credential headers) are served by the demo store; live
requests go through the bridge to the fake controller client.
"""

import pytest


def circuit_state(client, circuit_id):
    for circuit in client.get("/api/status").json()["circuits"]:
        if circuit["id"] == circuit_id:
            return circuit["state"]
    return None


class TestDemoMode:

    def test_no_credentials_is_demo(self, client, fake_client):
        response = client.post("/api/circuit/5", json={"state": True})

        assert response.status_code == 200
        assert response.json() == {"success": True, "circuitId": 5, "state": True, "demo": True}
        assert fake_client.discover_calls == []
        assert fake_client.opened == 0

    def test_demo_state_recorded(self, client):
        client.post("/api/circuit/500", json={"state": True})
        assert circuit_state(client, 500) is True

        client.post("/api/circuit/500", json={"state": False})
        assert circuit_state(client, 500) is False

    def test_repeated_command_is_idempotent(self, client):
        first = client.post("/api/circuit/5", json={"state": True})
        second = client.post("/api/circuit/5", json={"state": True})

        assert first.json() == second.json()
        circuits = client.get("/api/status").json()["circuits"]
        assert [c["state"] for c in circuits if c["id"] == 5] == [True]

    def test_demo_login_name(self, client, fake_client):
        headers = {"X-Pool-System-Name": "demo", "X-Pool-Password": "demo"}

        response = client.post("/api/circuit/505", json={"state": False}, headers=headers)

        assert response.json()["demo"] is True
        assert fake_client.opened == 0


class TestValidation:

    @pytest.mark.parametrize("body", [
        {"state": "true"},
        {"state": 1},
        {"state": None},
        {},
    ])
    def test_state_must_be_boolean(self, client, fake_client, live_headers, body):
        response = client.post("/api/circuit/505", json=body, headers=live_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "state must be a boolean"}
        assert fake_client.discover_calls == []

    def test_missing_body(self, client):
        response = client.post("/api/circuit/505")

        assert response.status_code == 400
        assert response.json() == {"error": "state must be a boolean"}

    def test_non_numeric_circuit_id(self, client):
        response = client.post("/api/circuit/pump", json={"state": True})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_malformed_json(self, client):
        response = client.post(
            "/api/circuit/505",
            content=b"{state: true",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestLiveMode:

    def test_live_command(self, client, fake_client, live_headers):
        response = client.post("/api/circuit/505", json={"state": True}, headers=live_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "circuitId": 505, "state": True}
        assert fake_client.calls == [("set_circuit_state", 505, True)]
        assert fake_client.opened == fake_client.closed == 1

    def test_command_failure_closes_connection(self, client, fake_client, live_headers):
        fake_client.command_error = RuntimeError("Circuit 505 not found")

        response = client.post("/api/circuit/505", json={"state": True}, headers=live_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to set circuit state",
            "message": "Circuit 505 not found",
        }
        assert fake_client.opened == fake_client.closed == 1


class TestStrictCredentials:

    @pytest.fixture
    def app_config(self, app_config):
        app_config.credentials.strict = True
        return app_config

    def test_malformed_credentials_rejected(self, client, fake_client):
        response = client.post(
            "/api/circuit/505",
            json={"state": True},
            headers={"X-Pool-System-Name": "Pentair: 12-34-56"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid credentials"
        assert fake_client.discover_calls == []

    def test_absent_credentials_still_demo(self, client):
        response = client.post("/api/circuit/5", json={"state": True})
        assert response.json()["demo"] is True

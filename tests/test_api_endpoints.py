"""Tests for the HTTP endpoints."""

import re
import time

import pytest
from fastapi.testclient import TestClient

from flowsim.api import endpoints
from flowsim.config import AppConfig
from flowsim.core.automations import AutomationCatalog
from flowsim.core.simulator import MISSING_COLLECTIONS_ERROR
from flowsim.factory import create_app

STEP_PATTERN = re.compile(r"^\[\d{2}:\d{2}:\d{2}\] ")


class TestHealthEndpoints:
    """Test cases for liveness endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.json()["message"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_header(self, client):
        """Requests pass through the tracing middleware."""
        response = client.get("/health/live")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        assert "X-Response-Time" in response.headers


class TestSimulateEndpoint:
    """Test cases for POST /simulate."""

    def test_simulate_valid_workflow(self, client, linear_payload):
        """A valid graph returns timestamped START, TASK, END steps."""
        response = client.post("/simulate", json=linear_payload)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["errors"] == []
        assert len(body["steps"]) == 3
        assert all(STEP_PATTERN.match(step) for step in body["steps"])
        assert [step.split(" ")[2] for step in body["steps"]] == ["START:", "TASK:", "END:"]

    def test_simulate_invalid_workflow(self, client, linear_payload):
        """Validation failures are a 200 with success false."""
        linear_payload["nodes"][1]["data"] = {}

        response = client.post("/simulate", json=linear_payload)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["steps"] == []
        assert body["errors"] == ['Task node "t1" requires a title.']

    def test_simulate_missing_edges(self, client):
        """A body without edges is a client error with one message."""
        response = client.post("/simulate", json={"nodes": []})

        assert response.status_code == 400
        assert response.json() == {"success": False, "steps": [], "errors": [MISSING_COLLECTIONS_ERROR]}

    def test_simulate_non_json_body(self, client):
        response = client.post("/simulate", content=b"not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["errors"] == [MISSING_COLLECTIONS_ERROR]

    def test_simulate_unparseable_node(self, client):
        response = client.post("/simulate", json={"nodes": [{"id": "s1"}], "edges": []})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert len(body["errors"]) == 1


class TestValidateEndpoint:
    """Test cases for POST /validate."""

    def test_validate_valid_workflow(self, client, linear_payload):
        response = client.post("/validate", json=linear_payload)

        assert response.status_code == 200
        assert response.json() == {"isValid": True, "errors": []}

    def test_validate_two_start_nodes(self, client, linear_payload):
        """The duplicate start rule is reported over the wire."""
        linear_payload["nodes"].append({"id": "s2", "type": "start", "data": {}})
        linear_payload["edges"].append({"id": "c", "source": "s2", "target": "t1"})

        body = client.post("/validate", json=linear_payload).json()

        assert body["isValid"] is False
        assert any("only one Start node" in error for error in body["errors"])

    def test_validate_check_cycles_query(self, client, linear_payload):
        """Cycle checking is enabled per request."""
        linear_payload["edges"].append({"id": "loop", "source": "t1", "target": "t1"})

        assert client.post("/validate", json=linear_payload).json()["isValid"] is True

        checked = client.post("/validate", params={"checkCycles": "true"}, json=linear_payload).json()
        assert checked["isValid"] is False

    def test_validate_malformed_body(self, client):
        response = client.post("/validate", json=[1, 2, 3])

        assert response.status_code == 400
        assert response.json() == {"isValid": False, "errors": [MISSING_COLLECTIONS_ERROR]}


class TestTransportTimeout:
    """Test cases for the per-request timeout and artificial latency."""

    @pytest.fixture
    def slow_client(self):
        app = create_app(AppConfig(simulation_timeout=0.05))
        with TestClient(app) as test_client:
            yield test_client

    def test_simulate_times_out(self, slow_client, linear_payload, monkeypatch):
        """A core call slower than the timeout answers 504 with a failed result."""
        def slow_simulation(*args, **kwargs):
            time.sleep(0.3)

        monkeypatch.setattr(endpoints, "simulate_workflow", slow_simulation)

        response = slow_client.post("/simulate", json=linear_payload)

        assert response.status_code == 504
        assert response.json() == {
            "success": False,
            "steps": [],
            "errors": ["Simulation timed out after 0.05s"],
        }

    def test_validate_times_out(self, slow_client, linear_payload, monkeypatch):
        def slow_validation(*args, **kwargs):
            time.sleep(0.3)

        monkeypatch.setattr(endpoints, "validate_workflow", slow_validation)

        response = slow_client.post("/validate", json=linear_payload)

        assert response.status_code == 504
        assert response.json() == {"isValid": False, "errors": ["Simulation timed out after 0.05s"]}

    def test_simulation_delay(self, linear_payload):
        """The configured delay is applied before answering and does not count against the timeout."""
        app = create_app(AppConfig(simulation_delay=0.2, simulation_timeout=1.0))

        with TestClient(app) as test_client:
            started = time.monotonic()
            response = test_client.post("/simulate", json=linear_payload)
            elapsed = time.monotonic() - started

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert elapsed >= 0.2


class TestAutomationEndpoints:
    """Test cases for GET /automations."""

    def test_list_automations(self, client):
        response = client.get("/automations")

        assert response.status_code == 200
        actions = response.json()
        assert actions[0] == {"id": "send_email", "label": "Send Email", "params": ["to", "subject", "body"]}

    def test_get_automation(self, client):
        response = client.get("/automations/webhook_call")

        assert response.status_code == 200
        assert response.json()["label"] == "Call Webhook"

    def test_get_missing_automation(self, client):
        response = client.get("/automations/teleport")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "AutomationNotFoundError"
        assert body["context"] == {"action_id": "teleport", "operation": "lookup"}
        assert "X-Request-ID" in response.headers

    def test_custom_catalog(self):
        """A caller-supplied catalog replaces the defaults."""
        catalog = AutomationCatalog()
        catalog.register("archive", "Archive Record", ["recordId"])
        app = create_app(AppConfig(enable_performance_monitoring=False), automation_catalog=catalog)

        with TestClient(app) as test_client:
            response = test_client.get("/automations")

        assert response.json() == [{"id": "archive", "label": "Archive Record", "params": ["recordId"]}]

"""Tests for error types and their HTTP mapping."""

from flowsim.core.exceptions import (
    AutomationNotFoundError,
    ConfigurationError,
    SimulationTimeoutError,
    WorkflowPayloadError,
    create_error_response,
)
from flowsim.core.middleware import get_status_code_for_error


class TestErrorMapping:
    """Test cases for error responses."""

    def test_status_codes(self):
        assert get_status_code_for_error(WorkflowPayloadError("bad")) == 400
        assert get_status_code_for_error(AutomationNotFoundError("x")) == 404
        assert get_status_code_for_error(SimulationTimeoutError("slow", timeout=1.0)) == 504
        assert get_status_code_for_error(ConfigurationError("broken")) == 500

    def test_error_response_body(self):
        """Error responses carry code, message, details and context."""
        error = SimulationTimeoutError("Simulation timed out after 1.0s", timeout=1.0)

        body = create_error_response(error)

        assert body["error"] == "SimulationTimeoutError"
        assert body["details"]["timeout"] == 1.0
        assert body["details"]["category"] == "resource"

    def test_to_dict(self):
        error = WorkflowPayloadError("bad", field="nodes")

        data = error.to_dict()

        assert data["context"] == {"field": "nodes"}
        assert data["exception_type"] == "WorkflowPayloadError"

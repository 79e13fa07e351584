"""HTTP client for a running workflow simulator service."""

from typing import Any, Dict, List, Optional, Union

import requests

from .core.exceptions import APIError
from .core.logging import get_logger
from .models.core import AutomationAction, SimulationResult, ValidationResult, Workflow

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:4000"

WorkflowPayload = Union[Workflow, Dict[str, Any]]


class WorkflowClient:
    """Thin wrapper over the /automations, /simulate and /validate endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _payload(workflow: WorkflowPayload) -> Dict[str, Any]:
        if isinstance(workflow, Workflow):
            return workflow.model_dump(mode="json", by_alias=True, exclude_none=True)
        return workflow

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {path} failed: {str(e)}")
            raise APIError(f"Request to {path} failed: {str(e)}", status_code=503, endpoint=path) from e

    def fetch_automations(self) -> List[AutomationAction]:
        """Fetch the available automation actions."""
        response = self._request("GET", "/automations")
        if not response.ok:
            raise APIError("Failed to fetch automations", status_code=response.status_code, endpoint="/automations")
        return [AutomationAction.model_validate(item) for item in response.json()]

    def simulate(self, workflow: WorkflowPayload) -> SimulationResult:
        """
        Simulate a workflow on the server.

        A 400 answer carries a failed simulation result and is returned as one.

        Raises:
            APIError: On transport failure or any other non-2xx response
        """
        response = self._request("POST", "/simulate", json=self._payload(workflow))
        if response.ok or response.status_code == 400:
            return SimulationResult.model_validate(response.json())
        raise APIError("Failed to simulate workflow", status_code=response.status_code, endpoint="/simulate")

    def validate(self, workflow: WorkflowPayload, check_cycles: bool = False) -> ValidationResult:
        """Validate a workflow on the server."""
        params = {"checkCycles": "true"} if check_cycles else None
        response = self._request("POST", "/validate", json=self._payload(workflow), params=params)
        if response.ok or response.status_code == 400:
            return ValidationResult.model_validate(response.json())
        raise APIError("Failed to validate workflow", status_code=response.status_code, endpoint="/validate")

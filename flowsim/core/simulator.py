"""Simulation orchestration: validate, traverse, and timestamp."""

from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from ..models.core import SimulationResult, Workflow
from .exceptions import WorkflowPayloadError
from .logging import get_logger
from .path_generator import generate_execution_path
from .validator import validate_workflow

logger = get_logger(__name__)

MISSING_COLLECTIONS_ERROR = "Invalid workflow structure: missing nodes or edges"


def timestamp_steps(steps: Sequence[str], now: Optional[datetime] = None) -> List[str]:
    """Prefix step N with "[HH:MM:SS] " for now + N seconds."""
    if now is None:
        now = datetime.now(timezone.utc)
    return [
        f"[{(now + timedelta(seconds=position)).strftime('%H:%M:%S')}] {step}"
        for position, step in enumerate(steps)
    ]


def simulate_workflow(
    workflow: Workflow,
    now: Optional[datetime] = None,
    check_cycles: bool = False
) -> SimulationResult:
    """
    Validate a workflow and, if it is valid, render its execution trace.

    Args:
        workflow: The workflow graph to simulate
        now: Base time for the synthetic step timestamps. Sampled once when omitted.
        check_cycles: Also reject cyclic graphs during validation

    Returns:
        SimulationResult: Timestamped steps on success, validation errors otherwise
    """
    validation = validate_workflow(workflow.nodes, workflow.edges, check_cycles=check_cycles)
    if not validation.is_valid:
        logger.info(f"Simulation rejected with {len(validation.errors)} validation errors")
        return SimulationResult(success=False, steps=[], errors=validation.errors)

    steps = generate_execution_path(workflow.nodes, workflow.edges)
    logger.info(f"Simulation completed with {len(steps)} steps")
    return SimulationResult(success=True, steps=timestamp_steps(steps, now), errors=[])


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"Invalid workflow structure: {location}: {first.get('msg')}"
    return f"Invalid workflow structure: {first.get('msg')}"


def parse_workflow_payload(payload: Any) -> Workflow:
    """
    Turn a decoded JSON value into a Workflow.

    Raises:
        WorkflowPayloadError: If the value is not a graph with node and edge lists,
            or a node or edge cannot be parsed
    """
    if not isinstance(payload, dict):
        raise WorkflowPayloadError(MISSING_COLLECTIONS_ERROR)

    for field in ("nodes", "edges"):
        if not isinstance(payload.get(field), list):
            raise WorkflowPayloadError(MISSING_COLLECTIONS_ERROR, field=field)

    try:
        return Workflow.model_validate(payload)
    except ValidationError as e:
        raise WorkflowPayloadError(_describe_validation_error(e)) from e


def simulate_payload(
    payload: Any,
    now: Optional[datetime] = None,
    check_cycles: bool = False
) -> SimulationResult:
    """Simulate a raw graph payload, reporting input-shape errors as a result."""
    try:
        workflow = parse_workflow_payload(payload)
    except WorkflowPayloadError as e:
        logger.warning(f"Rejected malformed workflow payload: {e.message}")
        return SimulationResult(success=False, steps=[], errors=[e.message])

    return simulate_workflow(workflow, now=now, check_cycles=check_cycles)

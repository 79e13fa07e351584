"""FastAPI REST endpoints for the workflow simulator."""

import asyncio
from typing import Any, Callable, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from ..config import AppConfig
from ..core.automations import AutomationCatalog
from ..core.exceptions import SimulationTimeoutError, WorkflowPayloadError
from ..core.logging import get_logger
from ..core.simulator import MISSING_COLLECTIONS_ERROR, parse_workflow_payload, simulate_workflow
from ..core.validator import validate_workflow
from ..models.core import AutomationAction, SimulationResult, ValidationResult, Workflow

logger = get_logger(__name__)

router = APIRouter(tags=["workflow"])


def get_app_config(request: Request) -> AppConfig:
    """Dependency to get the application configuration."""
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Application configuration not initialized"
        )
    return config


def get_automation_catalog(request: Request) -> AutomationCatalog:
    """Dependency to get the automation catalog."""
    catalog = getattr(request.app.state, "automation_catalog", None)
    if catalog is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Automation catalog not initialized"
        )
    return catalog


async def _read_workflow(request: Request) -> Workflow:
    """Decode the request body into a Workflow or raise WorkflowPayloadError."""
    try:
        payload = await request.json()
    except ValueError:
        raise WorkflowPayloadError(MISSING_COLLECTIONS_ERROR)
    return parse_workflow_payload(payload)


async def _run_with_timeout(config: AppConfig, func: Callable, *args: Any, **kwargs: Any):
    """Run a core call in a worker thread, bounded by the configured timeout."""
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs),
            timeout=config.simulation_timeout
        )
    except asyncio.TimeoutError:
        raise SimulationTimeoutError(
            f"Simulation timed out after {config.simulation_timeout}s",
            timeout=config.simulation_timeout
        )


@router.post(
    "/simulate",
    response_model=SimulationResult,
    responses={400: {"model": SimulationResult}, 504: {"model": SimulationResult}},
    summary="Simulate a workflow",
    description="Validate a workflow graph and return its timestamped execution trace"
)
async def simulate(
    request: Request,
    config: AppConfig = Depends(get_app_config)
):
    """
    Simulate a workflow.

    The body is the raw graph `{nodes, edges}`. A body that is not a graph is
    answered with 400 and a failed simulation result carrying one message.
    """
    try:
        workflow = await _read_workflow(request)
    except WorkflowPayloadError as e:
        logger.warning(f"Rejected simulation request: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=SimulationResult(success=False, steps=[], errors=[e.message]).model_dump()
        )

    if config.simulation_delay:
        await asyncio.sleep(config.simulation_delay)

    try:
        result = await _run_with_timeout(
            config, simulate_workflow, workflow, check_cycles=config.check_cycles
        )
    except SimulationTimeoutError as e:
        logger.error(e.message)
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content=SimulationResult(success=False, steps=[], errors=[e.message]).model_dump()
        )

    logger.info(
        f"Simulated workflow with {len(workflow.nodes)} nodes: "
        f"success={result.success}, steps={len(result.steps)}, errors={len(result.errors)}"
    )
    return result


@router.post(
    "/validate",
    response_model=ValidationResult,
    responses={400: {"model": ValidationResult}, 504: {"model": ValidationResult}},
    summary="Validate a workflow",
    description="Check a workflow graph against the structural and field rules"
)
async def validate(
    request: Request,
    check_cycles: Optional[bool] = Query(None, alias="checkCycles", description="Also reject cyclic graphs"),
    config: AppConfig = Depends(get_app_config)
):
    """Validate a workflow without simulating it."""
    try:
        workflow = await _read_workflow(request)
    except WorkflowPayloadError as e:
        logger.warning(f"Rejected validation request: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationResult(is_valid=False, errors=[e.message]).model_dump(by_alias=True)
        )

    if check_cycles is None:
        check_cycles = config.check_cycles

    try:
        result = await _run_with_timeout(
            config, validate_workflow, workflow.nodes, workflow.edges, check_cycles=check_cycles
        )
    except SimulationTimeoutError as e:
        logger.error(e.message)
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content=ValidationResult(is_valid=False, errors=[e.message]).model_dump(by_alias=True)
        )

    logger.debug(f"Workflow validation completed. Valid: {result.is_valid}")
    return result


@router.get(
    "/automations",
    response_model=List[AutomationAction],
    summary="List automation actions",
    description="List the automated actions an automated node can reference"
)
async def list_automations(
    catalog: AutomationCatalog = Depends(get_automation_catalog)
) -> List[AutomationAction]:
    """List available automation actions in registration order."""
    return catalog.list_actions()


@router.get(
    "/automations/{action_id}",
    response_model=AutomationAction,
    summary="Get an automation action",
    description="Get a single automation action by its identifier"
)
async def get_automation(
    action_id: str,
    catalog: AutomationCatalog = Depends(get_automation_catalog)
) -> AutomationAction:
    """Get a single automation action. Unknown ids surface as AutomationNotFoundError."""
    return catalog.require_action(action_id)

"""Core workflow simulator components."""

from .exceptions import (
    WorkflowEngineError,
    WorkflowPayloadError,
    AutomationCatalogError,
    AutomationNotFoundError,
    SimulationTimeoutError,
    ConfigurationError,
    APIError,
)
from .logging import setup_logging, get_logger
from .graph_index import GraphIndex
from .validator import WorkflowValidator, validate_workflow, has_cycle
from .path_generator import describe_node, generate_execution_path
from .simulator import simulate_workflow, simulate_payload, parse_workflow_payload, timestamp_steps
from .automations import AutomationCatalog, default_catalog
from .serializers import serialize_workflow, export_workflow_json, import_workflow_json
from .node_factory import NodeFactory, default_node_data

__all__ = [
    "WorkflowEngineError",
    "WorkflowPayloadError",
    "AutomationCatalogError",
    "AutomationNotFoundError",
    "SimulationTimeoutError",
    "ConfigurationError",
    "APIError",
    "setup_logging",
    "get_logger",
    "GraphIndex",
    "WorkflowValidator",
    "validate_workflow",
    "has_cycle",
    "describe_node",
    "generate_execution_path",
    "simulate_workflow",
    "simulate_payload",
    "parse_workflow_payload",
    "timestamp_steps",
    "AutomationCatalog",
    "default_catalog",
    "serialize_workflow",
    "export_workflow_json",
    "import_workflow_json",
    "NodeFactory",
    "default_node_data",
]

"""Data models for the workflow simulator."""

from .core import (
    NodeKind,
    Position,
    NodeData,
    Node,
    Edge,
    Workflow,
    ValidationResult,
    SimulationResult,
    AutomationAction,
)

__all__ = [
    "NodeKind",
    "Position",
    "NodeData",
    "Node",
    "Edge",
    "Workflow",
    "ValidationResult",
    "SimulationResult",
    "AutomationAction",
]

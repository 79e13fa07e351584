"""Core Pydantic models for the workflow simulator."""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeKind(str, Enum):
    """Enumeration of workflow node kinds."""
    START = "start"
    TASK = "task"
    APPROVAL = "approval"
    AUTOMATED = "automated"
    END = "end"


class Position(BaseModel):
    """Canvas position of a node. Carried through serialization only."""
    x: float = Field(default=0.0, description="Horizontal canvas coordinate")
    y: float = Field(default=0.0, description="Vertical canvas coordinate")


class NodeData(BaseModel):
    """Kind-specific data attached to a workflow node.

    Every field is optional; each kind reads only its own subset. Unknown keys
    are kept so that a round trip through the engine loses nothing.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    label: Optional[str] = Field(None, description="Display label shown on the canvas")
    title: Optional[str] = Field(None, description="Step title")
    description: Optional[str] = Field(None, description="Task description")
    assignee: Optional[str] = Field(None, description="Task assignee")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Task due date")
    custom_fields: Dict[str, Any] = Field(default_factory=dict, alias="customFields")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary key/value metadata")
    approver_role: Optional[str] = Field(None, alias="approverRole", description="Approver role")
    auto_approve_threshold: Optional[float] = Field(None, alias="autoApproveThreshold")
    action_id: Optional[str] = Field(None, alias="actionId", description="Automation action identifier")
    action_params: Dict[str, Any] = Field(default_factory=dict, alias="actionParams")
    end_message: Optional[str] = Field(None, alias="endMessage", description="End message")
    show_summary: Optional[bool] = Field(None, alias="showSummary")

    @field_validator(
        "label", "title", "description", "assignee", "due_date",
        "approver_role", "action_id", "end_message",
        mode="before"
    )
    @classmethod
    def coerce_number_to_text(cls, value):
        """Free-form text fields also accept numbers, stored as their string form."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def display_label(self) -> Optional[str]:
        """Label used in user-facing messages, falling back to the title."""
        return self.label or self.title or None


class Node(BaseModel):
    """A single step in a workflow graph."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Node identifier, unique within a graph")
    type: str = Field(..., description="Node kind tag")
    data: NodeData = Field(default_factory=NodeData, description="Kind-specific data")
    position: Optional[Position] = Field(None, description="Canvas position")

    @field_validator('data', mode='before')
    @classmethod
    def default_missing_data(cls, data):
        """Treat a null data record as an empty one."""
        return {} if data is None else data

    @property
    def kind(self) -> Optional[NodeKind]:
        """The node kind, or None when the type tag is not a known kind."""
        try:
            return NodeKind(self.type)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        """Label or title when present, otherwise the node id."""
        return self.data.display_label or self.id


class Edge(BaseModel):
    """A directed connection between two nodes."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Edge identifier")
    source: str = Field(..., description="Source node ID")
    target: str = Field(..., description="Target node ID")
    source_handle: Optional[str] = Field(None, alias="sourceHandle", description="Source port label")
    target_handle: Optional[str] = Field(None, alias="targetHandle", description="Target port label")


class Workflow(BaseModel):
    """A workflow graph: ordered nodes plus ordered edges."""
    nodes: List[Node] = Field(..., description="Nodes in input order")
    edges: List[Edge] = Field(..., description="Edges in input order")


class ValidationResult(BaseModel):
    """Result of workflow validation."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_valid: bool = Field(..., alias="isValid", description="Whether the workflow is valid")
    errors: List[str] = Field(default_factory=list, description="Validation errors in rule order")


class SimulationResult(BaseModel):
    """Result of a workflow simulation."""
    model_config = ConfigDict(frozen=True)

    success: bool = Field(..., description="Whether the workflow validated and ran")
    steps: List[str] = Field(default_factory=list, description="Timestamped execution steps")
    errors: List[str] = Field(default_factory=list, description="Validation or input errors")


class AutomationAction(BaseModel):
    """An automated action the `automated` node kind can reference."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Action identifier")
    label: str = Field(..., description="Display label")
    params: List[str] = Field(default_factory=list, description="Required parameter names")

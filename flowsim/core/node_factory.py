"""Node creation with per-kind default data."""

from typing import Any, Dict, Optional

from ..models.core import Node, NodeData, NodeKind, Position


def default_node_data(kind: NodeKind) -> Dict[str, Any]:
    """Return the default data record for a freshly created node of a kind."""
    if kind == NodeKind.START:
        return {"label": "Start", "title": "Workflow Start", "metadata": {}}
    if kind == NodeKind.TASK:
        return {
            "label": "Task",
            "title": "New Task",
            "description": "",
            "assignee": "",
            "dueDate": "",
            "customFields": {},
        }
    if kind == NodeKind.APPROVAL:
        return {
            "label": "Approval",
            "title": "Approval Required",
            "approverRole": "Manager",
            "autoApproveThreshold": 0,
        }
    if kind == NodeKind.AUTOMATED:
        return {
            "label": "Automated Step",
            "title": "Automated Action",
            "actionId": "",
            "actionParams": {},
        }
    return {"label": "End", "endMessage": "Workflow completed", "showSummary": False}


class NodeFactory:
    """Creates nodes with ids minted from the factory's own sequence.

    Ids have the form "<kind>-<n>". Each factory counts independently, so two
    editors never share id state.
    """

    def __init__(self, start: int = 0):
        self._counter = start

    @property
    def last_id_number(self) -> int:
        return self._counter

    def next_id(self, kind: NodeKind) -> str:
        self._counter += 1
        return f"{kind.value}-{self._counter}"

    def create_node(
        self,
        kind: NodeKind,
        position: Optional[Position] = None,
        **overrides: Any
    ) -> Node:
        """
        Create a node of the given kind.

        Args:
            kind: Node kind
            position: Optional canvas position
            **overrides: Data fields replacing the defaults, by wire or attribute name

        Returns:
            Node: The new node
        """
        data = default_node_data(kind)
        for key, value in overrides.items():
            field = NodeData.model_fields.get(key)
            data[field.alias if field and field.alias else key] = value
        return Node(
            id=self.next_id(kind),
            type=kind.value,
            data=NodeData.model_validate(data),
            position=position,
        )

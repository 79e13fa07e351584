"""Breadth-first execution path rendering for valid workflows."""

from collections import deque
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence

from ..models.core import Edge, Node, NodeKind
from .graph_index import GraphIndex
from .logging import get_logger

logger = get_logger(__name__)

NO_START_NODE = "No start node found"
UNKNOWN_ICON = "❓"


class StepStyle(NamedTuple):
    """How one node kind is rendered in the execution trace."""
    icon: str
    tag: str
    fallback: str
    body_field: str
    suffix_label: Optional[str] = None
    suffix_field: Optional[str] = None


# Canonical rendering table. Every kind in NodeKind must have an entry.
STEP_STYLES: Dict[NodeKind, StepStyle] = {
    NodeKind.START: StepStyle("▶", "START", "Workflow begins", "title"),
    NodeKind.TASK: StepStyle("📋", "TASK", "Untitled Task", "title", "Assigned to", "assignee"),
    NodeKind.APPROVAL: StepStyle("✅", "APPROVAL", "Approval Required", "title", "Approver", "approver_role"),
    NodeKind.AUTOMATED: StepStyle("⚡", "AUTOMATED", "Automated Step", "title", "Action", "action_id"),
    NodeKind.END: StepStyle("⏹", "END", "Workflow Complete", "end_message"),
}


def describe_node(node: Node) -> str:
    """Render a node as a single "<icon> <TAG>: <body>" trace line."""
    style = STEP_STYLES.get(node.kind)
    if style is None:
        return f"{UNKNOWN_ICON} {node.type}: {node.data.title or 'Unknown'}"

    body = getattr(node.data, style.body_field) or style.fallback
    if style.suffix_field:
        suffix_value = getattr(node.data, style.suffix_field)
        if suffix_value:
            body += f" ({style.suffix_label}: {suffix_value})"

    return f"{style.icon} {style.tag}: {body}"


def traverse(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    visit: Callable[[Node], None]
) -> bool:
    """
    Visit nodes breadth-first from the first start node.

    Each node is visited at most once. Outgoing edges are followed in input
    order, so among siblings the first-declared edge is visited first. Ids
    that name no node are skipped.

    Returns:
        bool: False when the graph has no start node
    """
    index = GraphIndex(nodes, edges)
    start_nodes = index.nodes_of_kind(NodeKind.START)
    if not start_nodes:
        return False

    visited = set()
    queue = deque([start_nodes[0].id])

    while queue:
        current_id = queue.popleft()
        if current_id in visited:
            continue
        visited.add(current_id)

        current = index.get(current_id)
        if current is None:
            continue

        visit(current)

        for edge in index.outgoing_edges(current_id):
            if edge.target not in visited:
                queue.append(edge.target)

    return True


def generate_execution_path(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[str]:
    """Generate one description line per visited node, in visitation order."""
    steps: List[str] = []
    if not traverse(nodes, edges, lambda node: steps.append(describe_node(node))):
        logger.debug("Execution path requested for a workflow without a start node")
        return [NO_START_NODE]

    logger.debug(f"Generated execution path with {len(steps)} steps")
    return steps

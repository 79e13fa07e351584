"""Structural and field validation for workflow graphs."""

from typing import Dict, List, Optional, Sequence

from ..models.core import Edge, Node, NodeKind, ValidationResult
from .graph_index import GraphIndex
from .logging import get_logger

logger = get_logger(__name__)

EMPTY_WORKFLOW_ERROR = "Workflow is empty. Add at least one node."
MISSING_START_ERROR = "Invalid workflow: missing Start node."
MULTIPLE_START_ERROR = "Invalid workflow: only one Start node allowed (found {count})."
MISSING_END_ERROR = "Invalid workflow: missing End node."
START_INCOMING_ERROR = "Start node cannot have incoming connections."
END_OUTGOING_ERROR = 'End node "{node_id}" cannot have outgoing connections.'
ISOLATED_NODE_ERROR = 'Isolated node detected: "{name}". Connect it to the workflow.'
UNREACHABLE_NODE_ERROR = 'Node "{name}" is unreachable from Start.'
CYCLE_ERROR = "Workflow contains a cycle."


class WorkflowValidator:
    """Checks a workflow graph against the structural and per-node rules.

    Rules run in a fixed order and every violation is collected, so a caller
    can fix all issues before resubmitting. Input is never mutated and
    malformed-but-typed input is reported as errors, not raised.
    """

    def __init__(self, check_cycles: bool = False):
        self.check_cycles = check_cycles

    def validate(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> ValidationResult:
        """
        Validate a workflow graph.

        Args:
            nodes: Workflow nodes in input order
            edges: Workflow edges in input order

        Returns:
            ValidationResult: Verdict with errors in rule order
        """
        if not nodes:
            logger.debug("Validation rejected empty workflow")
            return ValidationResult(is_valid=False, errors=[EMPTY_WORKFLOW_ERROR])

        try:
            index = GraphIndex(nodes, edges)
            errors: List[str] = []

            start_nodes = index.nodes_of_kind(NodeKind.START)
            end_nodes = index.nodes_of_kind(NodeKind.END)

            self._validate_start_count(start_nodes, errors)
            self._validate_end_count(end_nodes, errors)
            self._validate_start_incoming(start_nodes, index, errors)
            self._validate_end_outgoing(end_nodes, index, errors)
            self._validate_isolated_nodes(index, errors)
            self._validate_reachability(start_nodes, index, errors)
            self._validate_node_fields(index, errors)

            if self.check_cycles and has_cycle(nodes, edges):
                errors.append(CYCLE_ERROR)

        except Exception as e:
            logger.error(f"Error during workflow validation: {str(e)}", exc_info=True)
            return ValidationResult(is_valid=False, errors=[f"Validation error: {str(e)}"])

        logger.debug(
            f"Workflow validation completed. Nodes: {len(nodes)}, Edges: {len(edges)}, "
            f"Valid: {not errors}, Errors: {len(errors)}"
        )
        return ValidationResult(is_valid=not errors, errors=errors)

    def _validate_start_count(self, start_nodes: List[Node], errors: List[str]):
        if not start_nodes:
            errors.append(MISSING_START_ERROR)
        elif len(start_nodes) > 1:
            errors.append(MULTIPLE_START_ERROR.format(count=len(start_nodes)))

    def _validate_end_count(self, end_nodes: List[Node], errors: List[str]):
        if not end_nodes:
            errors.append(MISSING_END_ERROR)

    def _validate_start_incoming(self, start_nodes: List[Node], index: GraphIndex, errors: List[str]):
        if len(start_nodes) == 1 and index.incoming_edges(start_nodes[0].id):
            errors.append(START_INCOMING_ERROR)

    def _validate_end_outgoing(self, end_nodes: List[Node], index: GraphIndex, errors: List[str]):
        for end_node in end_nodes:
            if index.outgoing_edges(end_node.id):
                errors.append(END_OUTGOING_ERROR.format(node_id=end_node.id))

    def _validate_isolated_nodes(self, index: GraphIndex, errors: List[str]):
        """A lone node in a single-node graph is not considered isolated."""
        if len(index.nodes) <= 1:
            return

        for node in index.nodes:
            if not index.is_connected(node.id):
                errors.append(ISOLATED_NODE_ERROR.format(name=node.display_name))

    def _validate_reachability(self, start_nodes: List[Node], index: GraphIndex, errors: List[str]):
        if len(start_nodes) != 1 or len(index.nodes) <= 1:
            return

        reachable = index.reachable_from(start_nodes[0].id)
        for node in index.nodes:
            if node.kind != NodeKind.START and node.id not in reachable:
                errors.append(UNREACHABLE_NODE_ERROR.format(name=node.display_name))

    def _validate_node_fields(self, index: GraphIndex, errors: List[str]):
        for node in index.nodes:
            error = validate_node_data(node)
            if error:
                errors.append(error)


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_node_data(node: Node) -> Optional[str]:
    """Return the field error for a node, or None when its data is complete."""
    data = node.data
    kind = node.kind

    if kind == NodeKind.TASK and _is_blank(data.title):
        return f'Task node "{node.id}" requires a title.'
    if kind == NodeKind.APPROVAL and _is_blank(data.title):
        return f'Approval node "{node.id}" requires a title.'
    if kind == NodeKind.AUTOMATED and _is_blank(data.action_id):
        return f'Automated step "{node.id}" requires an action to be selected.'
    return None


def validate_workflow(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    check_cycles: bool = False
) -> ValidationResult:
    """Validate a workflow graph. Cycle checking is opt-in."""
    return WorkflowValidator(check_cycles=check_cycles).validate(nodes, edges)


def has_cycle(nodes: Sequence[Node], edges: Sequence[Edge]) -> bool:
    """Check if the graph contains a cycle using DFS with a recursion stack.

    The walk is iterative over an explicit stack of (node_id, neighbors) pairs.
    """
    graph: Dict[str, List[str]] = {node.id: [] for node in nodes}
    for edge in edges:
        graph.setdefault(edge.source, []).append(edge.target)

    visited = set()
    rec_stack = set()

    for root in list(graph):
        if root in visited:
            continue

        visited.add(root)
        rec_stack.add(root)
        stack = [(root, iter(graph.get(root, [])))]

        while stack:
            node_id, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor in rec_stack:
                    return True
                if neighbor not in visited:
                    visited.add(neighbor)
                    rec_stack.add(neighbor)
                    stack.append((neighbor, iter(graph.get(neighbor, []))))
                    break
            else:
                rec_stack.remove(node_id)
                stack.pop()

    return False

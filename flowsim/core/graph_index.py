"""Lookup structures shared by the validator and the path generator."""

from collections import deque
from typing import Dict, List, Optional, Sequence, Set

from ..models.core import Edge, Node, NodeKind


class GraphIndex:
    """Id and adjacency indexes over a workflow snapshot.

    Built once per call so that every lookup during validation or traversal is
    O(1). Edge endpoints that name no node stay in the adjacency maps; callers
    see them as ids for which `get` returns None.
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]):
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.node_by_id: Dict[str, Node] = {}
        self.outgoing: Dict[str, List[Edge]] = {}
        self.incoming: Dict[str, List[Edge]] = {}
        self.connected_ids: Set[str] = set()

        for node in self.nodes:
            # first occurrence wins
            self.node_by_id.setdefault(node.id, node)

        for edge in self.edges:
            self.outgoing.setdefault(edge.source, []).append(edge)
            self.incoming.setdefault(edge.target, []).append(edge)
            self.connected_ids.add(edge.source)
            self.connected_ids.add(edge.target)

    def get(self, node_id: str) -> Optional[Node]:
        """Return the node with the given id, or None for an unknown id."""
        return self.node_by_id.get(node_id)

    def nodes_of_kind(self, kind: NodeKind) -> List[Node]:
        """Return nodes of the given kind in input order."""
        return [node for node in self.nodes if node.kind == kind]

    def outgoing_edges(self, node_id: str) -> List[Edge]:
        return self.outgoing.get(node_id, [])

    def incoming_edges(self, node_id: str) -> List[Edge]:
        return self.incoming.get(node_id, [])

    def is_connected(self, node_id: str) -> bool:
        """Whether the id appears as the source or target of any edge."""
        return node_id in self.connected_ids

    def reachable_from(self, node_id: str) -> Set[str]:
        """Find all ids reachable from node_id by following edges forward."""
        reachable = {node_id}
        queue = deque([node_id])

        while queue:
            current = queue.popleft()
            for edge in self.outgoing_edges(current):
                if edge.target not in reachable:
                    reachable.add(edge.target)
                    queue.append(edge.target)

        return reachable

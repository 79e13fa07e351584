"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from flowsim.config import get_testing_config, reset_config
from flowsim.factory import create_app
from flowsim.models import Edge, Node, Workflow


def build_node(node_id, node_type, **data):
    """Build a node with the given id, type tag and data fields."""
    return Node(id=node_id, type=node_type, data=data)


def build_edge(source, target, edge_id=None):
    """Build an edge, deriving its id from the endpoints when omitted."""
    return Edge(id=edge_id or f"{source}->{target}", source=source, target=target)


@pytest.fixture
def make_node():
    """Factory fixture for nodes."""
    return build_node


@pytest.fixture
def make_edge():
    """Factory fixture for edges."""
    return build_edge


@pytest.fixture
def linear_workflow():
    """Start -> task -> end, the smallest realistic valid workflow."""
    return Workflow(
        nodes=[
            build_node("s1", "start"),
            build_node("t1", "task", title="Review"),
            build_node("e1", "end"),
        ],
        edges=[
            build_edge("s1", "t1", "a"),
            build_edge("t1", "e1", "b"),
        ],
    )


@pytest.fixture
def linear_payload():
    """Wire form of the linear workflow."""
    return {
        "nodes": [
            {"id": "s1", "type": "start", "data": {}},
            {"id": "t1", "type": "task", "data": {"title": "Review"}},
            {"id": "e1", "type": "end", "data": {}},
        ],
        "edges": [
            {"id": "a", "source": "s1", "target": "t1"},
            {"id": "b", "source": "t1", "target": "e1"},
        ],
    }


@pytest.fixture
def test_config():
    """Configuration for API tests."""
    return get_testing_config()


@pytest.fixture
def client(test_config):
    """Create a test client."""
    reset_config()
    app = create_app(test_config)
    with TestClient(app) as test_client:
        yield test_client
    reset_config()

"""JSON codec for workflow graphs."""

import json
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from ..models.core import Edge, Node, Workflow
from .logging import get_logger

logger = get_logger(__name__)


def serialize_workflow(nodes: Sequence[Node], edges: Sequence[Edge]) -> Dict[str, Any]:
    """Serialize a workflow into its JSON-compatible wire shape."""
    return {
        "nodes": [
            node.model_dump(mode="json", by_alias=True, exclude_none=True)
            for node in nodes
        ],
        "edges": [
            edge.model_dump(mode="json", by_alias=True, exclude_none=True)
            for edge in edges
        ],
    }


def export_workflow_json(nodes: Sequence[Node], edges: Sequence[Edge], indent: int = 2) -> str:
    """Export a workflow as a JSON string."""
    return json.dumps(serialize_workflow(nodes, edges), indent=indent, ensure_ascii=False)


def import_workflow_json(json_string: str) -> Optional[Workflow]:
    """
    Import a workflow from a JSON string.

    Returns:
        The parsed Workflow, or None if the text is not JSON, lacks node or
        edge lists, or holds entries that cannot be parsed
    """
    try:
        parsed = json.loads(json_string)
    except (TypeError, ValueError) as e:
        logger.warning(f"Workflow import failed, invalid JSON: {str(e)}")
        return None

    if not isinstance(parsed, dict) or not isinstance(parsed.get("nodes"), list) \
            or not isinstance(parsed.get("edges"), list):
        logger.warning("Workflow import failed, missing nodes or edges")
        return None

    try:
        return Workflow.model_validate(parsed)
    except ValidationError as e:
        logger.warning(f"Workflow import failed: {e.error_count()} invalid entries")
        return None

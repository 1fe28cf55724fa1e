"""
Serialization

JSON-ready representations of GraphStore and Layout.

RULES:
1. Enums use their .value.
2. Paths are POSIX strings.
3. Ids are preserved, together with the store's id counters, so that a
   restored store never reissues an id.
4. Mapping keys are stringified ids (JSON object keys are strings).
"""

from __future__ import annotations
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict

from ..contracts.base import (
    Relation, NodeKind, NodeData, EdgeData,
    FolderContents, FileContents, ItemContents, NodeContents,
)
from ..contracts.geometry import Layout, Rect, Line
from ..contracts.errors import GraphIntegrityError
from ..graph.store import GraphStore


FORMAT_VERSION = 1


class CodemapEncoder(json.JSONEncoder):
    """JSON encoder for codemap value types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, PurePath):
            return obj.as_posix()
        if isinstance(obj, NodeData):
            return _contents_to_dict(obj.contents)
        if isinstance(obj, (FolderContents, FileContents, ItemContents)):
            return _contents_to_dict(obj)
        if is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


def dumps(data: Any, **kwargs) -> str:
    kwargs.setdefault("indent", 2)
    return json.dumps(data, cls=CodemapEncoder, **kwargs)


# =============================================================================
# GRAPH
# =============================================================================

def _contents_to_dict(contents: NodeContents) -> Dict[str, Any]:
    if isinstance(contents, ItemContents):
        return {
            "kind": NodeKind.ITEM.value,
            "display_name": contents.display_name,
            "moniker": contents.moniker,
        }
    return {
        "kind": contents.kind.value,
        "display_name": contents.display_name,
        "path": contents.path.as_posix(),
    }


def _contents_from_dict(data: Dict[str, Any]) -> NodeContents:
    kind = NodeKind(data["kind"])
    if kind is NodeKind.FOLDER:
        return FolderContents(data["display_name"], data["path"])
    if kind is NodeKind.FILE:
        return FileContents(data["display_name"], data["path"])
    return ItemContents(data["display_name"], data.get("moniker"))


def graph_to_dict(graph: GraphStore) -> Dict[str, Any]:
    """Serialize a store, ids and id counters included."""
    nodes = []
    for node_id in sorted(graph.nodes()):
        entry = {"id": node_id}
        entry.update(_contents_to_dict(graph.node(node_id).contents))
        nodes.append(entry)
    edges = []
    for edge_id in sorted(graph.edges()):
        edge = graph.edge(edge_id)
        edges.append({
            "id": edge_id,
            "from": edge.from_node,
            "to": edge.to_node,
            "relation": edge.relation.value,
        })
    return {
        "version": FORMAT_VERSION,
        "next_node_id": graph.next_node_id,
        "next_edge_id": graph.next_edge_id,
        "nodes": nodes,
        "edges": edges,
    }


def graph_from_dict(data: Dict[str, Any]) -> GraphStore:
    """
    Rebuild a store from graph_to_dict() output.

    Raises GraphIntegrityError for malformed input or dangling edges.
    """
    try:
        nodes = {
            int(entry["id"]): NodeData(_contents_from_dict(entry))
            for entry in data.get("nodes", [])
        }
        edges = {
            int(entry["id"]): EdgeData(
                int(entry["from"]),
                int(entry["to"]),
                Relation(entry.get("relation", Relation.IS_PARENT_OF.value)),
            )
            for entry in data.get("edges", [])
        }
        next_node_id = data.get("next_node_id")
        next_edge_id = data.get("next_edge_id")
        if next_node_id is not None:
            next_node_id = int(next_node_id)
        if next_edge_id is not None:
            next_edge_id = int(next_edge_id)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise GraphIntegrityError(f"Malformed graph document: {exc!r}") from exc

    return GraphStore.restore(
        nodes,
        edges,
        next_node_id=next_node_id,
        next_edge_id=next_edge_id,
    )


# =============================================================================
# LAYOUT
# =============================================================================

def rect_to_dict(rect: Rect) -> Dict[str, float]:
    return {
        "x": rect.origin.x,
        "y": rect.origin.y,
        "width": rect.width,
        "height": rect.height,
    }


def line_to_dict(line: Line) -> Dict[str, float]:
    return {
        "x1": line.start.x,
        "y1": line.start.y,
        "x2": line.end.x,
        "y2": line.end.y,
    }


def layout_to_dict(layout: Layout) -> Dict[str, Any]:
    return {
        "rects": {
            str(node_id): rect_to_dict(rect)
            for node_id, rect in sorted(layout.rects.items())
        },
        "lines": {
            str(edge_id): line_to_dict(line)
            for edge_id, line in sorted(layout.lines.items())
        },
    }

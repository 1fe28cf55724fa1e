"""
Graph Store
===========

Arena of nodes and edges addressed by integer handles.

The store is the sole allocator of NodeId / EdgeId. It keeps a forward
(outgoing) and a reverse (incoming) adjacency index per node, both
consistent with the edge table:

- every edge id appears exactly once in the outgoing list of its source
- every edge id appears exactly once in the incoming list of its target

Lookups by unknown id return None. Nothing here raises on well-formed
input.
"""

from __future__ import annotations
from pathlib import PurePath
from typing import Dict, Iterator, List, Optional, Tuple, Union

import networkx as nx

from ..contracts.base import (
    NodeId, EdgeId, Relation, NodeData, EdgeData,
    FolderContents, FileContents, ItemContents,
)
from ..contracts.errors import GraphIntegrityError


class GraphStore:
    """
    Mutable structural graph of a codebase.

    Populated once per analysis run by external collaborators and
    treated as frozen while a layout is computed.
    """

    def __init__(self):
        self._nodes: Dict[NodeId, NodeData] = {}
        self._edges: Dict[EdgeId, EdgeData] = {}
        self._outgoing: Dict[NodeId, List[EdgeId]] = {}
        self._incoming: Dict[NodeId, List[EdgeId]] = {}
        self._next_node_id: NodeId = 0
        self._next_edge_id: EdgeId = 0

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def add_node(self, data: NodeData) -> NodeId:
        """Insert a node and return its fresh id."""
        node_id = self._next_node_id
        self._next_node_id += 1
        self._nodes[node_id] = data
        self._outgoing[node_id] = []
        self._incoming[node_id] = []
        return node_id

    def add_edge(self, data: EdgeData) -> EdgeId:
        """
        Insert an edge and return its fresh id.

        Both endpoints must already be in this store.
        """
        for endpoint in (data.from_node, data.to_node):
            if endpoint not in self._nodes:
                raise GraphIntegrityError(
                    f"Edge endpoint {endpoint!r} is not a node of this store"
                )
        edge_id = self._next_edge_id
        self._next_edge_id += 1
        self._edges[edge_id] = data
        self._outgoing[data.from_node].append(edge_id)
        self._incoming[data.to_node].append(edge_id)
        return edge_id

    def add_folder(self, display_name: str, path: Union[str, PurePath]) -> NodeId:
        return self.add_node(NodeData(FolderContents(display_name, path)))

    def add_file(self, display_name: str, path: Union[str, PurePath]) -> NodeId:
        return self.add_node(NodeData(FileContents(display_name, path)))

    def add_item(self, display_name: str, moniker: Optional[str] = None) -> NodeId:
        return self.add_node(NodeData(ItemContents(display_name, moniker)))

    def add_parent_edge(self, parent: NodeId, child: NodeId) -> EdgeId:
        """Insert `parent -> child` with Relation.IS_PARENT_OF."""
        return self.add_edge(EdgeData(parent, child, Relation.IS_PARENT_OF))

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def node(self, node_id: NodeId) -> Optional[NodeData]:
        return self._nodes.get(node_id)

    def edge(self, edge_id: EdgeId) -> Optional[EdgeData]:
        return self._edges.get(edge_id)

    def outgoing_edges(self, node_id: NodeId) -> Optional[Tuple[EdgeId, ...]]:
        """Edge ids with node_id as source, or None for an unknown node."""
        edges = self._outgoing.get(node_id)
        return tuple(edges) if edges is not None else None

    def incoming_edges(self, node_id: NodeId) -> Optional[Tuple[EdgeId, ...]]:
        """Edge ids with node_id as target, or None for an unknown node."""
        edges = self._incoming.get(node_id)
        return tuple(edges) if edges is not None else None

    def neighbors(self, node_id: NodeId) -> Optional[List[NodeId]]:
        """Targets of all outgoing edges, in edge insertion order."""
        edges = self._outgoing.get(node_id)
        if edges is None:
            return None
        return [self._edges[edge_id].to_node for edge_id in edges]

    def children(self, node_id: NodeId) -> Optional[List[NodeId]]:
        """Targets of outgoing IS_PARENT_OF edges."""
        edges = self._outgoing.get(node_id)
        if edges is None:
            return None
        return [
            self._edges[edge_id].to_node
            for edge_id in edges
            if self._edges[edge_id].relation is Relation.IS_PARENT_OF
        ]

    def roots(self) -> List[NodeId]:
        """Nodes without an incoming IS_PARENT_OF edge (top-level folders)."""
        return [
            node_id for node_id, incoming in self._incoming.items()
            if not any(
                self._edges[edge_id].relation is Relation.IS_PARENT_OF
                for edge_id in incoming
            )
        ]

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    def nodes(self) -> Iterator[NodeId]:
        """All node ids. Order is not part of the contract."""
        return iter(list(self._nodes))

    def edges(self) -> Iterator[EdgeId]:
        """All edge ids. Order is not part of the contract."""
        return iter(list(self._edges))

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    @property
    def next_node_id(self) -> NodeId:
        return self._next_node_id

    @property
    def next_edge_id(self) -> EdgeId:
        return self._next_edge_id

    @classmethod
    def restore(
        cls,
        nodes: Dict[NodeId, NodeData],
        edges: Dict[EdgeId, EdgeData],
        next_node_id: Optional[NodeId] = None,
        next_edge_id: Optional[EdgeId] = None,
    ) -> GraphStore:
        """
        Rebuild a store with the given ids.

        Adjacency is rebuilt in ascending edge id order, which is the
        insertion order of the store that produced the ids. Id counters
        never move backwards past an id already in use.
        """
        store = cls()
        for node_id in sorted(nodes):
            store._nodes[node_id] = nodes[node_id]
            store._outgoing[node_id] = []
            store._incoming[node_id] = []
        for edge_id in sorted(edges):
            edge = edges[edge_id]
            for endpoint in (edge.from_node, edge.to_node):
                if endpoint not in store._nodes:
                    raise GraphIntegrityError(
                        f"Edge {edge_id} references unknown node {endpoint!r}"
                    )
            store._edges[edge_id] = edge
            store._outgoing[edge.from_node].append(edge_id)
            store._incoming[edge.to_node].append(edge_id)
        store._next_node_id = max(
            next_node_id or 0, max(store._nodes, default=-1) + 1
        )
        store._next_edge_id = max(
            next_edge_id or 0, max(store._edges, default=-1) + 1
        )
        return store

    # -------------------------------------------------------------------------
    # Integrity & interop
    # -------------------------------------------------------------------------

    def check_integrity(self) -> Tuple[str, ...]:
        """
        Verify the adjacency indices against the edge table.

        Returns human-readable violations; empty when consistent.
        """
        violations: List[str] = []
        for edge_id, edge in self._edges.items():
            for endpoint in (edge.from_node, edge.to_node):
                if endpoint not in self._nodes:
                    violations.append(f"edge {edge_id}: unknown endpoint {endpoint}")
            out_count = self._outgoing.get(edge.from_node, []).count(edge_id)
            if out_count != 1:
                violations.append(
                    f"edge {edge_id}: appears {out_count} times in outgoing of {edge.from_node}"
                )
            in_count = self._incoming.get(edge.to_node, []).count(edge_id)
            if in_count != 1:
                violations.append(
                    f"edge {edge_id}: appears {in_count} times in incoming of {edge.to_node}"
                )
        for index_name, index, attr in (
            ("outgoing", self._outgoing, "from_node"),
            ("incoming", self._incoming, "to_node"),
        ):
            for node_id, edge_ids in index.items():
                for edge_id in edge_ids:
                    edge = self._edges.get(edge_id)
                    if edge is None or getattr(edge, attr) != node_id:
                        violations.append(
                            f"node {node_id}: stray edge {edge_id} in {index_name}"
                        )
        return tuple(violations)

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Structural view for topology checks (forest shape, components).

        Node keys are NodeIds, edge keys are EdgeIds. The store remains
        the source of truth; the view is rebuilt on every call.
        """
        graph = nx.MultiDiGraph()
        for node_id, data in self._nodes.items():
            graph.add_node(
                node_id,
                kind=data.kind.value,
                display_name=data.display_name,
            )
        for edge_id, edge in self._edges.items():
            graph.add_edge(
                edge.from_node,
                edge.to_node,
                key=edge_id,
                relation=edge.relation.value,
            )
        return graph

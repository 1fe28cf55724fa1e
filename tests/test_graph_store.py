"""
Graph Store Tests
=================

Identity allocation, adjacency consistency and absent-id lookups.
"""

import pytest
import networkx as nx
from hypothesis import given

from codemap.contracts import (
    EdgeData, FileContents, FolderContents, GraphIntegrityError, ItemContents,
    NodeData, NodeKind, Relation,
)
from codemap.graph import GraphStore
from tests.fixtures import graphs, make_folder_file_item


class TestIdentity:

    def test_ids_are_monotonic_and_unique(self):
        """Node and edge ids increase and are never shared."""
        graph = GraphStore()
        nodes = [graph.add_item(f"i{i}") for i in range(5)]
        assert nodes == sorted(nodes)
        assert len(set(nodes)) == 5

        edges = [graph.add_parent_edge(nodes[0], n) for n in nodes[1:]]
        assert edges == sorted(edges)
        assert len(set(edges)) == 4

    def test_node_and_edge_counters_are_independent(self):
        graph = GraphStore()
        a = graph.add_item("a")
        b = graph.add_item("b")
        e = graph.add_parent_edge(a, b)
        assert e == 0
        assert graph.add_item("c") == 2

    def test_payload_is_stored_as_given(self):
        graph = GraphStore()
        data = NodeData(ItemContents("foo", moniker="rust-analyzer::foo"))
        node_id = graph.add_node(data)
        assert graph.node(node_id) is data
        assert graph.node(node_id).kind is NodeKind.ITEM

    def test_paths_are_normalized_to_pure_paths(self):
        graph = GraphStore()
        node_id = graph.add_file("x", "root/x")
        contents = graph.node(node_id).contents
        assert isinstance(contents, FileContents)
        assert contents.path.as_posix() == "root/x"
        assert contents.path.name == "x"


class TestLookup:

    def test_unknown_ids_return_none(self):
        """Absent ids are never fatal."""
        graph = GraphStore()
        assert graph.node(42) is None
        assert graph.edge(42) is None
        assert graph.outgoing_edges(42) is None
        assert graph.incoming_edges(42) is None
        assert graph.neighbors(42) is None
        assert graph.children(42) is None
        assert 42 not in graph

    def test_adjacency_of_chain(self):
        graph, ids = make_folder_file_item()
        assert graph.outgoing_edges(ids["A"]) == (ids["A->B"],)
        assert graph.incoming_edges(ids["A"]) == ()
        assert graph.incoming_edges(ids["B"]) == (ids["A->B"],)
        assert graph.outgoing_edges(ids["B"]) == (ids["B->C"],)
        assert graph.outgoing_edges(ids["C"]) == ()

    def test_neighbors_follow_outgoing_edges_only(self):
        graph, ids = make_folder_file_item()
        assert graph.neighbors(ids["B"]) == [ids["C"]]
        assert graph.neighbors(ids["C"]) == []

    def test_children_filter_parent_relation(self):
        graph, ids = make_folder_file_item()
        assert graph.children(ids["A"]) == [ids["B"]]
        assert graph.children(ids["B"]) == [ids["C"]]

    def test_roots_are_top_level_folders(self):
        graph, ids = make_folder_file_item()
        other = graph.add_folder("other", "other")
        assert sorted(graph.roots()) == sorted([ids["A"], other])

    def test_enumeration_covers_everything(self):
        graph, ids = make_folder_file_item()
        assert sorted(graph.nodes()) == sorted([ids["A"], ids["B"], ids["C"]])
        assert sorted(graph.edges()) == sorted([ids["A->B"], ids["B->C"]])
        assert graph.node_count == len(graph) == 3
        assert graph.edge_count == 2


class TestIntegrity:

    def test_edge_to_foreign_node_is_rejected(self):
        graph = GraphStore()
        a = graph.add_item("a")
        with pytest.raises(GraphIntegrityError):
            graph.add_edge(EdgeData(a, 99, Relation.IS_PARENT_OF))
        # Nothing was allocated
        assert graph.edge_count == 0
        assert graph.outgoing_edges(a) == ()

    @given(graphs())
    def test_adjacency_matches_edge_table(self, graph):
        """Each edge appears once in its source's outgoing and target's incoming list."""
        assert graph.check_integrity() == ()
        for edge_id in graph.edges():
            edge = graph.edge(edge_id)
            assert graph.outgoing_edges(edge.from_node).count(edge_id) == 1
            assert graph.incoming_edges(edge.to_node).count(edge_id) == 1
        total_out = sum(len(graph.outgoing_edges(n)) for n in graph.nodes())
        total_in = sum(len(graph.incoming_edges(n)) for n in graph.nodes())
        assert total_out == total_in == graph.edge_count

    def test_check_integrity_reports_corruption(self):
        graph, ids = make_folder_file_item()
        graph._outgoing[ids["A"]].append(ids["B->C"])
        violations = graph.check_integrity()
        assert violations
        assert any("stray edge" in v for v in violations)


class TestNetworkxView:

    def test_view_preserves_ids_and_attributes(self):
        graph, ids = make_folder_file_item()
        view = graph.to_networkx()
        assert set(view.nodes) == {ids["A"], ids["B"], ids["C"]}
        assert view.nodes[ids["A"]]["kind"] == "folder"
        assert view.nodes[ids["C"]]["display_name"] == "foo"
        assert view.has_edge(ids["A"], ids["B"], key=ids["A->B"])
        assert view.edges[ids["B"], ids["C"], ids["B->C"]]["relation"] == "is_parent_of"

    def test_folder_file_item_graph_is_a_forest(self):
        graph, _ = make_folder_file_item()
        graph.add_folder("second_root", "second_root")
        assert nx.is_forest(graph.to_networkx())

    def test_view_is_a_copy(self):
        graph, ids = make_folder_file_item()
        view = graph.to_networkx()
        view.remove_node(ids["A"])
        assert ids["A"] in graph
        assert graph.edge_count == 2


class TestContents:

    def test_variants_expose_kind(self):
        assert FolderContents("r", "r").kind is NodeKind.FOLDER
        assert FileContents("x", "r/x").kind is NodeKind.FILE
        assert ItemContents("foo").kind is NodeKind.ITEM
        assert ItemContents("foo").moniker is None

    def test_relation_is_an_enumeration(self):
        assert list(Relation) == [Relation.IS_PARENT_OF]
        assert EdgeData(0, 1).relation is Relation.IS_PARENT_OF

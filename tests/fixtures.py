"""
Test Fixtures

Explicit graph builders and hypothesis strategies shared by the tests.
"""

from typing import Dict, Tuple

from hypothesis import strategies as st
from hypothesis.strategies import composite

from codemap.contracts import EdgeData, Relation, Vec2
from codemap.graph import GraphStore


# =============================================================================
# EXPLICIT GRAPHS
# =============================================================================

def make_folder_file_item() -> Tuple[GraphStore, Dict[str, int]]:
    """root/ -> root/x -> foo, both IS_PARENT_OF."""
    graph = GraphStore()
    ids = {
        "A": graph.add_folder("root", "root"),
        "B": graph.add_file("x", "root/x"),
        "C": graph.add_item("foo"),
    }
    ids["A->B"] = graph.add_parent_edge(ids["A"], ids["B"])
    ids["B->C"] = graph.add_parent_edge(ids["B"], ids["C"])
    return graph, ids


def make_pair(with_edge: bool = True) -> Tuple[GraphStore, int, int]:
    graph = GraphStore()
    a = graph.add_folder("a", "a")
    b = graph.add_file("b", "a/b")
    if with_edge:
        graph.add_edge(EdgeData(a, b, Relation.IS_PARENT_OF))
    return graph, a, b


def make_isolated(count: int) -> GraphStore:
    graph = GraphStore()
    for i in range(count):
        graph.add_item(f"item_{i}", moniker=f"pkg::item_{i}")
    return graph


# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

coordinates = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False)

positions = st.builds(Vec2, coordinates, coordinates)


@composite
def graphs(draw, max_nodes: int = 6, max_edges: int = 8):
    """Arbitrary directed graphs (self-loops and parallel edges included)."""
    graph = GraphStore()
    node_count = draw(st.integers(min_value=0, max_value=max_nodes))
    node_ids = [graph.add_item(f"n{i}") for i in range(node_count)]
    if node_ids:
        pairs = draw(st.lists(
            st.tuples(st.sampled_from(node_ids), st.sampled_from(node_ids)),
            max_size=max_edges,
        ))
        for source, target in pairs:
            graph.add_edge(EdgeData(source, target, Relation.IS_PARENT_OF))
    return graph

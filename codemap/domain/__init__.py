"""
Domain Subpackage

Serialization of graphs and layouts for hand-off to exporters.
"""

from .serialization import (
    CodemapEncoder, dumps, graph_to_dict, graph_from_dict, layout_to_dict,
)

__all__ = [
    'CodemapEncoder', 'dumps', 'graph_to_dict', 'graph_from_dict',
    'layout_to_dict',
]

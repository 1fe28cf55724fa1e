"""
codemap
=======

Structural graph of a codebase and its force-directed 2-D layout.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Ids, node/edge payloads, geometry value types, errors
   - MUST NOT: hold behavior beyond value arithmetic

2. GRAPH STORE (graph/)
   - Integer-handle arena with forward and reverse adjacency
   - MUST NOT: know about geometry

3. LAYOUT (layout/)
   - Force model (pure) and layout engine (placement, refinement,
     edge projection)
   - MUST NOT: mutate the graph store

4. SERIALIZATION (domain/)
   - JSON-ready dicts for graphs and layouts

Populating the store (filesystem walk, language-service symbols) and
rendering the layout are done by callers.
"""

from .config import LayoutConfig
from .contracts import (
    NodeId, EdgeId, Relation, NodeKind,
    FolderContents, FileContents, ItemContents,
    NodeData, EdgeData, Vec2, Rect, Line, Layout,
    CodemapError, GraphIntegrityError, ConfigError,
)
from .graph import GraphStore
from .layout import LayoutEngine, compute_layout

__version__ = "0.1.0"

__all__ = [
    'LayoutConfig',
    'NodeId', 'EdgeId', 'Relation', 'NodeKind',
    'FolderContents', 'FileContents', 'ItemContents',
    'NodeData', 'EdgeData', 'Vec2', 'Rect', 'Line', 'Layout',
    'CodemapError', 'GraphIntegrityError', 'ConfigError',
    'GraphStore', 'LayoutEngine', 'compute_layout',
]

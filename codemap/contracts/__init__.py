"""
Contracts Module

Data types shared by the graph store, the layout engine and the
external collaborators that populate or consume them.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Closed variants are enumerations, never booleans
3. Identity is an integer handle, never an object reference
"""

from .base import (
    NodeId, EdgeId, Relation, NodeKind,
    FolderContents, FileContents, ItemContents, NodeContents,
    NodeData, EdgeData,
)
from .geometry import Vec2, Rect, Line, Layout
from .errors import CodemapError, GraphIntegrityError, ConfigError

__all__ = [
    'NodeId', 'EdgeId', 'Relation', 'NodeKind',
    'FolderContents', 'FileContents', 'ItemContents', 'NodeContents',
    'NodeData', 'EdgeData',
    'Vec2', 'Rect', 'Line', 'Layout',
    'CodemapError', 'GraphIntegrityError', 'ConfigError',
]

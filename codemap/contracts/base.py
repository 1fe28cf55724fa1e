"""
Base Contracts and Shared Types

Identity handles and node/edge payloads of the structural code graph.
All types here are IMMUTABLE and represent pure data.

IDENTITY:
=========
- NodeId / EdgeId are plain integers allocated by a single GraphStore
- Handles are monotonically increasing and never reused
- Handles are independent of any object's lifetime or address
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PurePosixPath
from typing import Optional, Union


NodeId = int
EdgeId = int


# =============================================================================
# ENUMERATIONS (Closed, extended only by adding members)
# =============================================================================

class Relation(Enum):
    """
    Kind of a directed edge.

    Single member today. Kept as an enumeration so that new relation
    kinds (imports, references) are additive.
    """
    IS_PARENT_OF = "is_parent_of"


class NodeKind(Enum):
    """Discriminator of NodeContents variants."""
    FOLDER = "folder"
    FILE = "file"
    ITEM = "item"


# =============================================================================
# NODE CONTENTS (Tagged union)
# =============================================================================

def _as_path(value: Union[str, PurePath]) -> PurePath:
    if isinstance(value, PurePath):
        return value
    return PurePosixPath(value)


@dataclass(frozen=True)
class FolderContents:
    """A directory of the analyzed codebase."""
    display_name: str
    path: PurePath

    def __post_init__(self):
        object.__setattr__(self, 'path', _as_path(self.path))

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FOLDER


@dataclass(frozen=True)
class FileContents:
    """A source file of the analyzed codebase."""
    display_name: str
    path: PurePath

    def __post_init__(self):
        object.__setattr__(self, 'path', _as_path(self.path))

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE


@dataclass(frozen=True)
class ItemContents:
    """
    A code item (symbol) inside a file.

    The moniker is the language service's stable identifier for the
    symbol, when one was reported.
    """
    display_name: str
    moniker: Optional[str] = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ITEM


NodeContents = Union[FolderContents, FileContents, ItemContents]


# =============================================================================
# GRAPH PAYLOADS
# =============================================================================

@dataclass(frozen=True)
class NodeData:
    """Payload stored for a node."""
    contents: NodeContents

    @property
    def kind(self) -> NodeKind:
        return self.contents.kind

    @property
    def display_name(self) -> str:
        return self.contents.display_name


@dataclass(frozen=True)
class EdgeData:
    """
    Payload stored for an edge.

    `from_node` -> `to_node`, both allocated by the same GraphStore.
    """
    from_node: NodeId
    to_node: NodeId
    relation: Relation = Relation.IS_PARENT_OF

"""
Geometry Contracts

Plain 2-D value types produced by the layout engine and handed to
renderers or exporters.

PRINCIPLES:
1. Immutable (Frozen)
2. No rendering semantics (no colors, no labels)
3. Layout never aliases GraphStore payloads
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import math

from .base import NodeId, EdgeId


@dataclass(frozen=True)
class Vec2:
    """A point or displacement in layout space."""
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance(self, other: Vec2) -> float:
        return (self - other).length()

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


Vec2.ZERO = Vec2(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box: origin (top-left) plus fixed size."""
    origin: Vec2
    size: Vec2

    @staticmethod
    def from_origin_size(x: float, y: float, width: float, height: float) -> Rect:
        return Rect(origin=Vec2(x, y), size=Vec2(width, height))

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    def center(self) -> Vec2:
        return Vec2(self.origin.x + self.size.x / 2.0,
                    self.origin.y + self.size.y / 2.0)

    def translated(self, delta: Vec2) -> Rect:
        """Return a rect moved by delta (size unchanged)."""
        return Rect(origin=self.origin + delta, size=self.size)


@dataclass(frozen=True)
class Line:
    """Straight segment between the centers of two rects."""
    start: Vec2
    end: Vec2

    @staticmethod
    def between(a: Rect, b: Rect) -> Line:
        return Line(start=a.center(), end=b.center())

    def length(self) -> float:
        return self.start.distance(self.end)


@dataclass(frozen=True)
class Layout:
    """
    Result of a layout computation.

    Exactly one Rect per node id and one Line per edge id of the graph
    it was computed from. Lines are always derived from the rects.
    """
    rects: Dict[NodeId, Rect] = field(default_factory=dict)
    lines: Dict[EdgeId, Line] = field(default_factory=dict)

    def rect(self, node_id: NodeId) -> Optional[Rect]:
        return self.rects.get(node_id)

    def line(self, edge_id: EdgeId) -> Optional[Line]:
        return self.lines.get(edge_id)

"""
Layout Subpackage

Force model and the iterative layout engine.
"""

from .forces import (
    ForceModel, repulsive_force, attractive_force,
    IDEAL_SPRING_LENGTH, MIN_DISTANCE, MAX_FORCE_COMPONENT,
)
from .engine import (
    LayoutEngine, LayoutResult, RefinementStats, cooling_factor, compute_layout,
)

__all__ = [
    'ForceModel', 'repulsive_force', 'attractive_force',
    'IDEAL_SPRING_LENGTH', 'MIN_DISTANCE', 'MAX_FORCE_COMPONENT',
    'LayoutEngine', 'LayoutResult', 'RefinementStats', 'cooling_factor',
    'compute_layout',
]

"""
Force Model
===========

Pairwise forces of the spring-electrical layout.

- Repulsive:  |F| = L^2 / d, pointing from v to u (pushes u away)
- Attractive: |F| = d^2 / L, pointing from u to v (pulls u closer)

where L is the ideal spring length and d the distance between the two
positions.

These two functions are the only place where distance flooring and
finiteness guards live. No non-finite vector ever leaves this module.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from ..contracts.geometry import Vec2


IDEAL_SPRING_LENGTH = 50.0
MIN_DISTANCE = 1e-6
MAX_FORCE_COMPONENT = 1000.0


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def _nan_to_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def repulsive_force(pos_u: Vec2, pos_v: Vec2,
                    ideal_length: float = IDEAL_SPRING_LENGTH) -> Vec2:
    """Force pushing u away from v."""
    delta = pos_u - pos_v
    distance = delta.length()
    # Floor avoids the singularity at coincident points
    if not distance > MIN_DISTANCE:
        distance = MIN_DISTANCE
    force = delta * (ideal_length * ideal_length / distance / distance)
    if not force.is_finite():
        return Vec2.ZERO
    return force


def attractive_force(pos_u: Vec2, pos_v: Vec2,
                     ideal_length: float = IDEAL_SPRING_LENGTH) -> Vec2:
    """
    Force pulling u toward v.

    Grows with the square of the distance. Each axis is clamped to
    +/- MAX_FORCE_COMPONENT.
    """
    delta = pos_v - pos_u
    distance = delta.length()
    # (d^2 / L) * (delta / d) == delta * (d / L)
    force = delta * (distance / ideal_length)
    # Overflow to +/-inf still clamps to a full pull; NaN axes carry none
    clamped = Vec2(
        _clamp(_nan_to_zero(force.x), MAX_FORCE_COMPONENT),
        _clamp(_nan_to_zero(force.y), MAX_FORCE_COMPONENT),
    )
    if not clamped.is_finite():
        return Vec2.ZERO
    return clamped


@dataclass(frozen=True)
class ForceModel:
    """Force functions bound to one ideal spring length."""
    ideal_length: float = IDEAL_SPRING_LENGTH

    def repulsive(self, pos_u: Vec2, pos_v: Vec2) -> Vec2:
        return repulsive_force(pos_u, pos_v, self.ideal_length)

    def attractive(self, pos_u: Vec2, pos_v: Vec2) -> Vec2:
        return attractive_force(pos_u, pos_v, self.ideal_length)

"""
codemap Configuration

Layout parameters with defaults, optionally overridden from the
environment (CODEMAP_* variables).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar
import math
import os

from .contracts.errors import ConfigError


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_IDEAL_LENGTH = 50.0
DEFAULT_CONVERGENCE_THRESHOLD = 0.1
DEFAULT_MAX_ITERATIONS = 50000
DEFAULT_MAX_DISPLACEMENT = 50.0

_T = TypeVar("_T")


def _parse_optional_float(raw: str) -> Optional[float]:
    if raw.strip().lower() in ("", "none", "off"):
        return None
    return float(raw)


def _env_value(
    env: Mapping[str, str],
    name: str,
    parse: Callable[[str], _T],
    default: _T,
) -> _T:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}={raw!r} is not valid: {exc}") from exc


# =============================================================================
# LAYOUT CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class LayoutConfig:
    """Configuration of the force-directed layout engine."""

    # Force model
    ideal_length: float = DEFAULT_IDEAL_LENGTH

    # Refinement loop
    convergence_threshold: float = DEFAULT_CONVERGENCE_THRESHOLD
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    initial_temperature: float = 1.0
    max_displacement: Optional[float] = DEFAULT_MAX_DISPLACEMENT

    # Initial placement
    node_width: float = 64.0
    node_height: float = 100.0
    placement_spacing: float = 150.0

    # Progress logging (DEBUG) every N steps; 0 disables
    progress_interval: int = 1000

    def __post_init__(self):
        for name in ("ideal_length", "convergence_threshold",
                     "initial_temperature", "node_width", "node_height"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ConfigError(f"{name} must be a positive number, got {value!r}")
        if not math.isfinite(self.placement_spacing):
            raise ConfigError("placement_spacing must be finite")
        if self.max_iterations < 0:
            raise ConfigError("max_iterations must be >= 0")
        if self.progress_interval < 0:
            raise ConfigError("progress_interval must be >= 0")
        if self.max_displacement is not None and not (
            math.isfinite(self.max_displacement) and self.max_displacement > 0
        ):
            raise ConfigError("max_displacement must be positive or None")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> LayoutConfig:
        """Load configuration from environment variables."""
        env = os.environ if env is None else env
        return cls(
            ideal_length=_env_value(
                env, "CODEMAP_IDEAL_LENGTH", float, DEFAULT_IDEAL_LENGTH),
            convergence_threshold=_env_value(
                env, "CODEMAP_CONVERGENCE_THRESHOLD", float,
                DEFAULT_CONVERGENCE_THRESHOLD),
            max_iterations=_env_value(
                env, "CODEMAP_MAX_ITERATIONS", int, DEFAULT_MAX_ITERATIONS),
            max_displacement=_env_value(
                env, "CODEMAP_MAX_DISPLACEMENT", _parse_optional_float,
                DEFAULT_MAX_DISPLACEMENT),
        )


DEFAULT_CONFIG = LayoutConfig()

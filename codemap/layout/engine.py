"""
Layout Engine
=============

Force-directed placement of a GraphStore into rects and lines.

PIPELINE:
=========
1. Initial placement: k-th node (enumeration order) at
   (spacing * k, spacing * k). Deterministic, no randomness.
2. Refinement: repeated synchronous steps. Every node's net force is
   computed from one snapshot of positions, then every node moves by
   its force scaled by the cooling factor. Stops when the largest single
   force of a step drops below the convergence threshold, or when the
   iteration budget is spent.
3. Edge projection: every line is rebuilt from the final rect centers.

The engine reads the store and never mutates it. It is total: any store
yields a Layout covering every node and edge. Running out of iterations
is not an error.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional
import logging

from ..config import LayoutConfig
from ..contracts.base import NodeId, EdgeId
from ..contracts.geometry import Vec2, Rect, Line, Layout
from ..graph.store import GraphStore
from .forces import ForceModel

logger = logging.getLogger(__name__)

StepObserver = Callable[[int, Mapping[NodeId, Rect]], None]


@dataclass(frozen=True)
class RefinementStats:
    """Outcome of the refinement loop."""
    steps: int
    converged: bool
    max_force: float


@dataclass(frozen=True)
class LayoutResult:
    layout: Layout
    stats: RefinementStats


def cooling_factor(initial_temperature: float, step: int, max_iterations: int) -> float:
    """T(s) = T0 / (1 + s / max_iterations), step is 1-indexed."""
    return initial_temperature / (1.0 + step / max_iterations)


class LayoutEngine:
    """
    Spring-electrical layout over a read-only GraphStore.

    Attraction is evaluated only along each node's OUTGOING edges. A node
    that is only ever a target is pulled by nothing and drifts under
    repulsion alone.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self._config = config or LayoutConfig()
        self._forces = ForceModel(self._config.ideal_length)

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def compute(self, graph: GraphStore) -> Layout:
        """Compute a fresh layout for every node and edge of graph."""
        return self.run(graph).layout

    def run(self, graph: GraphStore, on_step: Optional[StepObserver] = None) -> LayoutResult:
        """compute() plus refinement statistics."""
        logger.debug(
            "Layout start: %d nodes, %d edges", graph.node_count, graph.edge_count
        )
        rects = self.initial_placement(graph)
        stats = self.refine(graph, rects, on_step=on_step)
        lines = self.project_edges(graph, rects)
        if stats.converged:
            logger.info(
                "Layout converged after %d steps (max force %.6g)",
                stats.steps, stats.max_force,
            )
        else:
            logger.info(
                "Layout stopped after %d steps without converging (max force %.6g)",
                stats.steps, stats.max_force,
            )
        return LayoutResult(layout=Layout(rects=rects, lines=lines), stats=stats)

    # -------------------------------------------------------------------------
    # Phase 1: placement
    # -------------------------------------------------------------------------

    def initial_placement(self, graph: GraphStore) -> Dict[NodeId, Rect]:
        cfg = self._config
        rects: Dict[NodeId, Rect] = {}
        for k, node_id in enumerate(graph.nodes()):
            offset = cfg.placement_spacing * k
            rects[node_id] = Rect.from_origin_size(
                offset, offset, cfg.node_width, cfg.node_height
            )
        return rects

    # -------------------------------------------------------------------------
    # Phase 2: refinement
    # -------------------------------------------------------------------------

    def net_forces(
        self,
        graph: GraphStore,
        centers: Mapping[NodeId, Vec2],
        targets: Optional[Mapping[NodeId, List[NodeId]]] = None,
    ) -> Dict[NodeId, Vec2]:
        """
        Net force on every node for one snapshot of centers.

        Repulsion from every other node plus attraction toward the
        target of every outgoing edge.
        """
        if targets is None:
            targets = self._outgoing_targets(graph)
        forces: Dict[NodeId, Vec2] = {}
        for node_id, pos in centers.items():
            fx = 0.0
            fy = 0.0
            for other_id, other_pos in centers.items():
                if other_id == node_id:
                    continue
                f = self._forces.repulsive(pos, other_pos)
                fx += f.x
                fy += f.y
            for target_id in targets.get(node_id, ()):
                f = self._forces.attractive(pos, centers[target_id])
                fx += f.x
                fy += f.y
            forces[node_id] = Vec2(fx, fy)
        return forces

    def refine(
        self,
        graph: GraphStore,
        rects: Dict[NodeId, Rect],
        on_step: Optional[StepObserver] = None,
    ) -> RefinementStats:
        """
        Run the refinement loop, updating rects in place.

        on_step, when given, is called after every applied step with the
        1-indexed step number and the current rects.
        """
        cfg = self._config
        if not rects or cfg.max_iterations == 0:
            return RefinementStats(steps=0, converged=not rects, max_force=0.0)

        targets = self._outgoing_targets(graph)
        max_force = 0.0
        step = 0
        converged = False

        while step < cfg.max_iterations:
            step += 1
            centers = {node_id: rect.center() for node_id, rect in rects.items()}
            forces = self.net_forces(graph, centers, targets)

            temperature = cooling_factor(cfg.initial_temperature, step, cfg.max_iterations)
            max_force = 0.0
            for node_id, force in forces.items():
                magnitude = force.length()
                if magnitude > max_force:
                    max_force = magnitude
                rects[node_id] = rects[node_id].translated(
                    self._limit(force * temperature)
                )

            if on_step is not None:
                on_step(step, rects)

            if max_force < cfg.convergence_threshold:
                converged = True
                break

            if cfg.progress_interval and step % cfg.progress_interval == 0:
                logger.debug("Step %d, max force %.6g", step, max_force)

        return RefinementStats(steps=step, converged=converged, max_force=max_force)

    def _limit(self, delta: Vec2) -> Vec2:
        """Cap one step's displacement at max_displacement."""
        limit = self._config.max_displacement
        if limit is None:
            return delta
        length = delta.length()
        if length <= limit:
            return delta
        return delta * (limit / length)

    @staticmethod
    def _outgoing_targets(graph: GraphStore) -> Dict[NodeId, List[NodeId]]:
        return {node_id: graph.neighbors(node_id) or [] for node_id in graph.nodes()}

    # -------------------------------------------------------------------------
    # Phase 3: edge projection
    # -------------------------------------------------------------------------

    def project_edges(self, graph: GraphStore, rects: Mapping[NodeId, Rect]) -> Dict[EdgeId, Line]:
        """Rebuild every edge line from the current rect centers."""
        lines: Dict[EdgeId, Line] = {}
        for edge_id in graph.edges():
            edge = graph.edge(edge_id)
            lines[edge_id] = Line.between(rects[edge.from_node], rects[edge.to_node])
        return lines


def compute_layout(graph: GraphStore, config: Optional[LayoutConfig] = None) -> Layout:
    """Lay out graph with a fresh engine."""
    return LayoutEngine(config).compute(graph)

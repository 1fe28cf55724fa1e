"""
codemap CLI
===========

Lay out a serialized code-structure graph.

COMMANDS:
- layout: read a graph JSON document, write its layout JSON
- demo:   lay out a small folder/file/item graph

USAGE:
    python -m codemap.cli layout graph.json -o layout.json
"""
from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from .config import LayoutConfig
from .contracts.errors import CodemapError
from .domain.serialization import dumps, graph_from_dict, layout_to_dict
from .graph.store import GraphStore
from .layout.engine import LayoutEngine, LayoutResult

logger = logging.getLogger(__name__)


def build_demo_graph() -> GraphStore:
    """root/ -> root/x -> foo"""
    graph = GraphStore()
    root = graph.add_folder("root", "root")
    source = graph.add_file("x", "root/x")
    item = graph.add_item("foo")
    graph.add_parent_edge(root, source)
    graph.add_parent_edge(source, item)
    return graph


def _config_from_args(args) -> LayoutConfig:
    config = LayoutConfig.from_env()
    overrides = {}
    if args.max_iterations is not None:
        overrides["max_iterations"] = args.max_iterations
    if args.threshold is not None:
        overrides["convergence_threshold"] = args.threshold
    return dataclasses.replace(config, **overrides) if overrides else config


def _emit(result: LayoutResult, output: Optional[str]):
    text = dumps(layout_to_dict(result.layout))
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)
    stats = result.stats
    state = "converged" if stats.converged else "not converged"
    print(
        f"[*] {len(result.layout.rects)} rects, {len(result.layout.lines)} lines, "
        f"{stats.steps} steps ({state}, max force {stats.max_force:.4g})",
        file=sys.stderr,
    )


def cmd_layout(args) -> int:
    try:
        with open(args.graph, "r", encoding="utf-8") as f:
            document = json.load(f)
        graph = graph_from_dict(document)
        engine = LayoutEngine(_config_from_args(args))
    except (OSError, json.JSONDecodeError, CodemapError) as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    _emit(engine.run(graph), args.output)
    return 0


def cmd_demo(args) -> int:
    try:
        engine = LayoutEngine(_config_from_args(args))
    except CodemapError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    _emit(engine.run(build_demo_graph()), args.output)
    return 0


def _add_layout_options(parser: argparse.ArgumentParser):
    parser.add_argument("-o", "--output", help="Write layout JSON here instead of stdout")
    parser.add_argument("--max-iterations", type=int, help="Refinement step budget")
    parser.add_argument("--threshold", type=float, help="Convergence threshold")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="codemap layout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    layout_parser = subparsers.add_parser("layout", help="Lay out a graph JSON file")
    layout_parser.add_argument("graph", help="Path to graph JSON")
    _add_layout_options(layout_parser)

    demo_parser = subparsers.add_parser("demo", help="Lay out a built-in sample graph")
    _add_layout_options(demo_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "layout":
        return cmd_layout(args)
    elif args.command == "demo":
        return cmd_demo(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())

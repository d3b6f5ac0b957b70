"""Command-line interface for audio-graph."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from audio_graph.backend import RecordingBackend
from audio_graph.codegen import render_program, render_program_to_file
from audio_graph.models import Connection, GraphNode, GraphSnapshot
from audio_graph.presets import PRESETS, get_preset
from audio_graph.runtime import RuntimeSynchronizer
from audio_graph.validate import validate_graph
from audio_graph.visualize import graph_to_dot, graph_to_dot_file


def _load_graph(source: str) -> tuple[str, list[GraphNode], list[Connection]]:
    """Resolve SOURCE to (name, nodes, connections).

    SOURCE is a preset id, or a JSON file with ``nodes`` and ``connections``.
    """
    path = Path(source)
    if not path.suffix and not path.exists():
        preset = get_preset(source)
        return preset.id, list(preset.nodes), list(preset.connections)
    data = json.loads(path.read_text())
    snapshot = GraphSnapshot.model_validate(data)
    return path.stem, snapshot.nodes, snapshot.connections


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_presets(args: argparse.Namespace) -> int:
    for preset in PRESETS:
        print(f"{preset.id:16} {preset.name}")
        if args.long:
            print(f"{'':16} {preset.description}")
    return 0


def _cmd_code(args: argparse.Namespace) -> int:
    name, nodes, connections = _load_graph(args.source)
    if args.output:
        path = render_program_to_file(nodes, connections, args.output, name)
        print(f"wrote {path}")
    else:
        sys.stdout.write(render_program(nodes, connections))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    _name, nodes, connections = _load_graph(args.source)
    errors = validate_graph(nodes, connections)

    has_errors = any(e.severity == "error" for e in errors)
    has_warnings = any(e.severity == "warning" for e in errors)

    for err in errors:
        prefix = "warning" if err.severity == "warning" else "error"
        print(f"{prefix}: {err}", file=sys.stderr)

    if has_errors:
        return 1
    if has_warnings:
        print("valid (with warnings)")
    else:
        print("valid")
    return 0


def _cmd_dot(args: argparse.Namespace) -> int:
    name, nodes, connections = _load_graph(args.source)
    if args.output:
        graph_to_dot_file(nodes, connections, args.output, name)
    else:
        sys.stdout.write(graph_to_dot(nodes, connections, name))
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    _name, nodes, connections = _load_graph(args.source)
    backend = RecordingBackend()
    runtime = RuntimeSynchronizer(backend)
    runtime.build(nodes, connections)
    for op in backend.log:
        print(" ".join(op))
    print(f"{len(runtime.materialized_nodes())} primitives materialized")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the audio-graph CLI."""
    parser = argparse.ArgumentParser(
        prog="audio-graph",
        description="Inspect, validate, visualize and generate code for audio node graphs.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # presets
    p_presets = sub.add_parser("presets", help="List built-in presets")
    p_presets.add_argument("-l", "--long", action="store_true", help="Show descriptions")

    # code
    p_code = sub.add_parser("code", help="Generate the equivalent Web Audio program")
    p_code.add_argument("source", help="Preset id or graph JSON file")
    p_code.add_argument("-o", "--output", help="Output directory")

    # validate
    p_validate = sub.add_parser("validate", help="Validate a graph")
    p_validate.add_argument("source", help="Preset id or graph JSON file")

    # dot
    p_dot = sub.add_parser("dot", help="Generate DOT visualization")
    p_dot.add_argument("source", help="Preset id or graph JSON file")
    p_dot.add_argument("-o", "--output", help="Output directory")

    # build
    p_build = sub.add_parser("build", help="Materialize a graph and print backend operations")
    p_build.add_argument("source", help="Preset id or graph JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    try:
        if args.command == "presets":
            return _cmd_presets(args)
        elif args.command == "code":
            return _cmd_code(args)
        elif args.command == "validate":
            return _cmd_validate(args)
        elif args.command == "dot":
            return _cmd_dot(args)
        elif args.command == "build":
            return _cmd_build(args)
    except KeyError as e:
        print(f"error: {e.args[0]}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"error: invalid JSON: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"error: invalid graph: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main())

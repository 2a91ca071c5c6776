"""
Command-line interface for fbpgraph.

Usage:
    fbpgraph ./examples/hello.fbp -o ./build/
    fbpgraph ./examples/hello.fbp -o ./build/ --format dot
    fbpgraph ./examples/hello.json -o ./build/ --format yuml
    fbpgraph ./examples/hello.json -o ./build/ --format svg
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from fbpgraph.backend.graphviz import GraphvizExporter
from fbpgraph.backend.yuml import YumlExporter
from fbpgraph.core.errors import GraphError
from fbpgraph.core.ir import Graph
from fbpgraph.core.storage import save_graph
from fbpgraph.frontend.loader import load_file

FORMATS = ["json", "dot", "yuml", "png", "svg"]
RENDER_FORMATS = {"png", "svg"}


def safe_filename(graph: Graph) -> str:
    """Sanitize the graph name for use as a filename."""
    safe_name = (graph.name or "graph").lower().replace(" ", "_").replace("/", "_")
    safe_name = "".join(c for c in safe_name if c.isalnum() or c == "_")
    return safe_name or "graph"


def export_graph(graph: Graph, output_path: Path, format: str) -> Path:
    """Export a graph to the specified format."""
    base = output_path / safe_filename(graph)

    if format == "json":
        return save_graph(graph, base)
    if format in RENDER_FORMATS:
        return Path(GraphvizExporter.render(graph, str(base), format=format))

    if format == "dot":
        content = GraphvizExporter.to_dot(graph)
        ext = ".dot"
    elif format == "yuml":
        content = YumlExporter.to_yuml(graph)
        ext = ".yuml"
    else:
        raise ValueError(f"Unknown format: {format}. Use: {', '.join(FORMATS)}")

    output_file = base.with_suffix(ext)
    output_file.write_text(content, encoding="utf-8")
    return output_file


def main(argv: List[str] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="fbpgraph",
        description="Convert flow-based program graphs between formats.",
        epilog="Example: fbpgraph ./examples/hello.fbp -o ./build/ -f dot"
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Graph definition (.fbp or .json)"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("."),
        help="Output directory (default: current directory)"
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)"
    )

    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="Summarize the graph without exporting"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.input.is_file():
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1

    try:
        graph = load_file(args.input)
    except GraphError as e:
        print(f"Error loading file: {e}", file=sys.stderr)
        return 1

    if args.list:
        print(f"Graph in {args.input}:")
        print(
            f"  \"{graph.name}\" ({len(graph.nodes)} nodes, {len(graph.edges)} edges, "
            f"{len(graph.initializers)} initializers)"
        )
        return 0

    args.output.mkdir(parents=True, exist_ok=True)

    try:
        output_file = export_graph(graph, args.output, args.format)
    except Exception as e:
        print(f"Error exporting {args.input}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Exported '{graph.name}' -> {output_file}")
    else:
        print(f"{output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

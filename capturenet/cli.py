"""capturenet CLI — query the entity graph from the command line.

Usage:
    capturenet path usdt fbi
    capturenet paths usdt fbi --max-length 3
    capturenet center usdc                     # Path to the reference node
    capturenet neighborhood circle --degrees 2
    capturenet metrics
    capturenet export --format d3 --output graph.json
    capturenet serve --port 8000               # Start the HTTP API

Every query prints JSON on stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from capturenet.graph.engine import GraphEngine, GraphResult

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="capturenet",
        description="capturenet — relationship and centralization analysis",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    parser.add_argument(
        "--dataset", help="JSON or YAML entity dataset (default: bundled dataset)"
    )

    subparsers = parser.add_subparsers(dest="command")

    # path
    pth = subparsers.add_parser("path", help="Shortest path between two entities")
    pth.add_argument("start", help="Start entity id")
    pth.add_argument("end", help="End entity id")

    # paths
    pths = subparsers.add_parser("paths", help="All simple paths up to a length")
    pths.add_argument("start", help="Start entity id")
    pths.add_argument("end", help="End entity id")
    pths.add_argument("--max-length", type=int, default=None, help="Max hops per path")

    # center
    ctr = subparsers.add_parser("center", help="Narrated path to the reference entity")
    ctr.add_argument("start", help="Start entity id")
    ctr.add_argument("--center", default=None, help="Reference entity id")

    # neighborhood
    nbh = subparsers.add_parser("neighborhood", help="Entities within N hops")
    nbh.add_argument("start", help="Start entity id")
    nbh.add_argument("--degrees", type=int, default=2, help="Max hops")

    # metrics
    subparsers.add_parser("metrics", help="Whole-network centralization metrics")

    # export
    exp = subparsers.add_parser("export", help="Export graph data")
    exp.add_argument("--format", default="d3", choices=["d3", "cytoscape", "csv"])
    exp.add_argument(
        "--output", "-o",
        help="Output file (d3/cytoscape; stdout if omitted) or directory (csv)",
    )

    # serve
    srv = subparsers.add_parser("serve", help="Start the HTTP API")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "export" and args.format == "csv" and not args.output:
        parser.error("--output is required for csv export")

    # Dispatch
    try:
        result = _build(args)
        if args.command == "path":
            _emit(result.queries.find_shortest_path(args.start, args.end).to_dict())
        elif args.command == "paths":
            _cmd_paths(result, args)
        elif args.command == "center":
            _emit(result.narrator.find_path_to_center(args.start, args.center).to_dict())
        elif args.command == "neighborhood":
            _cmd_neighborhood(result, args)
        elif args.command == "metrics":
            _emit(result.metrics.all_metrics().to_dict())
        elif args.command == "export":
            _cmd_export(result, args)
        elif args.command == "serve":
            _cmd_serve(result, args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except Exception as exc:
        logger.error("Error: %s", exc)
        if args.verbose:
            raise
        sys.exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _build(args: argparse.Namespace) -> GraphResult:
    engine = GraphEngine()
    if args.dataset:
        return engine.build_from_file(args.dataset)
    return engine.build_default()


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _cmd_paths(result: GraphResult, args: argparse.Namespace) -> None:
    from capturenet.config.settings import settings

    max_length = settings.DEFAULT_MAX_PATH_LENGTH if args.max_length is None else args.max_length
    paths = result.queries.find_all_paths(args.start, args.end, max_length=max_length)
    _emit({
        "start": args.start,
        "end": args.end,
        "max_length": max_length,
        "count": len(paths),
        "paths": [p.to_dict() for p in paths],
    })


def _cmd_neighborhood(result: GraphResult, args: argparse.Namespace) -> None:
    within = result.queries.find_entities_within_degrees(args.start, args.degrees)
    _emit({
        "entity_id": args.start,
        "max_degrees": args.degrees,
        "entities": [
            {"id": node_id, "name": result.snapshot.name_of(node_id), "degrees": hops}
            for node_id, hops in sorted(within.items(), key=lambda item: (item[1], item[0]))
        ],
    })


def _cmd_export(result: GraphResult, args: argparse.Namespace) -> None:
    exporter = result.exporter
    try:
        if args.format == "csv":
            nodes_path, edges_path = exporter.to_csv_files(args.output)
            _emit({"nodes": str(nodes_path), "edges": str(edges_path)})
            return

        data = exporter.to_d3_json() if args.format == "d3" else exporter.to_cytoscape_json()
        if not args.output:
            _emit(data)
            return

        with open(args.output, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
        logger.info("Exported %s graph to %s", args.format, args.output)
        _emit({"output": args.output, "format": args.format})
    except OSError as exc:
        logger.warning("Export failed: %s", exc)
        raise


def _cmd_serve(result: GraphResult, args: argparse.Namespace) -> None:
    """Start the HTTP API over the already-built graph."""
    import uvicorn

    from capturenet.api.factory import create_app

    print(f"Starting capturenet API on http://{args.host}:{args.port}", file=sys.stderr)
    uvicorn.run(create_app(result), host=args.host, port=args.port)

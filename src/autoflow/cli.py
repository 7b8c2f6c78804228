"""
Command line access to the engine.

Provides:
- Listing the node schema catalogue
- Validating a workflow file
- Running a workflow file in-process (no queue, no run ledger)
"""

import sys
import json
import argparse
from pathlib import Path
from typing import Any

from autoflow.engine import GraphExecutor, GraphResolver, WorkflowGraph, list_schemas, validate_workflow_nodes
from autoflow.observability import setup_logging


def load_graph(path: str) -> WorkflowGraph:
    """
    Load a graph from a JSON file.

    Accepts a bare ``{nodes, edges}`` document or a workflow document whose
    graph sits under ``graph`` or ``data``.
    """
    document = json.loads(Path(path).read_text())
    for key in ("graph", "data"):
        if isinstance(document.get(key), dict):
            document = document[key]
            break
    return WorkflowGraph.model_validate(document)


def cmd_schemas(args: argparse.Namespace) -> int:
    """Print the node schema catalogue."""
    print(json.dumps([schema.to_document() for schema in list_schemas()], indent=2))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate every node of a workflow file."""
    graph = load_graph(args.file)

    cycle = GraphResolver().find_cycle(graph.nodes, graph.edges)
    if cycle:
        print(f"Warning: cycle detected: {' -> '.join(cycle)}", file=sys.stderr)

    reports = validate_workflow_nodes(graph.nodes)
    if not reports:
        print(f"OK: {len(graph.nodes)} nodes valid")
        return 0

    for report in reports:
        print(f"{report.node_id} ({report.label or '-'}):")
        for error in report.errors:
            print(f"  - {error}")
    return 1


def cmd_run(args: argparse.Namespace) -> int:
    """Execute a workflow file in-process and print the final context."""
    setup_logging()
    graph = load_graph(args.file)

    initial_context: dict[str, Any] = {}
    if args.payload:
        initial_context = json.loads(args.payload)

    context = GraphExecutor().run(
        graph.nodes,
        graph.edges,
        args.user_id,
        initial_context,
        args.start_node,
    )
    print(json.dumps(context, indent=2, default=str))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="autoflow",
        description="Autoflow workflow engine CLI",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("schemas", help="Print the node schema catalogue")

    validate_parser = subparsers.add_parser("validate", help="Validate a workflow file")
    validate_parser.add_argument("file", help="Workflow JSON file")

    run_parser = subparsers.add_parser("run", help="Run a workflow file in-process")
    run_parser.add_argument("file", help="Workflow JSON file")
    run_parser.add_argument("--user-id", default="cli", help="User the run executes as")
    run_parser.add_argument("--payload", help="Initial context as a JSON object")
    run_parser.add_argument("--start-node", help="Start traversal at this node only")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "schemas":
        return cmd_schemas(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "run":
        return cmd_run(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Tuple

from ..config import apply_logging, load_config
from ..engine.allocator import AllocationError, Allocator
from ..io.dataset_loader import load_dataset
from ..io.member_loader import load_members
from ..io.task_loader import load_tasks
from ..models.member import Member
from ..models.task import Task
from ..reporting.export import export_csv, export_yaml, load_assignments


# ---------------------------------------------------------------------------
# Input utilities
# ---------------------------------------------------------------------------

def _load_inputs(args: argparse.Namespace) -> Tuple[List[Member], List[Task]]:
    """Load members and tasks from either a dataset file or two CSV files."""
    if args.dataset:
        return load_dataset(args.dataset)
    if not (args.members and args.tasks):
        raise SystemExit("allocate: provide --dataset or both --members and --tasks")
    return load_members(args.members), load_tasks(args.tasks)


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------

def cmd_allocate(args: argparse.Namespace) -> None:
    members, tasks = _load_inputs(args)

    try:
        report = Allocator.run(members, tasks)
    except AllocationError as exc:
        print(f"Allocation failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    os.makedirs(args.output, exist_ok=True)
    if args.format == "csv":
        assignments_file = os.path.join(args.output, "assignments.csv")
        summary_file = os.path.join(args.output, "summary.csv")
        export_csv(report, assignments_file, summary_file)
    else:
        assignments_file = os.path.join(args.output, "assignments.yaml")
        summary_file = os.path.join(args.output, "summary.yaml")
        export_yaml(report, assignments_file, summary_file)

    stats = report.stats
    print(
        f"Assigned {stats.assigned_tasks}/{stats.total_tasks} tasks "
        f"(efficiency {stats.efficiency}%, average match {stats.avg_match_score})"
    )
    print(f"Wrote assignments to {assignments_file} and summary to {summary_file}")


def cmd_compare(args: argparse.Namespace) -> None:
    alloc1 = load_assignments(args.dir1)
    alloc2 = load_assignments(args.dir2)

    for task_id in sorted(set(alloc1) | set(alloc2)):
        before = alloc1.get(task_id)
        after = alloc2.get(task_id)
        if before != after:
            print(f"{task_id}: {before or 'Unassigned'} -> {after or 'Unassigned'}")


def cmd_serve(args: argparse.Namespace) -> None:
    from ..web.app import create_app

    config = load_config(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.dataset:
        config.dataset = args.dataset
    apply_logging(config)
    app = create_app(config=config)
    app.run(host=config.host, port=config.port, debug=config.debug)


# ---------------------------------------------------------------------------
# Argument parser setup
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="task-allocator")
    sub = parser.add_subparsers(dest="command", required=True)

    # allocate
    p_alloc = sub.add_parser("allocate", help="Run allocation")
    p_alloc.add_argument("--members", help="Members CSV path")
    p_alloc.add_argument("--tasks", help="Tasks CSV path")
    p_alloc.add_argument("--dataset", help="YAML/JSON file with members and tasks")
    p_alloc.add_argument("--output", required=True, help="Output directory")
    p_alloc.add_argument(
        "--format",
        choices=["yaml", "csv"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    p_alloc.set_defaults(func=cmd_allocate)

    # compare
    p_compare = sub.add_parser("compare", help="Compare two allocation directories")
    p_compare.add_argument("dir1", help="First allocation directory")
    p_compare.add_argument("dir2", help="Second allocation directory")
    p_compare.set_defaults(func=cmd_compare)

    # serve
    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--config", help="Configuration YAML path")
    p_serve.add_argument("--dataset", help="Seed dataset path")
    p_serve.add_argument("--host", help="Interface to bind")
    p_serve.add_argument("--port", type=int, help="Port to listen on")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()

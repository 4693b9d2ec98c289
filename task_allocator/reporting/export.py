"""Utilities for exporting allocation reports.

An :class:`~task_allocator.reporting.summary.AllocationReport` is written as
two files: the per-task assignments, and a summary holding the run
statistics and member utilization.
"""
from __future__ import annotations

import csv
import os
from typing import Dict, Optional

import yaml

from .summary import AllocationReport

ASSIGNMENT_FIELDS = [
    "taskId",
    "taskTitle",
    "memberId",
    "memberName",
    "matchScore",
    "estimatedHours",
    "reason",
]
STATS_FIELDS = [
    "totalTasks",
    "assignedTasks",
    "unassignedTasks",
    "avgMatchScore",
    "efficiency",
]
MEMBER_FIELDS = ["id", "name", "currentWorkload", "maxCapacity", "utilization"]


def export_yaml(report: AllocationReport, assignments_file: str, summary_file: str) -> None:
    """Write assignments and summary data to YAML files.

    The assignments file is a list of records in processing order. The
    summary file contains ``stats`` and ``members`` sections.
    """
    assignments = [record.to_dict() for record in report.assignments]
    summary = {
        "stats": report.stats.to_dict(),
        "members": [member.to_dict() for member in report.member_summaries],
    }
    with open(assignments_file, "w", encoding="utf8") as handle:
        yaml.safe_dump(assignments, handle, sort_keys=False)
    with open(summary_file, "w", encoding="utf8") as handle:
        yaml.safe_dump(summary, handle, sort_keys=True)


def export_csv(report: AllocationReport, assignments_file: str, summary_file: str) -> None:
    """Write assignments and summary data to CSV files.

    The summary CSV first lists the run statistics as a single row. After a
    blank row a second header is written containing member utilization.
    """
    with open(assignments_file, "w", newline="", encoding="utf8") as handle:
        writer = csv.DictWriter(handle, fieldnames=ASSIGNMENT_FIELDS, restval="")
        writer.writeheader()
        for record in report.assignments:
            writer.writerow(record.to_dict())

    with open(summary_file, "w", newline="", encoding="utf8") as handle:
        writer = csv.writer(handle)
        stats = report.stats.to_dict()
        writer.writerow(STATS_FIELDS)
        writer.writerow([stats[name] for name in STATS_FIELDS])
        writer.writerow([])
        writer.writerow(MEMBER_FIELDS)
        for member in report.member_summaries:
            data = member.to_dict()
            writer.writerow([data[name] for name in MEMBER_FIELDS])


def load_assignments(directory: str) -> Dict[str, Optional[str]]:
    """Return a mapping of task id to member id from a YAML export in ``directory``."""
    path = os.path.join(directory, "assignments.yaml")
    with open(path, "r", encoding="utf8") as handle:
        data = yaml.safe_load(handle) or []
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of assignment records")
    return {str(row["taskId"]): row.get("memberId") for row in data}

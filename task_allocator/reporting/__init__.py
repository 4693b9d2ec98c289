"""Reporting utilities for task_allocator."""

from .export import export_csv, export_yaml, load_assignments
from .summary import (
    AllocationReport,
    AllocationStats,
    MemberSummary,
    build_report,
    compute_stats,
    summarize_members,
)

__all__ = [
    "AllocationReport",
    "AllocationStats",
    "MemberSummary",
    "build_report",
    "compute_stats",
    "summarize_members",
    "export_yaml",
    "export_csv",
    "load_assignments",
]

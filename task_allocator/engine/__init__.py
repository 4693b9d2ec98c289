"""Allocation engine for task_allocator."""

from .allocator import (
    UNASSIGNED_REASON,
    AllocationError,
    Allocator,
    AssignmentRecord,
    reset_workloads,
)
from .scorer import score

__all__ = [
    "Allocator",
    "AllocationError",
    "AssignmentRecord",
    "UNASSIGNED_REASON",
    "reset_workloads",
    "score",
]

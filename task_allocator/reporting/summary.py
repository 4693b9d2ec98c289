"""Statistics and per-member summaries derived from an allocation run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from ..models.member import Member

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from task_allocator.engine.allocator import AssignmentRecord


@dataclass
class AllocationStats:
    total_tasks: int
    assigned_tasks: int
    unassigned_tasks: int
    avg_match_score: int
    efficiency: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalTasks": self.total_tasks,
            "assignedTasks": self.assigned_tasks,
            "unassignedTasks": self.unassigned_tasks,
            "avgMatchScore": self.avg_match_score,
            "efficiency": self.efficiency,
        }


@dataclass
class MemberSummary:
    id: str
    name: str
    current_workload: float
    max_capacity: float
    utilization: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "currentWorkload": self.current_workload,
            "maxCapacity": self.max_capacity,
            "utilization": self.utilization,
        }


@dataclass
class AllocationReport:
    """Assignments of one run together with their derived statistics."""

    assignments: List["AssignmentRecord"]
    stats: AllocationStats
    member_summaries: List[MemberSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assignments": [record.to_dict() for record in self.assignments],
            "stats": self.stats.to_dict(),
            "memberSummaries": [summary.to_dict() for summary in self.member_summaries],
        }


def compute_stats(records: List["AssignmentRecord"]) -> AllocationStats:
    """Summarize assignment records.

    The average match score only considers assigned records. An empty run
    reports zero efficiency.
    """
    total = len(records)
    assigned = [record for record in records if record.assigned]
    avg_score = (
        round(sum(record.match_score for record in assigned) / len(assigned))
        if assigned
        else 0
    )
    efficiency = round(len(assigned) / total * 100) if total else 0
    return AllocationStats(
        total_tasks=total,
        assigned_tasks=len(assigned),
        unassigned_tasks=total - len(assigned),
        avg_match_score=avg_score,
        efficiency=efficiency,
    )


def summarize_members(members: List[Member]) -> List[MemberSummary]:
    """Return a summary for every member, including idle ones."""
    return [
        MemberSummary(
            id=member.id,
            name=member.name,
            current_workload=member.current_workload,
            max_capacity=member.max_capacity,
            utilization=member.utilization(),
        )
        for member in members
    ]


def build_report(
    records: List["AssignmentRecord"], members: List[Member]
) -> AllocationReport:
    return AllocationReport(
        assignments=list(records),
        stats=compute_stats(records),
        member_summaries=summarize_members(members),
    )

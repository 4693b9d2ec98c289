from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..models.member import Member
from ..models.task import Task
from ..reporting.summary import AllocationReport, build_report
from .scorer import score

logger = logging.getLogger(__name__)

UNASSIGNED_REASON = "No available member with required skills"
UNASSIGNED_NAME = "Unassigned"


class AllocationError(RuntimeError):
    """Raised when an allocation run fails as a whole."""

    def __init__(self, message: str, task_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.task_id = task_id


@dataclass
class AssignmentRecord:
    """Outcome of allocating a single task."""

    task_id: str
    task_title: str
    member_id: Optional[str]
    member_name: str
    match_score: int
    estimated_hours: float
    reason: Optional[str] = None

    @property
    def assigned(self) -> bool:
        return self.member_id is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "taskId": self.task_id,
            "taskTitle": self.task_title,
            "memberId": self.member_id,
            "memberName": self.member_name,
            "matchScore": self.match_score,
            "estimatedHours": self.estimated_hours,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        return data


def reset_workloads(members: List[Member], tasks: List[Task]) -> None:
    """Clear committed workload on every member and every task assignment."""
    for member in members:
        member.current_workload = 0
    for task in tasks:
        task.assigned_to = None


class Allocator:
    """Assign tasks to members greedily, most urgent task first.

    Tasks are ordered by priority (high first) and then by deadline (earliest
    first); ties keep their input order. Each task goes to the member with the
    highest score among those with enough spare capacity, with the earliest
    member in input order winning ties. Earlier decisions are never revisited,
    so workload committed for one task lowers the scores seen by later ones.
    """

    @staticmethod
    def order_tasks(tasks: List[Task]) -> List[Task]:
        """Return a new list of tasks in processing order."""
        return sorted(tasks, key=lambda t: (-t.priority_weight, t.deadline))

    @staticmethod
    def select_member(
        members: List[Member], task: Task
    ) -> Tuple[Optional[Member], float]:
        """Return the best eligible member for ``task`` and their score."""
        best_member: Optional[Member] = None
        best_score = -1.0
        for member in members:
            if not member.can_take(task.estimated_hours):
                continue
            candidate = score(member, task)
            if not math.isfinite(candidate):
                raise AllocationError(
                    f"Non-finite score for member {member.id} on task {task.id}",
                    task_id=task.id,
                )
            if candidate > best_score:
                best_member = member
                best_score = candidate
        return best_member, best_score

    @staticmethod
    def allocate(members: List[Member], tasks: List[Task]) -> List[AssignmentRecord]:
        """Assign ``tasks`` to ``members`` in place and return one record per task.

        Member workloads are reset before the run. Records follow the
        processing order, not the input order.
        """
        for member in members:
            member.current_workload = 0

        records: List[AssignmentRecord] = []
        for task in Allocator.order_tasks(tasks):
            best_member, best_score = Allocator.select_member(members, task)
            if best_member is not None and best_score > 0:
                best_member.current_workload += task.estimated_hours
                task.assigned_to = best_member.id
                logger.debug(
                    "Assigned %s to %s (score %.2f)", task.id, best_member.id, best_score
                )
                records.append(
                    AssignmentRecord(
                        task_id=task.id,
                        task_title=task.title,
                        member_id=best_member.id,
                        member_name=best_member.name,
                        match_score=round(best_score),
                        estimated_hours=task.estimated_hours,
                    )
                )
            else:
                task.assigned_to = None
                logger.info("No member available for task %s (%s)", task.id, task.title)
                records.append(
                    AssignmentRecord(
                        task_id=task.id,
                        task_title=task.title,
                        member_id=None,
                        member_name=UNASSIGNED_NAME,
                        match_score=0,
                        estimated_hours=task.estimated_hours,
                        reason=UNASSIGNED_REASON,
                    )
                )
        return records

    @staticmethod
    def run(members: List[Member], tasks: List[Task]) -> AllocationReport:
        """Allocate and package the records with statistics and member summaries.

        Any unexpected failure is raised as :class:`AllocationError` so callers
        can tell a failed run apart from one that assigned nothing.
        """
        try:
            records = Allocator.allocate(members, tasks)
            report = build_report(records, members)
        except AllocationError:
            logger.exception("Allocation run failed")
            raise
        except Exception as exc:
            logger.exception("Allocation run failed")
            raise AllocationError(f"Allocation failed: {exc}") from exc
        logger.info(
            "Allocated %d of %d tasks (efficiency %d%%)",
            report.stats.assigned_tasks,
            report.stats.total_tasks,
            report.stats.efficiency,
        )
        return report

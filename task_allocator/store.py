"""In-memory store holding the members and tasks served by the API."""
from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from .engine.allocator import Allocator, reset_workloads
from .io.dataset_loader import load_dataset, parse_dataset
from .models.member import Member
from .models.task import Task
from .reporting.summary import AllocationReport

logger = logging.getLogger(__name__)

SAMPLE_DATA: Dict[str, Any] = {
    "members": [
        {
            "id": "1",
            "name": "Alice Johnson",
            "skills": {"React": 8, "JavaScript": 9, "CSS": 7},
            "maxCapacity": 40,
        },
        {
            "id": "2",
            "name": "Bob Smith",
            "skills": {"Python": 9, "Django": 8, "PostgreSQL": 7},
            "maxCapacity": 35,
        },
        {
            "id": "3",
            "name": "Carol Davis",
            "skills": {"UI/UX": 9, "Figma": 8, "CSS": 8},
            "maxCapacity": 30,
        },
    ],
    "tasks": [
        {
            "id": "1",
            "title": "Build Login Component",
            "description": "Create a reusable login form",
            "requiredSkills": ["React", "JavaScript"],
            "estimatedHours": 8,
            "priority": "high",
            "deadline": "2025-02-15",
        },
        {
            "id": "2",
            "title": "Design Dashboard Mockups",
            "description": "Wireframes for the analytics dashboard",
            "requiredSkills": ["UI/UX", "Figma"],
            "estimatedHours": 12,
            "priority": "medium",
            "deadline": "2025-02-20",
        },
        {
            "id": "3",
            "title": "Set Up Database Schema",
            "description": "Tables for users and tasks",
            "requiredSkills": ["PostgreSQL", "Python"],
            "estimatedHours": 6,
            "priority": "high",
            "deadline": "2025-02-10",
        },
    ],
}


class TaskStore:
    """Members and tasks shared between requests.

    Allocation works on a deep copy of the stored state and the result is
    committed afterwards, all under one lock so runs never interleave.
    """

    def __init__(
        self,
        members: Optional[List[Member]] = None,
        tasks: Optional[List[Task]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._members: List[Member] = list(members or [])
        self._tasks: List[Task] = list(tasks or [])
        self.last_report: Optional[AllocationReport] = None

    @classmethod
    def from_dataset(cls, path: str) -> "TaskStore":
        members, tasks = load_dataset(path)
        logger.info("Loaded %d members and %d tasks from %s", len(members), len(tasks), path)
        return cls(members, tasks)

    @classmethod
    def sample(cls) -> "TaskStore":
        members, tasks = parse_dataset(copy.deepcopy(SAMPLE_DATA))
        return cls(members, tasks)

    def members(self) -> List[Member]:
        with self._lock:
            return copy.deepcopy(self._members)

    def tasks(self) -> List[Task]:
        with self._lock:
            return copy.deepcopy(self._tasks)

    def snapshot(self) -> Tuple[List[Member], List[Task]]:
        with self._lock:
            return copy.deepcopy(self._members), copy.deepcopy(self._tasks)

    def add_member(self, member: Member) -> Member:
        with self._lock:
            if any(m.id == member.id for m in self._members):
                raise ValueError(f"Member with id '{member.id}' already exists")
            self._members.append(member)
        logger.info("Added member %s (%s)", member.id, member.name)
        return member

    def add_task(self, task: Task) -> Task:
        with self._lock:
            if any(t.id == task.id for t in self._tasks):
                raise ValueError(f"Task with id '{task.id}' already exists")
            self._tasks.append(task)
        logger.info("Added task %s (%s)", task.id, task.title)
        return task

    def run_allocation(self) -> AllocationReport:
        """Allocate against a snapshot and commit the new state on success."""
        with self._lock:
            members = copy.deepcopy(self._members)
            tasks = copy.deepcopy(self._tasks)
            report = Allocator.run(members, tasks)
            self._members, self._tasks = members, tasks
            self.last_report = report
        return report

    def reset(self) -> None:
        with self._lock:
            reset_workloads(self._members, self._tasks)
            self.last_report = None
        logger.info("Reset workloads and task assignments")

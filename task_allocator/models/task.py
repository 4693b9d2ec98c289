from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

PRIORITY_WEIGHTS: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}


@dataclass(eq=False)
class Task:
    """Represents a unit of work requiring a set of skills."""

    id: str
    title: str
    estimated_hours: float
    priority: str
    deadline: date
    description: str = ""
    required_skills: List[str] = field(default_factory=list)
    assigned_to: Optional[str] = None

    def __post_init__(self) -> None:
        if not str(self.id).strip():
            raise ValueError("task id is required")
        if not math.isfinite(self.estimated_hours) or self.estimated_hours <= 0:
            raise ValueError(f"{self.title}: estimated_hours must be a positive number")
        self.priority = str(self.priority).strip().lower()
        if self.priority not in PRIORITY_WEIGHTS:
            raise ValueError(
                f"{self.title}: priority must be one of {', '.join(PRIORITY_WEIGHTS)}"
            )
        if isinstance(self.deadline, str):
            try:
                self.deadline = date.fromisoformat(self.deadline.strip())
            except ValueError as exc:
                raise ValueError(
                    f"{self.title}: deadline must be an ISO date (YYYY-MM-DD)"
                ) from exc
        elif isinstance(self.deadline, datetime):
            self.deadline = self.deadline.date()
        elif not isinstance(self.deadline, date):
            raise ValueError(f"{self.title}: deadline must be a date")
        self.required_skills = list(self.required_skills)

    @property
    def priority_weight(self) -> int:
        return PRIORITY_WEIGHTS[self.priority]

    @property
    def status(self) -> str:
        return "assigned" if self.assigned_to is not None else "unassigned"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "requiredSkills": list(self.required_skills),
            "estimatedHours": self.estimated_hours,
            "priority": self.priority,
            "deadline": self.deadline.isoformat(),
            "assignedTo": self.assigned_to,
            "status": self.status,
        }

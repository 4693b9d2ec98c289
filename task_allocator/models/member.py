from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set


@dataclass(eq=False)
class Member:
    """Represents a team member who can take on tasks."""

    id: str
    name: str
    max_capacity: float
    skills: Set[str] = field(default_factory=set)
    skill_levels: Dict[str, float] = field(default_factory=dict)
    current_workload: float = 0

    def __post_init__(self) -> None:
        if not str(self.id).strip():
            raise ValueError("member id is required")
        if not math.isfinite(self.max_capacity) or self.max_capacity <= 0:
            raise ValueError(f"{self.name}: max_capacity must be a positive number")
        if not math.isfinite(self.current_workload) or self.current_workload < 0:
            raise ValueError(f"{self.name}: current_workload must be a non-negative number")
        for skill, level in self.skill_levels.items():
            if not math.isfinite(level) or level < 0:
                raise ValueError(
                    f"{self.name}: level for {skill} must be a non-negative number"
                )
        self.skills = set(self.skills) | set(self.skill_levels)

    def level_for(self, skill: str) -> Optional[float]:
        """Return the proficiency level for ``skill`` or ``None`` if not held."""
        return self.skill_levels.get(skill)

    def can_take(self, hours: float) -> bool:
        """Return True if ``hours`` more work fits within capacity."""
        return self.current_workload + hours <= self.max_capacity

    def utilization(self) -> int:
        """Return committed workload as a rounded percentage of capacity."""
        return round(self.current_workload / self.max_capacity * 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "skills": sorted(self.skills),
            "skillLevels": dict(self.skill_levels),
            "currentWorkload": self.current_workload,
            "maxCapacity": self.max_capacity,
        }

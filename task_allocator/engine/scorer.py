"""Suitability scoring for a single (member, task) pair."""
from __future__ import annotations

from ..models.member import Member
from ..models.task import Task

LEVEL_MULTIPLIER = 10
WORKLOAD_PENALTY = 20


def score(member: Member, task: Task) -> float:
    """Return how well ``member`` suits ``task`` given their current workload.

    The score is the average proficiency over the required skills the member
    holds, scaled by ten, minus a penalty proportional to how much of the
    member's capacity is already committed. Members holding none of the
    required skills score exactly zero. The top end is not clamped.
    """
    total = 0.0
    matched = 0
    for skill in task.required_skills:
        level = member.level_for(skill)
        if level is not None:
            total += level
            matched += 1

    if matched == 0:
        return 0

    avg_level = total / matched
    workload_ratio = member.current_workload / member.max_capacity
    penalty = workload_ratio * WORKLOAD_PENALTY
    return max(0, avg_level * LEVEL_MULTIPLIER - penalty)

"""Utilities for loading :class:`~task_allocator.models.task.Task` objects."""
from __future__ import annotations

import csv
from datetime import date
from typing import Any, Dict, List

from ..models.task import Task


def _split_skills(value: Any) -> List[str]:
    if isinstance(value, str):
        return [s.strip() for s in value.split(";") if s.strip()]
    return [str(s) for s in value]


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Build a :class:`Task` from a camelCase or snake_case mapping."""
    if not isinstance(data, dict):
        raise ValueError(f"expected mapping but found {type(data).__name__}")
    task_id = data.get("id")
    if task_id is None:
        raise ValueError("task 'id' is required")
    title = str(data.get("title") or "").strip()
    if not title:
        raise ValueError(f"task {task_id}: 'title' is required")

    hours = data.get("estimatedHours", data.get("estimated_hours"))
    try:
        estimated_hours = float(hours)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"task {task_id}: estimated hours must be a number") from exc

    deadline = data.get("deadline")
    if not isinstance(deadline, (str, date)):
        raise ValueError(f"task {task_id}: 'deadline' is required")

    assigned_to = data.get("assignedTo", data.get("assigned_to"))
    return Task(
        id=str(task_id),
        title=title,
        description=str(data.get("description") or ""),
        required_skills=_split_skills(
            data.get("requiredSkills", data.get("required_skills")) or []
        ),
        estimated_hours=estimated_hours,
        priority=str(data.get("priority") or ""),
        deadline=deadline,
        assigned_to=str(assigned_to) if assigned_to is not None else None,
    )


def load_tasks(path: str) -> List[Task]:
    """Load tasks from a CSV file.

    Required columns are ``id``, ``title``, ``required_skills``,
    ``estimated_hours``, ``priority`` and ``deadline``. ``description`` and
    ``assigned_to`` are optional. Required skills are semicolon-delimited and
    deadlines use ``YYYY-MM-DD``.
    """

    with open(path, newline="", encoding="utf8") as handle:
        reader = csv.DictReader(handle)
        fieldnames = reader.fieldnames or []
        required = {
            "id",
            "title",
            "required_skills",
            "estimated_hours",
            "priority",
            "deadline",
        }
        missing = required - set(fieldnames)
        if missing:
            raise ValueError(f"Missing required columns: {', '.join(sorted(missing))}")

        tasks: List[Task] = []
        seen = set()
        for lineno, row in enumerate(reader, start=2):
            task_id = (row.get("id") or "").strip()
            if not task_id:
                raise ValueError(f"Row {lineno}: 'id' is required")
            if task_id in seen:
                raise ValueError(f"Row {lineno}: duplicate task id '{task_id}'")
            seen.add(task_id)

            try:
                estimated_hours = float(row.get("estimated_hours") or "")
            except ValueError as exc:
                raise ValueError(f"Row {lineno}: estimated_hours must be a number") from exc

            assigned_to = (row.get("assigned_to") or "").strip() or None
            try:
                task = Task(
                    id=task_id,
                    title=(row.get("title") or "").strip(),
                    description=(row.get("description") or "").strip(),
                    required_skills=_split_skills(row.get("required_skills") or ""),
                    estimated_hours=estimated_hours,
                    priority=row.get("priority") or "",
                    deadline=(row.get("deadline") or "").strip(),
                    assigned_to=assigned_to,
                )
            except ValueError as exc:
                raise ValueError(f"Row {lineno}: {exc}") from exc
            tasks.append(task)

    return tasks

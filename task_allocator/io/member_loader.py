"""Utilities for loading :class:`~task_allocator.models.member.Member` objects."""
from __future__ import annotations

import csv
from typing import Any, Dict, List

from ..models.member import Member


def parse_skill_levels(field: str) -> Dict[str, float]:
    """Parse a ``React=8;CSS=7`` string into a skill -> level mapping.

    Entries without ``=`` are rejected; surrounding whitespace is ignored.
    """
    levels: Dict[str, float] = {}
    for entry in field.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise ValueError(f"skill entry '{entry}' missing '='")
        skill, raw = entry.split("=", 1)
        skill = skill.strip()
        try:
            levels[skill] = float(raw)
        except ValueError as exc:
            raise ValueError(f"level '{raw}' for skill '{skill}' must be a number") from exc
    return levels


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def member_from_dict(data: Dict[str, Any]) -> Member:
    """Build a :class:`Member` from a camelCase or snake_case mapping.

    Skill levels may be given as ``skillLevels``/``skill_levels`` (a mapping)
    or as a ``skills`` mapping or ``React=8;CSS=7`` string; a plain ``skills``
    list adds skills without levels.
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected mapping but found {type(data).__name__}")
    member_id = _first(data, "id")
    if member_id is None:
        raise ValueError("member 'id' is required")
    name = str(_first(data, "name", default="")).strip()
    if not name:
        raise ValueError(f"member {member_id}: 'name' is required")

    skills_field = _first(data, "skills", default=[])
    levels_field = _first(data, "skillLevels", "skill_levels", default={})
    if isinstance(skills_field, str):
        try:
            skills_field = parse_skill_levels(skills_field)
        except ValueError as exc:
            raise ValueError(f"member {member_id}: {exc}") from exc
    if isinstance(skills_field, dict):
        levels_field = {**skills_field, **levels_field}
        skills_field = []
    if not isinstance(skills_field, (list, tuple, set)):
        raise ValueError(f"member {member_id}: skills must be a list or mapping")
    if not isinstance(levels_field, dict):
        raise ValueError(f"member {member_id}: skill levels must be a mapping")

    try:
        skill_levels = {str(k): float(v) for k, v in levels_field.items()}
        max_capacity = float(_first(data, "maxCapacity", "max_capacity", default=0))
        workload = float(_first(data, "currentWorkload", "current_workload", default=0))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"member {member_id}: numeric fields must be numbers") from exc

    return Member(
        id=str(member_id),
        name=name,
        max_capacity=max_capacity,
        skills={str(s) for s in skills_field},
        skill_levels=skill_levels,
        current_workload=workload,
    )


def load_members(path: str) -> List[Member]:
    """Load members from a CSV file.

    The CSV must include ``id``, ``name``, ``skills`` and ``max_capacity``
    columns; ``current_workload`` is optional. Skills are semicolon-delimited
    ``name=level`` pairs.

    Parameters
    ----------
    path:
        Path to the CSV file.

    Returns
    -------
    list[Member]
        Members in file order.

    Raises
    ------
    ValueError
        If required columns are missing, ids repeat or data is invalid.
    """

    with open(path, newline="", encoding="utf8") as handle:
        reader = csv.DictReader(handle)
        fieldnames = reader.fieldnames or []
        required = {"id", "name", "skills", "max_capacity"}
        missing = required - set(fieldnames)
        if missing:
            raise ValueError(f"Missing required columns: {', '.join(sorted(missing))}")

        members: List[Member] = []
        seen = set()
        for lineno, row in enumerate(reader, start=2):
            member_id = (row.get("id") or "").strip()
            if not member_id:
                raise ValueError(f"Row {lineno}: 'id' is required")
            if member_id in seen:
                raise ValueError(f"Row {lineno}: duplicate member id '{member_id}'")
            seen.add(member_id)

            try:
                skill_levels = parse_skill_levels(row.get("skills") or "")
            except ValueError as exc:
                raise ValueError(f"Row {lineno}: {exc}") from exc

            try:
                max_capacity = float(row.get("max_capacity") or "")
                workload = float((row.get("current_workload") or "0").strip() or "0")
            except ValueError as exc:
                raise ValueError(
                    f"Row {lineno}: max_capacity and current_workload must be numbers"
                ) from exc

            try:
                member = Member(
                    id=member_id,
                    name=(row.get("name") or "").strip(),
                    max_capacity=max_capacity,
                    skill_levels=skill_levels,
                    current_workload=workload,
                )
            except ValueError as exc:
                raise ValueError(f"Row {lineno}: {exc}") from exc
            members.append(member)

    return members

"""Load members and tasks together from a YAML or JSON document."""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

import yaml

from ..models.member import Member
from ..models.task import Task
from .member_loader import member_from_dict
from .task_loader import task_from_dict


def _build(kind: str, items: Any, factory) -> List[Any]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"'{kind}' must be a list")
    built = []
    seen = set()
    for idx, item in enumerate(items, start=1):
        try:
            entity = factory(item)
        except ValueError as exc:
            raise ValueError(f"{kind} entry {idx}: {exc}") from exc
        if entity.id in seen:
            raise ValueError(f"{kind} entry {idx}: duplicate id '{entity.id}'")
        seen.add(entity.id)
        built.append(entity)
    return built


def parse_dataset(data: Dict[str, Any]) -> Tuple[List[Member], List[Task]]:
    """Build members and tasks from an already-parsed document."""
    if not isinstance(data, dict):
        raise ValueError("Dataset must be a mapping with 'members' and 'tasks'")
    members = _build("members", data.get("members"), member_from_dict)
    tasks = _build("tasks", data.get("tasks"), task_from_dict)
    return members, tasks


def load_dataset(path: str) -> Tuple[List[Member], List[Task]]:
    """Parse a YAML (or JSON) file into members and tasks."""
    with open(path, "r", encoding="utf8") as handle:
        data = yaml.safe_load(handle) or {}
    return parse_dataset(data)

"""Input helpers for :mod:`task_allocator`."""

from .dataset_loader import load_dataset, parse_dataset
from .member_loader import load_members, member_from_dict, parse_skill_levels
from .task_loader import load_tasks, task_from_dict

__all__ = [
    "load_members",
    "load_tasks",
    "load_dataset",
    "parse_dataset",
    "member_from_dict",
    "task_from_dict",
    "parse_skill_levels",
]

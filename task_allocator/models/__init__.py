"""Data models for task_allocator."""

from .member import Member
from .task import PRIORITY_WEIGHTS, Task

__all__ = ["Member", "Task", "PRIORITY_WEIGHTS"]

"""Derived view: due-date sort followed by status filter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .tasks import Task


class TaskFilter(Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def coerce(cls, value: Union["TaskFilter", str]) -> "TaskFilter":
        """Accept a TaskFilter or its string value; raise ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown filter {value!r} (expected one of: {choices})") from None


def parse_due_date(value: Optional[str]) -> Optional[date]:
    """Parse a stored due date; returns None when missing or unparseable.

    Accepts ``YYYY-MM-DD`` with an optional ``T<time>`` suffix.
    """
    if not value:
        return None
    day, separator, clock = value.strip().partition("T")
    try:
        parsed = date.fromisoformat(day)
        if separator:
            time.fromisoformat(clock)
    except ValueError:
        return None
    return parsed


def _due_key(task: Task) -> Tuple[int, date]:
    # Missing/unparseable dates sort before every real date.
    parsed = parse_due_date(task.due_date)
    if parsed is None:
        return (0, date.min)
    return (1, parsed)


def sort_by_due_date(tasks: Iterable[Task]) -> List[Task]:
    """Stable ascending sort by due date."""
    return sorted(tasks, key=_due_key)


def matches_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter is TaskFilter.COMPLETED:
        return task.completed
    if task_filter is TaskFilter.PENDING:
        return not task.completed
    return True


def filter_tasks(tasks: Iterable[Task], task_filter: Union[TaskFilter, str]) -> List[Task]:
    task_filter = TaskFilter.coerce(task_filter)
    return [task for task in tasks if matches_filter(task, task_filter)]


def derive_view(tasks: Iterable[Task], task_filter: Union[TaskFilter, str] = TaskFilter.ALL) -> List[Task]:
    """Sort then filter. The input sequence is never modified."""
    return filter_tasks(sort_by_due_date(tasks), task_filter)


@dataclass
class ViewState:
    """Presentation state next to the task list.

    ``filter`` lives only for the session; ``dark_mode`` is persisted by the
    session under the ``darkMode`` key.
    """

    filter: TaskFilter = TaskFilter.ALL
    dark_mode: bool = False

    def set_filter(self, value: Union[TaskFilter, str]) -> TaskFilter:
        self.filter = TaskFilter.coerce(value)
        return self.filter

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

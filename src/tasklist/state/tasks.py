"""Task collection engine: the ordered task list and its mutations."""

from __future__ import annotations

import itertools
import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..errors import TaskIndexError

logger = logging.getLogger(__name__)

DueDate = Union[str, date, None]
ChangeListener = Callable[[str, "Task"], None]


def _normalize_due_date(value: DueDate) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class Task:
    """A single task in the list."""

    def __init__(
        self,
        id: str,
        text: str,
        due_date: DueDate = None,
        completed: bool = False,
    ) -> None:
        self.id = id
        self.text = text
        self.due_date = _normalize_due_date(due_date)
        self.completed = completed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted snapshot layout (the id is not stored)."""
        return {
            "text": self.text,
            "dueDate": self.due_date or "",
            "completed": self.completed,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any], id: str) -> "Task":
        """Create from a persisted entry; anything but a JSON boolean reads as not completed."""
        completed = data.get("completed", False)
        return Task(
            id=id,
            text=str(data.get("text", "")),
            due_date=data.get("dueDate"),
            completed=completed if isinstance(completed, bool) else False,
        )

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, text={self.text!r}, due_date={self.due_date!r}, completed={self.completed})"


class TaskCollection:
    """Owns the manual-order task list.

    Positional operations (``toggle_task_status``, ``delete_task``,
    ``reorder``) address tasks by their index in the manual order and raise
    :class:`TaskIndexError` for positions that do not exist. The id-based
    twins (``toggle``, ``delete``, ``move``) are what a UI showing a sorted or
    filtered view should call; they return ``False`` for unknown ids.

    After each successful mutation the ``on_change`` listener is called with
    the event name (``add``, ``toggle``, ``delete``, ``move``) and the task.
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self.tasks: List[Task] = list(tasks or [])
        self.on_change = on_change
        # Keep fresh ids clear of any supplied ones.
        start = 1
        for task in self.tasks:
            if task.id.startswith("task-") and task.id[5:].isdigit():
                start = max(start, int(task.id[5:]) + 1)
        self._ids = itertools.count(start)

    @classmethod
    def from_list(cls, entries: Any, on_change: Optional[ChangeListener] = None) -> "TaskCollection":
        """Hydrate from a persisted snapshot, skipping malformed entries."""
        collection = cls(on_change=on_change)
        if not isinstance(entries, list):
            return collection
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            text = entry.get("text")
            if not isinstance(text, str) or not text.strip():
                logger.debug("Skipping stored task without text: %r", entry)
                continue
            collection.tasks.append(Task.from_dict(entry, collection._next_id()))
        return collection

    def _next_id(self) -> str:
        return f"task-{next(self._ids)}"

    def _notify(self, event: str, task: Task) -> None:
        logger.debug("Task %s: %s", event, task.id)
        if self.on_change is not None:
            self.on_change(event, task)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tasks):
            raise TaskIndexError(index, len(self.tasks))

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.tasks)

    def list_all(self) -> List[Task]:
        """List all tasks in manual order."""
        return list(self.tasks)

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        return next((task for task in self.tasks if task.id == task_id), None)

    def index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        """Snapshot in the persisted layout, manual order."""
        return [task.to_dict() for task in self.tasks]

    # -------------------- positional operations --------------------
    def add_task(self, text: str, due_date: DueDate = None) -> Optional[Task]:
        """Append a new pending task; blank text is ignored and returns None."""
        if not text or not text.strip():
            logger.debug("Rejected task with empty text")
            return None
        task = Task(id=self._next_id(), text=text, due_date=due_date)
        self.tasks.append(task)
        self._notify("add", task)
        return task

    def toggle_task_status(self, index: int) -> Task:
        self._check_index(index)
        task = self.tasks[index]
        task.completed = not task.completed
        self._notify("toggle", task)
        return task

    def delete_task(self, index: int) -> Task:
        self._check_index(index)
        task = self.tasks.pop(index)
        self._notify("delete", task)
        return task

    def reorder(self, source_index: int, destination_index: Optional[int] = None) -> Optional[Task]:
        """Move the task at source_index so it ends up at destination_index.

        A ``None`` destination is a cancelled drag and changes nothing.
        """
        if destination_index is None:
            return None
        self._check_index(source_index)
        self._check_index(destination_index)
        task = self.tasks.pop(source_index)
        self.tasks.insert(destination_index, task)
        self._notify("move", task)
        return task

    # -------------------- id operations --------------------
    def toggle(self, task_id: str) -> bool:
        """Flip completion of a task by ID."""
        index = self.index_of(task_id)
        if index is None:
            return False
        self.toggle_task_status(index)
        return True

    def delete(self, task_id: str) -> bool:
        """Delete a task by ID."""
        index = self.index_of(task_id)
        if index is None:
            return False
        self.delete_task(index)
        return True

    def move(self, task_id: str, destination_index: int) -> bool:
        """Move a task by ID; the destination is clamped to the list bounds."""
        index = self.index_of(task_id)
        if index is None:
            return False
        destination_index = max(0, min(destination_index, len(self.tasks) - 1))
        if destination_index != index:
            self.reorder(index, destination_index)
        return True

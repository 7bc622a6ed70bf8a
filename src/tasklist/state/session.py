"""Session wiring: hydrate from the store, save after every change."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..errors import PersistenceError, TaskIndexError
from ..utils.logger import EventLog
from .persistence import JsonFileStore, KeyValueStore
from .tasks import Task, TaskCollection
from .view import TaskFilter, ViewState, derive_view

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
DARK_MODE_KEY = "darkMode"


class TaskSession:
    """Owns one task collection plus its view state for the life of the process."""

    def __init__(
        self,
        store: KeyValueStore,
        default_filter: Union[TaskFilter, str] = TaskFilter.ALL,
        event_log: Optional[EventLog] = None,
    ) -> None:
        self.store = store
        self.event_log = event_log
        self.last_save_error: Optional[PersistenceError] = None
        self.view_state = ViewState(filter=TaskFilter.coerce(default_filter))
        self.tasks = TaskCollection(on_change=self._on_task_change)
        self.load()

    @classmethod
    def from_path(cls, path: Path, default_filter: Union[TaskFilter, str] = TaskFilter.ALL) -> "TaskSession":
        store = JsonFileStore(path)
        return cls(store, default_filter=default_filter, event_log=EventLog(store.logs_dir))

    def load(self) -> None:
        """Hydrate tasks and dark mode from the store; bad data means defaults."""
        entries = self.store.load(TASKS_KEY)
        if entries is not None and not isinstance(entries, list):
            logger.warning("Stored %r is not a list; starting empty", TASKS_KEY)
        self.tasks = TaskCollection.from_list(entries, on_change=self._on_task_change)

        dark_mode = self.store.load(DARK_MODE_KEY)
        self.view_state.dark_mode = dark_mode if isinstance(dark_mode, bool) else False
        logger.debug("Loaded %d tasks (dark mode: %s)", len(self.tasks), self.view_state.dark_mode)

    def _on_task_change(self, event: str, task: Task) -> None:
        if self.event_log is not None:
            self.event_log.record(event, task)
        self.save_tasks()

    def _save(self, key: str, value) -> bool:
        try:
            self.store.save(key, value)
        except PersistenceError as exc:
            logger.error("Could not save %r: %s", key, exc)
            self.last_save_error = exc
            return False
        self.last_save_error = None
        return True

    def save_tasks(self) -> bool:
        return self._save(TASKS_KEY, self.tasks.to_list())

    # -------------------- view state --------------------
    @property
    def filter(self) -> TaskFilter:
        return self.view_state.filter

    @property
    def dark_mode(self) -> bool:
        return self.view_state.dark_mode

    def set_filter(self, value: Union[TaskFilter, str]) -> TaskFilter:
        """Change the active filter (not persisted)."""
        return self.view_state.set_filter(value)

    def toggle_dark_mode(self) -> bool:
        dark_mode = self.view_state.toggle_dark_mode()
        self._save(DARK_MODE_KEY, dark_mode)
        return dark_mode

    def view(self) -> List[Task]:
        """Tasks sorted by due date and filtered by the active filter."""
        return derive_view(self.tasks.list_all(), self.view_state.filter)

    # -------------------- view positions --------------------
    def _view_task(self, view: List[Task], index: int) -> Task:
        if not 0 <= index < len(view):
            raise TaskIndexError(index, len(view))
        return view[index]

    def toggle_task_status(self, view_index: int) -> Task:
        """Toggle the task shown at ``view_index`` in the current view."""
        task = self._view_task(self.view(), view_index)
        self.tasks.toggle(task.id)
        return task

    def delete_task(self, view_index: int) -> Task:
        """Delete the task shown at ``view_index`` in the current view."""
        task = self._view_task(self.view(), view_index)
        self.tasks.delete(task.id)
        return task

    def reorder(self, source_index: int, destination_index: Optional[int] = None) -> Optional[Task]:
        """Drag the view row at ``source_index`` onto the row at ``destination_index``.

        The dragged task takes the manual position of the task it was dropped on.
        A ``None`` destination is a cancelled drag and changes nothing.
        """
        if destination_index is None:
            return None
        view = self.view()
        task = self._view_task(view, source_index)
        target = self._view_task(view, destination_index)
        self.tasks.move(task.id, self.tasks.index_of(target.id))
        return task

"""State management modules."""

from .persistence import JsonFileStore, KeyValueStore, MemoryStore, Persistence
from .session import TaskSession
from .tasks import Task, TaskCollection
from .view import TaskFilter, ViewState, derive_view

__all__ = [
    "Persistence",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "TaskSession",
    "Task",
    "TaskCollection",
    "TaskFilter",
    "ViewState",
    "derive_view",
]

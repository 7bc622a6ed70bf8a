"""Tasklist - ordered task list with due dates, filters and persistence."""

__version__ = "0.1.0"
__author__ = "Tasklist Contributors"

from .config import Config
from .errors import PersistenceError, TaskIndexError, TasklistError
from .state.session import TaskSession
from .state.tasks import Task, TaskCollection
from .state.view import TaskFilter, derive_view

__all__ = [
    "Config",
    "TaskSession",
    "Task",
    "TaskCollection",
    "TaskFilter",
    "derive_view",
    "TasklistError",
    "TaskIndexError",
    "PersistenceError",
]

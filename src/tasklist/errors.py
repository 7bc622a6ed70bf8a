"""Exception types raised by the task list engine."""

from __future__ import annotations


class TasklistError(Exception):
    """Base exception for task list errors."""


class TaskIndexError(TasklistError, IndexError):
    """Raised when a position does not address a task in the collection or view."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Task position {index} out of range ({length} tasks)")
        self.index = index
        self.length = length


class PersistenceError(TasklistError):
    """Raised when a value cannot be serialized or written to the store."""

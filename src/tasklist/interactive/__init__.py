"""Interactive (Textual) mode."""

from .app import TasklistApp

__all__ = ["TasklistApp"]

"""Interactive mode widgets."""

from .task_list import TaskListWidget
from .output_panel import OutputPanel
from .top_bar import TopBar
from .new_task_modal import NewTaskModal

__all__ = [
    "TaskListWidget",
    "OutputPanel",
    "TopBar",
    "NewTaskModal",
]

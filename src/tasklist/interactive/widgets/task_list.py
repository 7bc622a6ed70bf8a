"""Task list widget for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Button, Label, ListItem, ListView

from ...state.tasks import Task


class TaskListWidget(Widget):
    """Widget displaying the derived task view.

    Rows are positions in the sorted/filtered view; every lookup goes
    through the row's task so callers act on task ids, never view indices.
    """

    DEFAULT_CSS = """
    TaskListWidget Vertical {
        height: 100%;
    }

    TaskListWidget Button {
        width: 100%;
        margin: 0 0 1 0;
    }

    TaskListWidget ListView {
        height: 1fr;
    }
    """

    tasks: List[Task] = reactive(list, always_update=True, init=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Tasks"
        self.current_task_id: Optional[str] = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Button("+ Add Task", variant="success", id="new-task-button")
            yield ListView(id="task-list-view")

    async def watch_tasks(self, tasks: List[Task]) -> None:
        list_view = self.query_one("#task-list-view", ListView)
        previous_index = list_view.index
        await list_view.clear()
        await list_view.extend(ListItem(Label(self.render_task(task))) for task in tasks)

        if not tasks:
            return
        index = self._index_of(self.current_task_id)
        if index is None:
            index = min(previous_index or 0, len(tasks) - 1)
        list_view.index = index

    @staticmethod
    def render_task(task: Task) -> Text:
        text = Text()
        if task.completed:
            text.append("● ", style="green")
            text.append(task.text, style="strike dim")
        else:
            text.append("○ ", style="#888888")
            text.append(task.text)
        text.append(f"  📅 {task.due_date or 'No Due Date'}", style="dim")
        return text

    def _index_of(self, task_id: Optional[str]) -> Optional[int]:
        if task_id is None:
            return None
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    @property
    def highlighted_task(self) -> Optional[Task]:
        list_view = self.query_one("#task-list-view", ListView)
        if list_view.index is not None and list_view.index < len(self.tasks):
            return self.tasks[list_view.index]
        return None

    def update_tasks(self, tasks: List[Task], current_id: Optional[str] = None) -> None:
        self.current_task_id = current_id
        self.tasks = tasks

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press for new task."""
        if event.button.id == "new-task-button":
            self.post_message(self.NewTaskRequested())
            event.stop()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Enter on a row toggles that task."""
        task = self.highlighted_task
        if task is not None:
            self.post_message(self.TaskSelected(task))

    class NewTaskRequested(Message):
        """Message sent when new task button is pressed."""

    class TaskSelected(Message):
        """Message sent when a task is selected from the list."""

        def __init__(self, task: Task) -> None:
            super().__init__()
            self.task = task

"""Textual application for interactive mode."""

from __future__ import annotations

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, ListView

from .widgets import NewTaskModal, OutputPanel, TaskListWidget, TopBar
from .widgets.new_task_modal import NewTaskResult
from ..state.session import TaskSession
from ..state.tasks import Task
from ..state.view import TaskFilter

DARK_THEME = "textual-dark"
LIGHT_THEME = "textual-light"


class TasklistApp(App):
    """Tasklist interactive mode TUI."""

    CSS = """
    Screen {
        layout: grid;
        grid-size: 1 3;
        grid-rows: auto 1fr 8;
        overflow: hidden;
    }

    #task-list-widget {
        border: tall $primary;
        padding: 0;
    }

    #output-panel {
        border: tall $primary;
        padding: 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_task", "New Task"),
        Binding("space", "toggle_task", "Complete/Undo"),
        Binding("delete", "delete_task", "Delete"),
        Binding("ctrl+up", "move_up", "Move Up"),
        Binding("ctrl+down", "move_down", "Move Down"),
        Binding("ctrl+f", "cycle_filter", "Filter"),
        Binding("ctrl+t", "toggle_dark_mode", "Theme"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: TaskSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        self.top_bar = TopBar(self.session.filter, self.session.dark_mode, id="top-bar")
        self.task_list = TaskListWidget(id="task-list-widget")
        self.output_panel = OutputPanel(id="output-panel")

        yield self.top_bar
        yield self.task_list
        yield self.output_panel
        yield Footer()

    def on_mount(self) -> None:
        self._apply_theme()
        self.refresh_tasks()
        self.query_one("#task-list-view", ListView).focus()
        self.output_panel.report(f"{len(self.session.tasks)} tasks loaded")

    # -------------------- helpers --------------------
    def refresh_tasks(self, current_id: Optional[str] = None) -> None:
        self.task_list.update_tasks(self.session.view(), current_id=current_id)

    def _apply_theme(self) -> None:
        self.theme = DARK_THEME if self.session.dark_mode else LIGHT_THEME

    def _after_change(self, message: str, current_id: Optional[str] = None) -> None:
        self.refresh_tasks(current_id)
        if self.session.last_save_error is not None:
            self.output_panel.report(str(self.session.last_save_error), "error")
        else:
            self.output_panel.report(message, "done")

    def _highlighted(self) -> Optional[Task]:
        task = self.task_list.highlighted_task
        if task is None:
            self.output_panel.report("No task selected", "warning")
        return task

    # -------------------- events --------------------
    def on_task_list_widget_new_task_requested(self, event: TaskListWidget.NewTaskRequested) -> None:
        self.action_new_task()

    def on_task_list_widget_task_selected(self, event: TaskListWidget.TaskSelected) -> None:
        self._toggle(event.task)

    def on_top_bar_filter_changed(self, event: TopBar.FilterChanged) -> None:
        self.session.set_filter(event.task_filter)
        self.refresh_tasks()

    def on_top_bar_dark_mode_toggled(self, event: TopBar.DarkModeToggled) -> None:
        self.action_toggle_dark_mode()

    # -------------------- actions --------------------
    def action_new_task(self) -> None:
        """Show new task modal."""
        self.push_screen(NewTaskModal(), self._add_from_modal)

    def _add_from_modal(self, result: NewTaskResult) -> None:
        if not result:
            return
        text, due_date = result
        task = self.session.tasks.add_task(text, due_date)
        if task is None:
            self.output_panel.report("Task text must not be empty", "warning")
            return
        self._after_change(f"Added: {task.text}", current_id=task.id)

    def _toggle(self, task: Task) -> None:
        if not self.session.tasks.toggle(task.id):
            self.output_panel.report("Task no longer exists", "warning")
            self.refresh_tasks()
            return
        state = "completed" if task.completed else "pending"
        self._after_change(f"{task.text} marked {state}", current_id=task.id)

    def action_toggle_task(self) -> None:
        task = self._highlighted()
        if task is not None:
            self._toggle(task)

    def action_delete_task(self) -> None:
        task = self._highlighted()
        if task is None:
            return
        if not self.session.tasks.delete(task.id):
            self.output_panel.report("Task no longer exists", "warning")
            self.refresh_tasks()
            return
        self._after_change(f"Deleted: {task.text}")

    def _move(self, offset: int) -> None:
        """Drag the highlighted task onto its neighbour in the view."""
        task = self._highlighted()
        if task is None:
            return
        view = self.task_list.tasks
        position = next(i for i, t in enumerate(view) if t.id == task.id)
        target = position + offset
        if not 0 <= target < len(view):
            return
        destination = self.session.tasks.index_of(view[target].id)
        if destination is None or not self.session.tasks.move(task.id, destination):
            self.output_panel.report("Task no longer exists", "warning")
            self.refresh_tasks()
            return
        self._after_change(f"Moved: {task.text}", current_id=task.id)
        if self.session.view() == view:
            self.output_panel.report("Tasks stay sorted by due date", "hint")

    def action_move_up(self) -> None:
        self._move(-1)

    def action_move_down(self) -> None:
        self._move(1)

    def action_cycle_filter(self) -> None:
        filters = list(TaskFilter)
        following = filters[(filters.index(self.session.filter) + 1) % len(filters)]
        self.top_bar.select_filter(following)

    def action_toggle_dark_mode(self) -> None:
        dark_mode = self.session.toggle_dark_mode()
        self._apply_theme()
        self.top_bar.set_dark_mode(dark_mode)
        if self.session.last_save_error is not None:
            self.output_panel.report(str(self.session.last_save_error), "error")

"""Top bar with title, filter selector and theme toggle."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Select, Static

from ...state.view import TaskFilter

FILTER_LABELS = {
    TaskFilter.ALL: "All Tasks",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.PENDING: "Pending",
}


class TopBar(Widget):
    """Top bar with filter selector and dark mode button."""

    DEFAULT_CSS = """
    TopBar {
        height: auto;
        dock: top;
        background: $panel;
    }

    TopBar Horizontal {
        height: auto;
        padding: 0 1;
    }

    TopBar #title-status {
        width: 1fr;
        content-align: left middle;
        text-style: bold;
        color: $primary;
        padding: 1 0;
    }

    TopBar #filter-select {
        width: 24;
    }

    TopBar #theme-button {
        min-width: 16;
    }
    """

    def __init__(self, task_filter: TaskFilter = TaskFilter.ALL, dark_mode: bool = False, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.task_filter = task_filter
        self.dark_mode = dark_mode

    def compose(self) -> ComposeResult:
        """Compose the top bar layout."""
        with Horizontal():
            yield Static("Task Manager", id="title-status")
            yield Select(
                [(label, f.value) for f, label in FILTER_LABELS.items()],
                value=self.task_filter.value,
                allow_blank=False,
                id="filter-select",
            )
            yield Button(self._theme_label(), id="theme-button")

    def _theme_label(self) -> str:
        return "🌞 Light Mode" if self.dark_mode else "🌙 Dark Mode"

    def set_dark_mode(self, dark_mode: bool) -> None:
        self.dark_mode = dark_mode
        self.query_one("#theme-button", Button).label = self._theme_label()

    def select_filter(self, task_filter: TaskFilter) -> None:
        """Change the selector; the resulting change event reports it."""
        self.query_one("#filter-select", Select).value = task_filter.value

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "filter-select" or event.value is Select.BLANK:
            return
        task_filter = TaskFilter.coerce(str(event.value))
        event.stop()
        if task_filter is not self.task_filter:
            self.task_filter = task_filter
            self.post_message(self.FilterChanged(task_filter))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "theme-button":
            event.stop()
            self.post_message(self.DarkModeToggled())

    class FilterChanged(Message):
        """Message sent when another filter is chosen."""

        def __init__(self, task_filter: TaskFilter) -> None:
            super().__init__()
            self.task_filter = task_filter

    class DarkModeToggled(Message):
        """Message sent when the theme button is clicked."""

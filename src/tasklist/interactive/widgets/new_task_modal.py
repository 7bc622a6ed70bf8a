"""Modal for creating a new task."""

from __future__ import annotations

from typing import Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

NewTaskResult = Optional[Tuple[str, Optional[str]]]


class NewTaskModal(ModalScreen[NewTaskResult]):
    """Modal dialog returning ``(text, due_date)`` or ``None`` when cancelled."""

    DEFAULT_CSS = """
    NewTaskModal {
        align: center middle;
    }

    NewTaskModal > Vertical {
        width: 70;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    NewTaskModal Label {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    NewTaskModal Input {
        width: 100%;
        margin-bottom: 1;
    }

    NewTaskModal Grid {
        width: 100%;
        height: auto;
        grid-size: 2;
        grid-gutter: 1;
    }

    NewTaskModal Button {
        width: 100%;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        with Vertical():
            yield Label("Add Task")
            yield Input(placeholder="Enter Task", id="task-text-input")
            yield Input(placeholder="Due date (YYYY-MM-DD, optional)", id="task-due-input")
            with Grid():
                yield Button("Cancel", variant="default", id="cancel-button")
                yield Button("Add Task", variant="success", id="create-button")

    def on_mount(self) -> None:
        """Focus the text input when mounted."""
        self.query_one("#task-text-input", Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _submit(self) -> None:
        text_input = self.query_one("#task-text-input", Input)
        if not text_input.value.strip():
            # Don't dismiss if empty
            text_input.focus()
            return
        due = self.query_one("#task-due-input", Input).value.strip()
        self.dismiss((text_input.value, due or None))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "create-button":
            self._submit()

"""Status panel for the outcome of task operations."""

from __future__ import annotations

from typing import Dict, Tuple

from rich.text import Text
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import RichLog

# status -> (prefix, style)
STATUS_STYLES: Dict[str, Tuple[str, str]] = {
    "info": ("", ""),
    "hint": ("", "dim"),
    "done": ("✓ ", "bold green"),
    "warning": ("⚠ ", "bold yellow"),
    "error": ("Not saved: ", "bold red"),
}


class OutputPanel(Widget):
    """Scrolling log of what the last task operations did."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Status"
        self.history: list[Tuple[str, str]] = []

    def compose(self) -> ComposeResult:
        yield RichLog(id="output-log", auto_scroll=True)

    def report(self, message: str, status: str = "info") -> None:
        """Append ``message`` styled for ``status`` (one of ``STATUS_STYLES``)."""
        prefix, style = STATUS_STYLES[status]
        self.history.append((status, message))
        # Text, not markup: task text may contain square brackets.
        self.query_one("#output-log", RichLog).write(Text(prefix + message, style=style))

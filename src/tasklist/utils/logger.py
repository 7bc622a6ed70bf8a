"""Logging setup and the JSONL task event log."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from ..state.tasks import Task

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    level: Union[str, int] = "warning",
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> None:
    """Configure the ``tasklist`` logger with a stderr handler and an optional file handler.

    Pass ``console=False`` while a full-screen UI owns the terminal; records then
    go to ``log_file`` only. Safe to call more than once; previously installed
    handlers are replaced.
    """
    root = logging.getLogger("tasklist")
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(_parse_level(level))
        stream_handler.setFormatter(fmt)
        root.addHandler(stream_handler)
    else:
        # Keeps records away from logging's last-resort stderr handler.
        root.addHandler(logging.NullHandler())

    if log_file:
        path = Path(log_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(path), encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot open log file %s: %s", path, exc)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(fmt)
            root.addHandler(file_handler)


class EventLog:
    """Appends task events to ``tasks.log`` as JSON lines."""

    def __init__(self, logs_dir: Path) -> None:
        self.logs_dir = logs_dir
        self.path = logs_dir / "tasks.log"

    def _write(self, payload: dict) -> None:
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fp:
                fp.write(json.dumps(entry) + "\n")
        except OSError as exc:
            logger.warning("Cannot write task event to %s: %s", self.path, exc)

    def record(self, event: str, task: Task) -> None:
        self._write({"event": event, "task_id": task.id, "text": task.text, "completed": task.completed})

    def read(self) -> list:
        """Return logged events, oldest first."""
        if not self.path.exists():
            return []
        entries = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError:
                continue
        return entries

import json
import logging
from pathlib import Path

import pytest

from tasklist.errors import PersistenceError, TaskIndexError
from tasklist.state.persistence import JsonFileStore, MemoryStore
from tasklist.state.session import DARK_MODE_KEY, TASKS_KEY, TaskSession
from tasklist.state.view import TaskFilter


class FailingStore(MemoryStore):
    """Store whose writes always fail."""

    def _set_raw(self, key: str, serialized: str) -> None:
        raise PersistenceError("quota exceeded")


def test_scenario_sort_toggle_and_filter() -> None:
    session = TaskSession(MemoryStore())
    session.tasks.add_task("Buy milk", "2024-01-05")
    session.tasks.add_task("Pay rent", "2024-01-01")

    assert [t.text for t in session.view()] == ["Pay rent", "Buy milk"]

    pay_rent = session.view()[0]
    session.tasks.toggle(pay_rent.id)
    session.set_filter("pending")

    assert [t.text for t in session.view()] == ["Buy milk"]


def test_toggle_by_view_position_completes_earliest_due_task() -> None:
    session = TaskSession(MemoryStore())
    session.tasks.add_task("Buy milk", "2024-01-05")
    session.tasks.add_task("Pay rent", "2024-01-01")

    task = session.toggle_task_status(0)

    assert task.text == "Pay rent"
    assert task.completed is True
    session.set_filter("pending")
    assert [t.text for t in session.view()] == ["Buy milk"]
    assert session.store.load(TASKS_KEY) == [
        {"text": "Buy milk", "dueDate": "2024-01-05", "completed": False},
        {"text": "Pay rent", "dueDate": "2024-01-01", "completed": True},
    ]


def test_view_positions_follow_the_active_filter() -> None:
    session = TaskSession(MemoryStore())
    session.tasks.add_task("Buy milk", "2024-01-05")
    session.tasks.add_task("Pay rent", "2024-01-01")
    session.tasks.add_task("Call mom")
    session.toggle_task_status(1)  # Pay rent
    session.set_filter("pending")

    deleted = session.delete_task(1)

    assert deleted.text == "Buy milk"
    assert [t.text for t in session.tasks.list_all()] == ["Pay rent", "Call mom"]


def test_view_position_outside_view_raises() -> None:
    session = TaskSession(MemoryStore())
    session.tasks.add_task("Buy milk", "2024-01-05")
    session.tasks.add_task("Pay rent", "2024-01-01")
    session.toggle_task_status(0)
    session.set_filter("completed")

    with pytest.raises(TaskIndexError) as excinfo:
        session.toggle_task_status(1)
    assert excinfo.value.length == 1
    with pytest.raises(IndexError):
        session.delete_task(-1)
    with pytest.raises(TaskIndexError):
        session.reorder(0, 3)
    assert len(session.tasks) == 2
    assert [t.completed for t in session.tasks.list_all()] == [False, True]


def test_reorder_by_view_position() -> None:
    session = TaskSession(MemoryStore())
    for text in ("a", "b", "c"):
        session.tasks.add_task(text, "2024-03-01")
    session.tasks.add_task("early", "2024-01-01")

    # View: early, a, b, c; drop "c" onto "a"
    moved = session.reorder(3, 1)

    assert moved.text == "c"
    assert [t.text for t in session.tasks.list_all()] == ["c", "a", "b", "early"]
    assert [t.text for t in session.view()] == ["early", "c", "a", "b"]
    assert session.reorder(0, None) is None


def test_empty_text_leaves_collection_unchanged() -> None:
    store = MemoryStore()
    session = TaskSession(store)
    session.tasks.add_task("", "2024-01-01")
    assert len(session.tasks) == 0
    assert store.load(TASKS_KEY) is None


def test_every_mutation_is_saved() -> None:
    store = MemoryStore()
    session = TaskSession(store)

    session.tasks.add_task("a", "2024-02-01")
    session.tasks.add_task("b")
    assert store.load(TASKS_KEY) == [
        {"text": "a", "dueDate": "2024-02-01", "completed": False},
        {"text": "b", "dueDate": "", "completed": False},
    ]

    session.tasks.reorder(1, 0)
    session.tasks.toggle_task_status(0)
    assert store.load(TASKS_KEY) == session.tasks.to_list()
    assert store.load(TASKS_KEY)[0] == {"text": "b", "dueDate": "", "completed": True}

    session.tasks.delete_task(0)
    assert [t["text"] for t in store.load(TASKS_KEY)] == ["a"]


def test_hydrates_from_previous_session(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    first = TaskSession.from_path(path)
    first.tasks.add_task("Buy milk", "2024-01-05")
    first.tasks.add_task("Pay rent")
    first.tasks.toggle_task_status(1)
    first.toggle_dark_mode()
    first.set_filter("completed")

    second = TaskSession.from_path(path)

    assert second.tasks.to_list() == first.tasks.to_list()
    assert second.dark_mode is True
    # filter is not persisted
    assert second.filter is TaskFilter.ALL


def test_accepts_null_due_dates_from_store() -> None:
    store = MemoryStore()
    store.save(TASKS_KEY, [{"text": "x", "dueDate": None, "completed": False}])
    session = TaskSession(store)
    assert session.tasks.list_all()[0].due_date is None


def test_bad_stored_state_falls_back_to_defaults() -> None:
    store = MemoryStore()
    store.save(TASKS_KEY, {"not": "a list"})
    store.save(DARK_MODE_KEY, "yes")

    session = TaskSession(store, default_filter="pending")

    assert len(session.tasks) == 0
    assert session.dark_mode is False
    assert session.filter is TaskFilter.PENDING


def test_corrupt_store_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"tasks": "{{{", "darkMode": "true"}), encoding="utf-8")

    session = TaskSession.from_path(path)

    assert len(session.tasks) == 0
    assert session.dark_mode is True


def test_save_failure_keeps_in_memory_state(caplog) -> None:
    session = TaskSession(FailingStore())

    with caplog.at_level(logging.ERROR, logger="tasklist"):
        task = session.tasks.add_task("still here")

    assert task is not None
    assert [t.text for t in session.tasks.list_all()] == ["still here"]
    assert isinstance(session.last_save_error, PersistenceError)
    assert "quota exceeded" in caplog.text

    assert session.toggle_dark_mode() is True
    assert session.dark_mode is True


def test_successful_save_clears_last_error() -> None:
    store = FailingStore()
    session = TaskSession(store)
    session.tasks.add_task("a")
    assert session.last_save_error is not None

    session.store = MemoryStore()
    session.tasks.add_task("b")
    assert session.last_save_error is None
    assert [t["text"] for t in session.store.load(TASKS_KEY)] == ["a", "b"]


def test_events_logged_to_jsonl(tmp_path: Path) -> None:
    session = TaskSession.from_path(tmp_path / "store.json")
    task = session.tasks.add_task("a")
    session.tasks.toggle(task.id)
    session.tasks.delete(task.id)

    events = session.event_log.read()
    assert [e["event"] for e in events] == ["add", "toggle", "delete"]
    assert all(e["task_id"] == task.id for e in events)
    assert (tmp_path / "logs" / "tasks.log").exists()

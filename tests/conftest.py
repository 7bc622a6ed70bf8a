import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _reset_tasklist_logging():
    """Drop handlers installed by setup_logging so they don't outlive a test's streams."""
    yield
    tasklist_logger = logging.getLogger("tasklist")
    for handler in list(tasklist_logger.handlers):
        tasklist_logger.removeHandler(handler)
        handler.close()
    tasklist_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def isolated_env(tmp_path: Path, monkeypatch) -> Path:
    """Point config/data dirs at tmp_path and clear TASKLIST_* overrides."""
    import os

    for key in [k for k in os.environ if k.startswith("TASKLIST_")]:
        monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    return tmp_path

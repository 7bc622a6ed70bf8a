import sys
from pathlib import Path

from tasklist.config import Config

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


def test_defaults_and_first_run_file(isolated_env: Path) -> None:
    config = Config()

    assert config.get("view.default_filter") == "all"
    assert config.get("general.log_level") == "warning"
    assert config.storage_path == isolated_env / "data" / "tasklist" / "store.json"
    assert (isolated_env / "config" / "tasklist" / "config.toml").exists()

    # The generated file parses back to the same values
    reloaded = Config()
    assert reloaded.config == config.config


def test_project_config_overrides_global(isolated_env: Path) -> None:
    project = isolated_env / ".tasklist"
    project.mkdir()
    (project / "config.toml").write_text('[view]\ndefault_filter = "pending"\n', encoding="utf-8")

    config = Config()

    assert config.get("view.default_filter") == "pending"
    assert config.get("general.log_level") == "warning"


def test_env_overrides(isolated_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_STORAGE_PATH", str(isolated_env / "elsewhere.json"))
    monkeypatch.setenv("TASKLIST_GENERAL_LOG_LEVEL", "debug")

    config = Config()

    assert config.storage_path == isolated_env / "elsewhere.json"
    assert config.get("general.log_level") == "debug"


def test_get_missing_key_returns_default(isolated_env: Path) -> None:
    config = Config(create_default=False)
    assert config.get("nope.nothing", 5) == 5
    assert config.get("view.default_filter.deeper", "x") == "x"
    assert not (isolated_env / "config" / "tasklist" / "config.toml").exists()


def test_first_run_file_survives_quotes_in_paths(tmp_path: Path, monkeypatch, isolated_env: Path) -> None:
    home = tmp_path / "O'Brien \"tasks\" \\ dir"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))

    config = Config()
    written = home / "config" / "tasklist" / "config.toml"
    parsed = tomllib.loads(written.read_text(encoding="utf-8"))

    assert parsed["storage"]["path"] == str(home / "data" / "tasklist" / "store.json")
    assert parsed["general"]["log_file"] == str(home / "config" / "tasklist" / "tasklist.log")
    assert Config().storage_path == config.storage_path == home / "data" / "tasklist" / "store.json"

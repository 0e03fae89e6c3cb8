"""Tests for todoapp.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todoapp.config import (
    CONFIG_FILE,
    DATA_FILE_ENV,
    DEFAULT_DATA_FILE,
    TODOAPP_DIR,
    TodoConfig,
)


class TestTodoConfig:
    """Tests for TodoConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = TodoConfig()
        assert config.data_file == "To-Do-List.json"
        assert config.data_file == DEFAULT_DATA_FILE
        assert config.log_level == "WARNING"
        assert config.log_file is None
        assert config.data_path == Path("To-Do-List.json")

    def test_load_missing_file(self, temp_project: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = TodoConfig.load(temp_project / ".todoapp" / "config.json")
        assert config.data_file == DEFAULT_DATA_FILE

    def test_load_default_path(self, temp_project: Path) -> None:
        """Test loading from the default .todoapp/config.json."""
        CONFIG_FILE.parent.mkdir()
        CONFIG_FILE.write_text(json.dumps({"data_file": "mine.json", "log_level": "DEBUG"}))

        config = TodoConfig.load()
        assert config.data_file == "mine.json"
        assert config.log_level == "DEBUG"

    def test_env_overrides_file(self, temp_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test TODOAPP_FILE wins over the config file."""
        config_path = temp_project / "config.json"
        config_path.write_text(json.dumps({"data_file": "mine.json"}))
        monkeypatch.setenv(DATA_FILE_ENV, "from-env.json")

        config = TodoConfig.load(config_path)
        assert config.data_file == "from-env.json"

    def test_env_overrides_defaults(self, temp_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test TODOAPP_FILE applies without a config file."""
        monkeypatch.setenv(DATA_FILE_ENV, "from-env.json")
        config = TodoConfig.load(temp_project / "missing.json")
        assert config.data_path == Path("from-env.json")

    def test_save_creates_directory(self, temp_project: Path) -> None:
        """Test save creates parent directory if needed."""
        config = TodoConfig(data_file="saved.json")
        config.save()

        assert (temp_project / TODOAPP_DIR / "config.json").exists()
        data = json.loads(CONFIG_FILE.read_text())
        assert data == {"data_file": "saved.json", "log_level": "WARNING"}

    def test_save_load_roundtrip(self, temp_project: Path) -> None:
        """Test a saved config loads back the same."""
        config_path = temp_project / "cfg" / "config.json"
        original = TodoConfig(data_file="x.json", log_level="INFO", log_file="todo.log")
        original.save(config_path)

        assert TodoConfig.load(config_path) == original

    def test_invalid_config_rejected(self, temp_project: Path) -> None:
        """Test that wrongly typed values are rejected."""
        config_path = temp_project / "config.json"
        config_path.write_text(json.dumps({"data_file": ["not", "a", "string"]}))
        with pytest.raises(Exception):
            TodoConfig.load(config_path)

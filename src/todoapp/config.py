"""Configuration model for todoapp."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel

# Default config directory
TODOAPP_DIR = Path(".todoapp")
CONFIG_FILE = TODOAPP_DIR / "config.json"
DEFAULT_DATA_FILE = "To-Do-List.json"

# Environment variable that overrides the configured data file
DATA_FILE_ENV = "TODOAPP_FILE"


class TodoConfig(BaseModel):
    """Main configuration for todoapp."""

    data_file: str = DEFAULT_DATA_FILE
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> TodoConfig:
        """Load configuration from file or return defaults.

        ``TODOAPP_FILE`` in the environment wins over the file's ``data_file``.
        """
        if path is None:
            path = CONFIG_FILE

        if path.exists():
            with open(path) as f:
                data = json.load(f)
            config = cls.model_validate(data)
        else:
            config = cls()

        env_file = os.environ.get(DATA_FILE_ENV)
        if env_file:
            config.data_file = env_file

        return config

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)

    @property
    def data_path(self) -> Path:
        """The task file as a path."""
        return Path(self.data_file)

"""Shared fixtures for todoapp tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from todoapp.config import DATA_FILE_ENV
from todoapp.logging_setup import LOGGER_NAME


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep the user's environment and logging setup out of tests."""
    monkeypatch.delenv(DATA_FILE_ENV, raising=False)
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Path to a task file that does not exist yet."""
    return tmp_path / "To-Do-List.json"


@pytest.fixture
def sample_tasks_data() -> list[dict]:
    """Sample task records as written by the app."""
    return [
        {
            "id": 1,
            "title": "Buy milk",
            "isDone": True,
            "createdAt": "2025-01-10T10:00:00",
            "completedAt": "2025-01-10T12:30:00",
        },
        {
            "id": 2,
            "title": "Walk dog",
            "isDone": False,
            "createdAt": "2025-01-10T10:05:00",
            "completedAt": None,
        },
        {
            "id": 5,
            "title": "Call mum",
            "isDone": False,
            "createdAt": "2025-01-11T09:00:00",
            "completedAt": None,
        },
    ]


@pytest.fixture
def sample_tasks_file(tasks_file: Path, sample_tasks_data: list[dict]) -> Path:
    """Write the sample tasks to disk and return the path."""
    tasks_file.write_text(json.dumps(sample_tasks_data, indent=2))
    return tasks_file

"""Exceptions raised by the task store."""

from __future__ import annotations

from pathlib import Path


class TaskStoreError(Exception):
    """Base class for task store errors."""


class FormatError(TaskStoreError, ValueError):
    """The backing file has content that is not a valid task list."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class TitleValidationError(TaskStoreError, ValueError):
    """A task title was empty or whitespace only."""

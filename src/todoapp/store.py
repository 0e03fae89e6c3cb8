"""File-backed task store.

The store keeps tasks in memory in insertion order and mirrors them to a
single JSON file. Every mutation rewrites the whole file before returning,
so memory and disk only disagree after a failed save.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from todoapp import jsonc
from todoapp.errors import FormatError, TitleValidationError
from todoapp.models import Task

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[Task])


class TaskStore:
    """Ordered task list persisted to one file.

    Args:
        path: The backing file. Used for both ``load`` and ``save``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.tasks: list[Task] = []

    def load(self) -> None:
        """Replace the in-memory tasks with the file's content.

        A missing or blank file leaves the current tasks as they are. A
        leading UTF-8 byte order mark is ignored.

        Raises:
            FormatError: If the file has content that is not a valid task list.
            OSError: If the file exists but cannot be read.
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return

        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning("Task file %s is not UTF-8: %s", self.path, e)
            raise FormatError(self.path, f"not valid UTF-8: {e}") from e

        if not text.strip():
            logger.debug("Task file %s is empty", self.path)
            return

        self.tasks = self._parse(text)
        logger.debug("Loaded %d tasks from %s", len(self.tasks), self.path)

    def _parse(self, text: str) -> list[Task]:
        try:
            data = jsonc.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Malformed task file %s: %s", self.path, e)
            raise FormatError(self.path, f"invalid JSON: {e}") from e

        # A bare null is treated as an empty list
        if data is None:
            data = []

        if not isinstance(data, list):
            raise FormatError(self.path, "expected a list of tasks")

        try:
            tasks = _TASK_LIST.validate_python(data)
        except ValidationError as e:
            logger.warning("Invalid task records in %s", self.path)
            raise FormatError(self.path, f"invalid task record: {e}") from e

        ids = [task.id for task in tasks]
        if len(ids) != len(set(ids)):
            raise FormatError(self.path, "duplicate task ids")

        return tasks

    def save(self) -> None:
        """Write all tasks to the backing file.

        The content is written to a temporary file next to the target and
        then moved into place, so readers never see a half-written file.

        Raises:
            OSError: If the file cannot be written.
        """
        data = _TASK_LIST.dump_python(self.tasks, mode="json", by_alias=True)
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise

        logger.debug("Saved %d tasks to %s", len(self.tasks), self.path)

    def next_id(self) -> int:
        """Return the id the next added task will get.

        Ids are one more than the current maximum, so the id of a deleted
        highest task is handed out again.
        """
        if not self.tasks:
            return 1
        return max(task.id for task in self.tasks) + 1

    def get(self, task_id: int) -> Task | None:
        """Get a task by id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, title: str) -> Task:
        """Create a task, persist the list and return the new task.

        Raises:
            TitleValidationError: If the title is empty after trimming.
            OSError: If the list cannot be saved.
        """
        title = title.strip()
        if not title:
            raise TitleValidationError("Title cannot be empty.")

        task = Task(id=self.next_id(), title=title)
        self.tasks.append(task)
        self.save()
        logger.info("Added task #%d: %s", task.id, task.title)
        return task

    def toggle(self, task_id: int) -> bool:
        """Flip a task between done and not done.

        Returns:
            True if the task existed and was toggled, False otherwise.
        """
        task = self.get(task_id)
        if task is None:
            logger.debug("Toggle: no task with id %d", task_id)
            return False

        task.toggle()
        self.save()
        logger.info("Task #%d is now %s", task.id, "done" if task.is_done else "open")
        return True

    def delete(self, task_id: int) -> bool:
        """Remove every task with the given id.

        Returns:
            True if anything was removed, False otherwise.
        """
        remaining = [task for task in self.tasks if task.id != task_id]
        if len(remaining) == len(self.tasks):
            logger.debug("Delete: no task with id %d", task_id)
            return False

        self.tasks = remaining
        self.save()
        logger.info("Deleted task #%d", task_id)
        return True

"""Task model for todoapp."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Task(BaseModel):
    """A single to-do entry.

    Serialised with camelCase keys (``isDone``, ``createdAt``, ``completedAt``)
    so files written by earlier versions of the app load unchanged. Snake case
    names are accepted on input as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(gt=0)
    title: str
    is_done: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @model_validator(mode="after")
    def completion_matches_flag(self) -> Task:
        if self.is_done != (self.completed_at is not None):
            raise ValueError("completedAt must be set if and only if isDone is true")
        return self

    def mark_done(self, when: datetime | None = None) -> None:
        """Mark the task as done, stamping the completion time."""
        self.is_done = True
        self.completed_at = when or datetime.now()

    def mark_not_done(self) -> None:
        """Mark the task as not done and clear the completion time."""
        self.is_done = False
        self.completed_at = None

    def toggle(self) -> None:
        """Flip the done flag, keeping ``completed_at`` consistent."""
        if self.is_done:
            self.mark_not_done()
        else:
            self.mark_done()

    def __str__(self) -> str:
        check = "[x]" if self.is_done else "[ ]"
        return f"{self.id:>3} {check} {self.title}"


def display_order(tasks: Iterable[Task]) -> list[Task]:
    """Return tasks with open ones first, each group ordered by id."""
    return sorted(tasks, key=lambda t: (t.is_done, t.id))

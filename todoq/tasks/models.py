"""
Task record model for the todoq list.

A task is the unit of the to-do list: a numeric id, non-empty text, and a
completion flag. Records are persisted as plain JSON objects with exactly
these three keys.
"""

from __future__ import annotations

import random
import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def mint_task_id() -> float:
    """Creation time in milliseconds plus a random fraction as tiebreaker."""
    return time.time() * 1000 + random.random()


class Task(BaseModel):
    """A single to-do item."""

    model_config = ConfigDict(frozen=True)

    id: float = Field(default_factory=mint_task_id, description="Unique numeric id")
    text: str = Field(..., description="Task text, stripped, never empty")
    completed: bool = Field(default=False)

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("text cannot be empty")
        return v.strip()

    def matches_text(self, text: str) -> bool:
        """Case-insensitive comparison used for duplicate suppression."""
        return self.text.lower() == text.strip().lower()

    def toggled(self) -> Task:
        """Return a copy with completed flipped."""
        return self.model_copy(update={"completed": not self.completed})

    def to_record(self) -> dict[str, Any]:
        """Convert to the JSON object stored in the task slot."""
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_record(cls, record: Any) -> Task | None:
        """
        Build a Task from a stored record, or None if the record is malformed.

        A record must be an object with a numeric id, a string text and a
        boolean completed flag. Nothing is coerced: "true" is not a boolean.
        """
        if not isinstance(record, dict):
            return None

        task_id = record.get("id")
        text = record.get("text")
        completed = record.get("completed")

        if isinstance(task_id, bool) or not isinstance(task_id, (int, float)):
            return None
        if not isinstance(text, str) or not isinstance(completed, bool):
            return None

        try:
            return cls(id=task_id, text=text, completed=completed)
        except ValueError:
            return None

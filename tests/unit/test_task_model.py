"""Unit tests for the Task record model"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from todoq.tasks.models import Task, mint_task_id


def test_text_is_stripped():
    assert Task(text="  hello  ").text == "hello"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_rejected(text):
    with pytest.raises(ValidationError):
        Task(text=text)


def test_minted_ids_are_millisecond_timestamps():
    a = mint_task_id()
    b = mint_task_id()
    assert a > 1_600_000_000_000
    assert a != b


def test_toggled_returns_new_instance():
    task = Task(id=1, text="a")
    flipped = task.toggled()
    assert flipped.completed is True
    assert task.completed is False
    assert flipped.id == task.id


def test_record_round_trip_shape():
    record = Task(id=7, text="a", completed=True).to_record()
    assert record == {"id": 7.0, "text": "a", "completed": True}
    assert Task.from_record(record) == Task(id=7, text="a", completed=True)


@pytest.mark.parametrize(
    "record",
    [
        {"text": "a", "completed": False},
        {"id": None, "text": "a", "completed": False},
        {"id": True, "text": "a", "completed": False},
        {"id": "1", "text": "a", "completed": False},
        {"id": 1, "text": 5, "completed": False},
        {"id": 1, "text": "a", "completed": "false"},
        {"id": 1, "text": "   ", "completed": False},
        ["id", 1],
    ],
)
def test_from_record_rejects_malformed(record):
    assert Task.from_record(record) is None


def test_matches_text_is_case_insensitive():
    assert Task(text="Buy Milk").matches_text("  buy milk ")

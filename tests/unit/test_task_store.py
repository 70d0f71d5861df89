"""Unit tests for TaskStore load/save and self-healing of stored data"""

from __future__ import annotations

import json

from todoq.observability.telemetry import get_counter
from todoq.tasks.models import Task
from todoq.tasks.store import TaskStore


def _stored(storage):
    raw = storage.get_item("tasks")
    return None if raw is None else json.loads(raw)


def test_load_with_nothing_stored(store):
    assert store.load() == []
    assert len(store) == 0


def test_save_then_reload(storage, store):
    store.replace([Task(id=1.5, text="Buy milk"), Task(id=2.5, text="Call Bob", completed=True)])
    store.save()

    reloaded = TaskStore(storage)
    tasks = reloaded.load()

    assert [(t.id, t.text, t.completed) for t in tasks] == [
        (1.5, "Buy milk", False),
        (2.5, "Call Bob", True),
    ]


def test_save_overwrites_previous_state(storage, store):
    store.replace([Task(id=1, text="a"), Task(id=2, text="b")])
    store.save()
    store.replace([Task(id=3, text="c")])
    store.save()

    assert _stored(storage) == [{"id": 3.0, "text": "c", "completed": False}]


def test_corrupted_payload_resets_and_clears_slot(storage, store):
    """Truncated JSON must not raise; the slot is dropped"""
    storage.set_item("tasks", '[{"id": 1, "text": "Buy mi')

    assert store.load() == []
    assert storage.get_item("tasks") is None
    assert get_counter("tasks.store.corrupted") == 1


def test_invalid_records_filtered_and_repersisted(storage, store):
    storage.set_item(
        "tasks",
        json.dumps(
            [
                {"id": 1, "text": "keep me", "completed": False},
                {"text": "no id", "completed": False},
                {"id": 2, "completed": True},
                {"id": 3, "text": "bad flag", "completed": "yes"},
                "not an object",
                None,
            ]
        ),
    )

    tasks = store.load()

    assert [t.text for t in tasks] == ["keep me"]
    assert _stored(storage) == [{"id": 1.0, "text": "keep me", "completed": False}]


def test_clean_payload_is_not_rewritten(storage, store, monkeypatch):
    storage.set_item("tasks", json.dumps([{"id": 1, "text": "a", "completed": False}]))

    writes = []
    monkeypatch.setattr(storage, "set_item", lambda k, v: writes.append((k, v)))
    store.load()

    assert writes == []


def test_non_array_payload_treated_as_empty(storage, store):
    storage.set_item("tasks", '{"id": 1}')

    assert store.load() == []
    assert _stored(storage) == []


def test_tasks_property_returns_copy(store):
    store.replace([Task(id=1, text="a")])
    store.tasks.append(Task(id=2, text="b"))
    assert len(store) == 1

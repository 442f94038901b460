# tests/test_schema.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from tasktrack.schema import (
    Task,
    TaskTrackerConfig,
    TaskUpdate,
    format_due_date,
    parse_due_date,
)

DUE = datetime(2024, 12, 31)


def _task() -> Task:
    return Task(id="1", title="Test Task", description="Test Description", due_date=DUE)


def test_task_defaults_completed_false_and_optional_fields_absent() -> None:
    task = Task(id="2", title="Minimal Task")
    assert task.id == "2"
    assert task.title == "Minimal Task"
    assert task.description is None
    assert task.due_date is None
    assert task.completed is False


def test_task_accepts_due_date_alias() -> None:
    task = Task(id="3", title="x", dueDate="2024-12-31T00:00:00")
    assert task.due_date == DUE


def test_toggle_completion_flips_both_ways() -> None:
    task = _task()
    task.toggle_completion()
    assert task.completed is True
    task.toggle_completion()
    assert task.completed is False


def test_merge_details_applies_only_mentioned_fields() -> None:
    task = _task()
    task.merge_details(TaskUpdate(title="Updated Title"))
    assert task.title == "Updated Title"
    assert task.description == "Test Description"
    assert task.due_date == DUE

    new_due = datetime(2025, 1, 15)
    task.merge_details(TaskUpdate(due_date=new_due))
    assert task.title == "Updated Title"
    assert task.due_date == new_due


def test_merge_details_explicit_none_clears_description_and_due_date() -> None:
    task = _task()
    task.merge_details(TaskUpdate(description=None, due_date=None))
    assert task.description is None
    assert task.due_date is None
    assert task.title == "Test Task"


def test_merge_details_keeps_empty_description_distinct_from_absent() -> None:
    task = _task()
    task.merge_details(TaskUpdate(description=""))
    assert task.description == ""


def test_merge_details_ignores_none_title_and_never_touches_id_or_completed() -> None:
    task = _task()
    task.toggle_completion()
    task.merge_details(TaskUpdate(title=None, completed=False))
    assert task.title == "Test Task"
    assert task.id == "1"
    assert task.completed is True


def test_task_update_tracks_presence() -> None:
    update = TaskUpdate(description=None)
    assert update.is_set("description")
    assert not update.is_set("title")
    assert not TaskUpdate().is_set("description")


def test_task_update_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        TaskUpdate(priority="high")


def test_to_record_omits_absent_fields() -> None:
    assert Task(id="1", title="T").to_record() == {"id": "1", "title": "T", "completed": False}
    record = _task().to_record()
    assert record["dueDate"] == "2024-12-31T00:00:00"
    assert record["description"] == "Test Description"


def test_parse_due_date_valid_and_blank() -> None:
    assert parse_due_date("2024-12-31") == DUE
    assert parse_due_date("  ") is None


@pytest.mark.parametrize("text", ["2023-02-30", "2023-13-01", "31/12/2024", "tomorrow"])
def test_parse_due_date_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        parse_due_date(text)


def test_format_due_date() -> None:
    assert format_due_date(None) == "N/A"
    assert format_due_date(datetime(2024, 3, 5, 14, 30)) == "2024-03-05"


def test_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TASKTRACK_DATA_FILE", raising=False)
    assert TaskTrackerConfig.from_env().data_file == Path("tasks.json")

    monkeypatch.setenv("TASKTRACK_DATA_FILE", str(tmp_path / "env.json"))
    assert TaskTrackerConfig.from_env().data_file == tmp_path / "env.json"

    override = TaskTrackerConfig.from_env(data_file=tmp_path / "cli.json", indent=None)
    assert override.data_file == tmp_path / "cli.json"
    assert override.indent == 2

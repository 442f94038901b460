"""
TASKTRACK - Task Schema Definition
==================================
Task records, partial updates and tracker configuration.

A record's optional fields have three states at the update layer:
not mentioned, set to a value, or explicitly cleared. ``TaskUpdate``
keeps that distinction through pydantic's ``model_fields_set``.
"""

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_DATA_FILE = "TASKTRACK_DATA_FILE"
DEFAULT_DATA_FILE = "tasks.json"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Task(BaseModel):
    """Individual task record"""
    model_config = ConfigDict(populate_by_name=True)

    id: str                         # Unique within one manager, never changed
    title: str                      # Non-empty is enforced by the front-end
    description: Optional[str] = None   # "" is kept distinct from None
    completed: bool = False
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")

    def toggle_completion(self) -> None:
        """Flip the completion flag"""
        self.completed = not self.completed

    def merge_details(self, update: "TaskUpdate") -> None:
        """
        Apply the detail fields explicitly mentioned in ``update``.

        Unmentioned fields are left alone. A mentioned ``None`` clears
        description or due date; a ``None`` title is ignored since a task
        always keeps a title. ``id`` and ``completed`` are never touched.
        """
        if update.is_set("title") and update.title is not None:
            self.title = update.title
        if update.is_set("description"):
            self.description = update.description
        if update.is_set("due_date"):
            self.due_date = update.due_date

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted layout (absent fields omitted)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskUpdate(BaseModel):
    """Partial update over a task's mutable fields"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    completed: Optional[bool] = None

    def is_set(self, name: str) -> bool:
        """True if ``name`` was explicitly given, even as None"""
        return name in self.model_fields_set


class TaskTrackerConfig(BaseModel):
    """Where and how the task collection is persisted"""
    data_file: Path = Path(DEFAULT_DATA_FILE)
    indent: int = Field(default=2, ge=0)    # Pretty-print width of the JSON blob
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, **overrides: Any) -> "TaskTrackerConfig":
        """Build a config from ``TASKTRACK_DATA_FILE``; non-None overrides win"""
        values: Dict[str, Any] = {}
        raw = os.getenv(ENV_DATA_FILE)
        if raw is not None and raw.strip():
            values["data_file"] = Path(raw).expanduser()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def parse_due_date(text: str) -> Optional[datetime]:
    """
    Parse a user-entered due date.

    Blank input means "no due date" and returns None. Anything else must be
    a real calendar date written as YYYY-MM-DD, otherwise ValueError is
    raised with a message fit to show the user.
    """
    text = text.strip()
    if not text:
        return None
    if not _DATE_RE.match(text):
        raise ValueError("Invalid format. Please use YYYY-MM-DD or leave blank.")
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValueError(
            f"Invalid date ({text}). Please enter a valid calendar date or leave blank."
        ) from None


def format_due_date(value: Optional[datetime]) -> str:
    """Render a due date for display (date part only)"""
    if value is None:
        return "N/A"
    return value.date().isoformat()

"""
TASKTRACK - Local Task Tracker
==============================

Create, list, filter, update and delete tasks, persisted to a local JSON
file between runs.

Usage:
    from tasktrack import TaskManager, TaskTrackerConfig

    manager = TaskManager(TaskTrackerConfig(data_file="tasks.json"))
    task = manager.add_task("Write report", description="Q3 numbers")

    manager.update_task(task.id, completed=True)
    manager.update_task(task.id, description=None)   # clear the description
    pending = manager.get_tasks_by_completion(False)
"""

from .schema import (
    Task,
    TaskUpdate,
    TaskTrackerConfig,
    parse_due_date,
    format_due_date
)

from .storage import BlobStore, FileBlobStore
from .manager import TaskManager

__version__ = "1.0.0"
__all__ = [
    "TaskManager",
    "Task",
    "TaskUpdate",
    "TaskTrackerConfig",
    "BlobStore",
    "FileBlobStore",
    "parse_due_date",
    "format_due_date"
]

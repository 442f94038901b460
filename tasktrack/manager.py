"""
TASKTRACK - Task Manager
========================
Owns the in-memory task collection: id assignment, partial updates,
queries, and full-collection persistence through a BlobStore.

Nothing in here is fatal. A missing, blank or malformed data file leaves
an empty collection; a failed write is logged and the in-memory change
stands.
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
import logging

from pydantic import TypeAdapter, ValidationError

from .schema import Task, TaskTrackerConfig, TaskUpdate, format_due_date
from .storage import BlobStore, FileBlobStore

logger = logging.getLogger("tasktrack")

_DUE_DATE = TypeAdapter(datetime)


def _numeric_id(task_id: str) -> int:
    """Integer value of an id, 0 for non-numeric ids"""
    try:
        return int(task_id)
    except ValueError:
        return 0


def _next_after(task_ids: Iterable[str]) -> int:
    """Next free counter value after ``task_ids`` (never below 1)"""
    return max(max((_numeric_id(i) for i in task_ids), default=0) + 1, 1)


class TaskManager:
    """
    Task Collection Manager

    Storage: a single JSON array (see TaskTrackerConfig.data_file), always
    rewritten in full after a change.

    Key features:
    - Monotonic ids, never reused after deletion
    - Tri-state partial updates that only write when something changed
    - Tolerant loading of hand-edited or corrupted data files
    """

    def __init__(
        self,
        config: Optional[TaskTrackerConfig] = None,
        store: Optional[BlobStore] = None
    ):
        self.config = config or TaskTrackerConfig()
        self.store = store or FileBlobStore(self.config.data_file, encoding=self.config.encoding)
        self._tasks: List[Task] = []
        self._next_id: int = 1
        self._load()

    @property
    def next_id(self) -> int:
        """Numeric value of the id the next add_task call will mint"""
        return self._next_id

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def _load(self) -> None:
        """Load the collection from the store, resetting on any failure"""
        self._tasks = []
        self._next_id = 1
        try:
            if not self.store.exists():
                logger.info(f"Data file {self.store} not found. Initializing with no tasks.")
                return
            content = self.store.read_text()
            if not content.strip():
                logger.info(f"Data file {self.store} is empty. Initializing with no tasks.")
                return
            raw_tasks = json.loads(content)
            if not isinstance(raw_tasks, list):
                raise ValueError(f"expected a JSON array, got {type(raw_tasks).__name__}")
            tasks = self._rebuild_tasks(raw_tasks)
        except (OSError, ValueError, RecursionError) as e:
            logger.error(f"❌ Error loading tasks from {self.store}: {e}")
            self._tasks = []
            self._next_id = 1
            return

        self._tasks = tasks
        self._next_id = _next_after(task.id for task in tasks)
        if tasks:
            logger.info(f"📂 Loaded {len(tasks)} tasks from {self.store}. Next ID: {self._next_id}")
        else:
            logger.info(f"Data file {self.store} holds no tasks. Initializing with no tasks.")

    def _rebuild_tasks(self, raw_tasks: List[Any]) -> List[Task]:
        """
        Rebuild records from decoded JSON.

        Stored ids are kept verbatim. Entries without one get a fresh id
        numbered after every stored numeric id, so they never collide.
        """
        for raw in raw_tasks:
            if not isinstance(raw, dict):
                raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

        stored_ids = [self._stored_id(raw) for raw in raw_tasks]
        counter = _next_after(i for i in stored_ids if i is not None)

        tasks = []
        for raw, task_id in zip(raw_tasks, stored_ids):
            if task_id is None:
                task_id = str(counter)
                counter += 1
            tasks.append(self._rebuild_task(task_id, raw))
        return tasks

    @staticmethod
    def _stored_id(raw: Dict[str, Any]) -> Optional[str]:
        raw_id = raw.get("id")
        if raw_id is None or raw_id == "":
            return None
        return str(raw_id)

    def _rebuild_task(self, task_id: str, raw: Dict[str, Any]) -> Task:
        due_date = None
        raw_due = raw.get("dueDate")
        if raw_due is not None and raw_due != "":
            try:
                due_date = _DUE_DATE.validate_python(raw_due)
            except ValidationError:
                logger.warning(
                    f"⚠️ Invalid date format for task ID {task_id}: {raw_due!r}. Due date not set."
                )

        title = raw.get("title")
        description = raw.get("description")
        return Task(
            id=task_id,
            title="" if title is None else str(title),
            description=None if description is None else str(description),
            completed=raw.get("completed") is True,
            due_date=due_date
        )

    def _save(self) -> None:
        """Write the full collection to the store; failures are logged only"""
        records = [task.to_record() for task in self._tasks]
        text = json.dumps(records, indent=self.config.indent, ensure_ascii=False)
        try:
            self.store.write_text(text)
        except (OSError, ValueError) as e:
            logger.error(f"❌ Error saving tasks to {self.store}: {e}")
            return
        logger.debug(f"💾 Saved {len(records)} tasks to {self.store}")

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def add_task(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None
    ) -> Task:
        """Create a task with the next id, append it and persist"""
        task_id = str(self._next_id)
        self._next_id += 1

        task = Task(id=task_id, title=title, description=description, due_date=due_date)
        self._tasks.append(task)
        self._save()

        logger.info(f"➕ Added task: {task.title} ({task.id})")
        return task

    def get_all_tasks(self) -> List[Task]:
        """All tasks in insertion order (a new list on every call)"""
        return list(self._tasks)

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        """Get task by ID"""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def update_task(
        self,
        task_id: str,
        changes: Optional[TaskUpdate] = None,
        **fields: Any
    ) -> Optional[Task]:
        """
        Apply a partial update to a task.

        Either pass a TaskUpdate or the fields as keywords::

            manager.update_task("3", completed=True)
            manager.update_task("3", description=None)   # clears it

        Only fields that are mentioned and differ from the current value
        are applied, and the collection is saved once if any did. Returns
        the task, or None if no task has ``task_id``.
        """
        if changes is None:
            changes = TaskUpdate(**fields)
        elif fields:
            raise TypeError("update_task() takes a TaskUpdate or keyword fields, not both")

        task = self.get_task_by_id(task_id)
        if not task:
            logger.debug(f"Update skipped, task not found: {task_id}")
            return None

        updated = False
        if changes.is_set("completed") and changes.completed is not None \
                and changes.completed != task.completed:
            task.toggle_completion()
            updated = True

        details: Dict[str, Any] = {}
        if changes.is_set("title") and changes.title is not None and changes.title != task.title:
            details["title"] = changes.title
        if changes.is_set("description") and changes.description != task.description:
            details["description"] = changes.description
        if changes.is_set("due_date") and changes.due_date != task.due_date:
            details["due_date"] = changes.due_date

        if details:
            task.merge_details(TaskUpdate(**details))
            updated = True

        if updated:
            self._save()
            logger.info(f"✏️ Updated task: {task.title} ({task.id})")
        return task

    def delete_task(self, task_id: str) -> bool:
        """Remove the first task with ``task_id``; True if one was removed"""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                self._save()
                logger.info(f"🗑️ Deleted task: {task.title} ({task.id})")
                return True
        return False

    def get_tasks_by_completion(self, completed: bool) -> List[Task]:
        """Tasks whose completed flag equals ``completed``, in order"""
        return [task for task in self._tasks if task.completed == completed]

    # ========================================
    # REPORTING
    # ========================================

    def get_summary(self) -> Dict[str, int]:
        total = len(self._tasks)
        completed = len(self.get_tasks_by_completion(True))
        return {
            "total": total,
            "completed": completed,
            "pending": total - completed,
            "progress_pct": int((completed / total) * 100) if total else 0
        }

    def get_status_report(self) -> str:
        """Generate human-readable status report"""
        summary = self.get_summary()
        pct = summary["progress_pct"]

        lines = [
            f"📋 Tasks ({self.store})",
            f"Progress: {'█' * (pct // 10)}{'░' * (10 - pct // 10)} {pct}%",
            f"Completed: {summary['completed']} | Pending: {summary['pending']}",
            ""
        ]

        if not self._tasks:
            lines.append("  No tasks found.")
            return "\n".join(lines)

        lines.append("Tasks:")
        for task in self._tasks:
            icon = "✅" if task.completed else "⬜"
            due = f" (due {format_due_date(task.due_date)})" if task.due_date else ""
            lines.append(f"  {icon} [{task.id}] {task.title}{due}")

        return "\n".join(lines)

#!/usr/bin/env python3
"""
TASKTRACK - CLI Interface
=========================
Command-line tool for managing a local task list.

Usage:
    tasktrack add "Write report" -d "Quarterly numbers" --due 2026-11-01
    tasktrack list --pending
    tasktrack complete 3
    tasktrack update 3 --clear-due
    tasktrack delete 3
    tasktrack status
    tasktrack              (interactive menu)

All user input is validated here before it reaches the TaskManager.
"""

import argparse
import json
import logging
from typing import Callable, List, Optional

from .manager import TaskManager
from .schema import Task, TaskTrackerConfig, TaskUpdate, format_due_date, parse_due_date

Ask = Callable[[str], str]


def _print_tasks(tasks: List[Task], message: str = "Tasks:") -> None:
    if not tasks:
        print("No tasks found.")
        return
    print(message)
    for task in tasks:
        desc = f', Desc: "{task.description}"' if task.description else ""
        print(
            f'  ID: {task.id}, Title: "{task.title}", '
            f'Completed: {"Yes" if task.completed else "No"}, '
            f"Due: {format_due_date(task.due_date)}{desc}"
        )


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasktrack",
        description="TASKTRACK - Local Task Tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tasktrack add "Buy milk" --due 2026-11-01   Add a task with a due date
  tasktrack list --completed                   Show completed tasks
  tasktrack show 2 --json                      Show one task as JSON
  tasktrack complete 2                         Mark task 2 as completed
  tasktrack update 2 --clear-description       Remove task 2's description
  tasktrack delete 2                           Delete task 2
  tasktrack status                             Progress report
  tasktrack menu                               Interactive menu (default)
        """
    )
    parser.add_argument("--file", help="Data file (default: $TASKTRACK_DATA_FILE or tasks.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("title", help="Task title")
    add_parser.add_argument("-d", "--description", help="Task description")
    add_parser.add_argument("--due", help="Due date (YYYY-MM-DD)")

    # LIST command
    list_parser = subparsers.add_parser("list", help="List tasks")
    which = list_parser.add_mutually_exclusive_group()
    which.add_argument("--completed", action="store_true", help="Only completed tasks")
    which.add_argument("--pending", action="store_true", help="Only pending tasks")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # SHOW command
    show_parser = subparsers.add_parser("show", help="Show one task")
    show_parser.add_argument("task_id", help="Task ID")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # COMPLETE / REOPEN commands
    complete_parser = subparsers.add_parser("complete", help="Mark task as completed")
    complete_parser.add_argument("task_id", help="Task ID")
    reopen_parser = subparsers.add_parser("reopen", help="Mark task as pending again")
    reopen_parser.add_argument("task_id", help="Task ID")

    # UPDATE command
    update_parser = subparsers.add_parser("update", help="Update task details")
    update_parser.add_argument("task_id", help="Task ID")
    update_parser.add_argument("--title", help="New title")
    desc_group = update_parser.add_mutually_exclusive_group()
    desc_group.add_argument("--description", help="New description")
    desc_group.add_argument("--clear-description", action="store_true", help="Remove the description")
    due_group = update_parser.add_mutually_exclusive_group()
    due_group.add_argument("--due", help="New due date (YYYY-MM-DD)")
    due_group.add_argument("--clear-due", action="store_true", help="Remove the due date")

    # DELETE command
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", help="Task ID")

    # STATUS command
    status_parser = subparsers.add_parser("status", help="Show progress report")
    status_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("menu", help="Interactive menu")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = TaskTrackerConfig.from_env(data_file=args.file)
    manager = TaskManager(config=config)

    command = args.command or "menu"
    if command == "menu":
        return run_menu(manager)

    if command == "add":
        title = args.title.strip()
        if not title:
            print("❌ Title cannot be empty.")
            return 1
        try:
            due_date = parse_due_date(args.due or "")
        except ValueError as e:
            print(f"❌ {e}")
            return 1
        task = manager.add_task(title, description=args.description, due_date=due_date)
        print(f'✅ Task "{task.title}" (ID: {task.id}) added.')

    elif command == "list":
        if args.completed:
            tasks, message = manager.get_tasks_by_completion(True), "Completed Tasks:"
        elif args.pending:
            tasks, message = manager.get_tasks_by_completion(False), "Pending Tasks:"
        else:
            tasks, message = manager.get_all_tasks(), "Tasks:"
        if args.json:
            _print_json([task.to_record() for task in tasks])
        else:
            _print_tasks(tasks, message)

    elif command == "show":
        task = manager.get_task_by_id(args.task_id)
        if not task:
            print(f'❌ Task with ID "{args.task_id}" not found.')
            return 1
        if args.json:
            _print_json(task.to_record())
        else:
            _print_tasks([task], "Task:")

    elif command in ("complete", "reopen"):
        return _set_completed(manager, args.task_id, command == "complete")

    elif command == "update":
        return _update_from_args(manager, args)

    elif command == "delete":
        task = manager.get_task_by_id(args.task_id)
        if not task or not manager.delete_task(args.task_id):
            print(f'❌ Task with ID "{args.task_id}" not found.')
            return 1
        print(f'🗑️ Task "{task.title}" (ID: {task.id}) deleted.')

    elif command == "status":
        if args.json:
            _print_json(manager.get_summary())
        else:
            print(manager.get_status_report())

    return 0


def _set_completed(manager: TaskManager, task_id: str, completed: bool) -> int:
    task = manager.get_task_by_id(task_id)
    if not task:
        print(f'❌ Task with ID "{task_id}" not found.')
        return 1
    state = "completed" if completed else "pending"
    if task.completed == completed:
        print(f'Task "{task.title}" (ID: {task_id}) is already marked as {state}.')
        return 0
    manager.update_task(task_id, completed=completed)
    print(f'✅ Task "{task.title}" (ID: {task_id}) marked as {state}.')
    return 0


def _update_from_args(manager: TaskManager, args: argparse.Namespace) -> int:
    task = manager.get_task_by_id(args.task_id)
    if not task:
        print(f'❌ Task with ID "{args.task_id}" not found.')
        return 1

    fields = {}
    if args.title is not None:
        if not args.title.strip():
            print("❌ Title cannot be empty.")
            return 1
        fields["title"] = args.title
    if args.clear_description:
        fields["description"] = None
    elif args.description is not None:
        fields["description"] = args.description
    if args.clear_due:
        fields["due_date"] = None
    elif args.due is not None:
        try:
            fields["due_date"] = parse_due_date(args.due)
        except ValueError as e:
            print(f"❌ {e}")
            return 1

    if not fields:
        print("No fields selected for update.")
        return 1

    manager.update_task(args.task_id, TaskUpdate(**fields))
    print(f'✅ Task "{task.title}" (ID: {task.id}) updated.')
    return 0


# ========================================
# INTERACTIVE MENU
# ========================================

def _ask_title(ask: Ask, default: Optional[str] = None) -> str:
    prompt = f"Task title [{default}]: " if default else "Task title: "
    while True:
        title = ask(prompt).strip()
        if not title and default:
            return default
        if title:
            return title
        print("Title cannot be empty.")


def _ask_due_date(ask: Ask, prompt: str):
    while True:
        try:
            return parse_due_date(ask(prompt))
        except ValueError as e:
            print(e)


def _ask_task_id(ask: Ask, prompt: str = "Enter task ID: ") -> Optional[str]:
    task_id = ask(prompt).strip()
    if not task_id:
        print("No ID entered.")
        return None
    return task_id


def _menu_add(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Add New Task ---")
    title = _ask_title(ask)
    description = ask("Task description (optional): ").strip() or None
    due_date = _ask_due_date(ask, "Due date (optional, YYYY-MM-DD, press Enter to skip): ")
    task = manager.add_task(title, description=description, due_date=due_date)
    print(f'\nSUCCESS: Task "{task.title}" (ID: {task.id}) added.')


def _menu_view_all(manager: TaskManager, ask: Ask) -> None:
    print("\n--- All Tasks ---")
    _print_tasks(manager.get_all_tasks())


def _menu_view_completed(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Completed Tasks ---")
    _print_tasks(manager.get_tasks_by_completion(True), "Completed Tasks:")


def _menu_view_pending(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Pending Tasks ---")
    _print_tasks(manager.get_tasks_by_completion(False), "Pending Tasks:")


def _menu_complete(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Mark Task as Completed ---")
    task_id = _ask_task_id(ask)
    if task_id:
        _set_completed(manager, task_id, True)


def _menu_update(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Update Task ---")
    task_id = _ask_task_id(ask, "Enter ID of task to update: ")
    if not task_id:
        return
    task = manager.get_task_by_id(task_id)
    if not task:
        print(f'ERROR: Task with ID "{task_id}" not found.')
        return

    print(f"Current details: {task.title} | {task.description or ''} | {format_due_date(task.due_date)}")
    raw = ask("Fields to update (title, description, due; comma separated): ")
    selected = {part.strip().lower() for part in raw.split(",") if part.strip()}
    if not selected:
        print("No fields selected for update.")
        return

    fields = {}
    if "title" in selected:
        fields["title"] = _ask_title(ask, default=task.title)
    if "description" in selected:
        current = task.description or ""
        prompt = f"New description [{current}]: " if current else "New description: "
        fields["description"] = ask(prompt) or task.description
    if "due" in selected:
        fields["due_date"] = _ask_due_date(ask, "New due date (YYYY-MM-DD, leave blank to remove): ")

    if not fields:
        print("No changes were made.")
        return
    manager.update_task(task_id, TaskUpdate(**fields))
    print(f'SUCCESS: Task "{task.title}" (ID: {task_id}) updated.')


def _menu_delete(manager: TaskManager, ask: Ask) -> None:
    print("\n--- Delete Task ---")
    task_id = _ask_task_id(ask, "Enter ID of task to delete: ")
    if not task_id:
        return
    task = manager.get_task_by_id(task_id)
    if not task or not manager.delete_task(task_id):
        print(f'ERROR: Task with ID "{task_id}" not found.')
        return
    print(f'SUCCESS: Task "{task.title}" (ID: {task_id}) deleted.')


MENU = [
    ("1", "Add a new task", _menu_add),
    ("2", "View all tasks", _menu_view_all),
    ("3", "View completed tasks", _menu_view_completed),
    ("4", "View pending tasks", _menu_view_pending),
    ("5", "Mark a task as completed", _menu_complete),
    ("6", "Update a task", _menu_update),
    ("7", "Delete a task", _menu_delete),
]


def run_menu(manager: TaskManager, ask: Ask = input) -> int:
    """Interactive loop; returns when the user exits or input ends"""
    handlers = {key: handler for key, _, handler in MENU}
    print("\n--- Task Manager CLI ---")
    try:
        while True:
            print()
            for key, label, _ in MENU:
                print(f"  {key}. {label}")
            print("  0. Exit")
            choice = ask("What would you like to do? ").strip().lower()
            if choice in ("0", "exit", "q"):
                break
            handler = handlers.get(choice)
            if handler is None:
                print("Unknown option.")
                continue
            handler(manager, ask)
    except (KeyboardInterrupt, EOFError):
        print()
    print("\nExiting Task Manager. Goodbye!")
    return 0


"""Read-only access to todos exported by the task-management application.

The export is a JSON array of task objects. Related objects (tags, project,
area) may be given either as plain names or as objects with a "name" key,
and dates either as ISO dates or ISO datetimes.
"""

import json
import logging
import os
from datetime import date, datetime
from typing import Any

from .models import Status, Todo

logger = logging.getLogger(__name__)


class TaskSourceError(Exception):
    """Raised when the task export cannot be read."""


def _first(entry: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in the entry."""
    for key in keys:
        if key in entry:
            return entry[key]
    return None


def _name_of(value: Any) -> str | None:
    """Extract a name from a plain string or a {"name": ...} object."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("name")
        if value is None:
            return None
    if not isinstance(value, str):
        raise ValueError(f"expected a name, got {value!r}")
    return value


def _text_or_none(value: Any) -> str | None:
    """Accept a string or null, nothing else."""
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"expected text, got {value!r}")


def _tag_names(value: Any) -> tuple[str, ...]:
    """Read the tag list: names or {"name": ...} objects."""
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"expected a list of tags, got {value!r}")
    return tuple(name for name in (_name_of(tag) for tag in value) if name)


def _parse_date(value: Any) -> date | None:
    """Parse an ISO date or datetime string into a date."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO date string, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        # Full timestamps ("2025-12-10T09:30:00Z") keep only the date part
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def todo_from_dict(entry: dict[str, Any]) -> Todo:
    """Build a Todo from one exported task object.

    Raises:
        ValueError: If a required key is missing or a value is malformed.
    """
    if "id" not in entry or "name" not in entry:
        raise ValueError("task needs both 'id' and 'name'")

    status_text = entry.get("status") or "open"
    status = Status.from_text(str(status_text))
    if status is None:
        raise ValueError(f"unknown status {status_text!r}")

    return Todo(
        id=str(entry["id"]),
        name=str(entry["name"]),
        status=status,
        notes=_text_or_none(entry.get("notes")),
        tags=_tag_names(entry.get("tags")),
        project=_name_of(entry.get("project")),
        area=_name_of(entry.get("area")),
        due=_parse_date(_first(entry, "due", "dueDate", "due_date", "deadline")),
        created=_parse_date(_first(entry, "created", "creationDate", "creation_date")),
        modified=_parse_date(
            _first(entry, "modified", "modificationDate", "modification_date")
        ),
    )


def load_todos(path: str) -> list[Todo]:
    """Load every todo from a JSON export file.

    Args:
        path: Path to the export file ("~" is expanded).

    Returns:
        The todos, in file order.

    Raises:
        TaskSourceError: If the file cannot be read or holds malformed tasks.
    """
    path = os.path.expanduser(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise TaskSourceError(f"Cannot read task file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TaskSourceError(f"Invalid JSON in task file {path}: {e}") from e

    # Accept either a bare array or the {"todos": [...]} list response
    if isinstance(data, dict):
        data = data.get("todos", data.get("items"))
    if not isinstance(data, list):
        raise TaskSourceError(f"Task file {path} does not contain a list of tasks")

    todos: list[Todo] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise TaskSourceError(f"Task #{index} in {path} is not an object")
        try:
            todos.append(todo_from_dict(entry))
        except ValueError as e:
            raise TaskSourceError(f"Task #{index} in {path} is malformed: {e}") from e

    logger.info(f"Loaded {len(todos)} todos from {path}")
    return todos

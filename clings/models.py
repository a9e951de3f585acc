"""Task record model shared by the filter language, the task store and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

# Alternate spellings accepted wherever a status is given as text
DEFAULT_STATUS_SYNONYMS: dict[str, str] = {"cancelled": "canceled"}


class Status(Enum):
    """The completion status of a todo."""

    OPEN = "open"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        return self.value.capitalize()

    @classmethod
    def from_text(
        cls, text: str, synonyms: dict[str, str] | None = None
    ) -> Status | None:
        """Look up a status by its text form, ignoring case.

        Args:
            text: The status text (e.g. "Open", "cancelled").
            synonyms: Mapping of alternate spellings to canonical values.
                Defaults to DEFAULT_STATUS_SYNONYMS.

        Returns:
            The matching Status, or None if the text names no status.
        """
        if synonyms is None:
            synonyms = DEFAULT_STATUS_SYNONYMS
        key = text.strip().lower()
        key = synonyms.get(key, key)
        for status in cls:
            if status.value == key:
                return status
        return None


@dataclass(frozen=True)
class Todo:
    """A task record as exported by the task-management application.

    Attributes:
        id: Unique identifier of the todo.
        name: Title of the todo.
        status: Completion status.
        notes: Free-form notes, if any.
        tags: Tag names attached to the todo.
        project: Name of the containing project, if any.
        area: Name of the containing area, if any.
        due: Due date (deadline), if any.
        created: Creation date, if known.
        modified: Last modification date, if known.
    """

    id: str
    name: str
    status: Status = Status.OPEN
    notes: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    project: str | None = None
    area: str | None = None
    due: date | None = None
    created: date | None = None
    modified: date | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the todo to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "notes": self.notes,
            "tags": list(self.tags),
            "project": self.project,
            "area": self.area,
            "due": self.due.isoformat() if self.due else None,
            "created": self.created.isoformat() if self.created else None,
            "modified": self.modified.isoformat() if self.modified else None,
        }

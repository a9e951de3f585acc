"""Pytest configuration for clings tests."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add parent directory to path so we can import clings without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from clings.models import Status, Todo  # noqa: E402

WORK_AREA = "🖥️ Work"
PERSONAL_AREA = "🏠 Personal"


@pytest.fixture
def make_todo() -> "type[_TodoFactory]":  # Return a callable factory class
    """Fixture that provides a factory for creating Todo objects for testing."""
    return _TodoFactory


class _TodoFactory:
    """Factory class for creating Todo objects in tests."""

    @staticmethod
    def create(
        name: str = "test",
        status: Status = Status.OPEN,
        notes: str | None = None,
        tags: tuple[str, ...] = (),
        project: str | None = None,
        area: str | None = None,
        due: date | None = None,
        created: date | None = None,
        todo_id: str = "todo-1",
    ) -> Todo:
        """Create a Todo for testing."""
        return Todo(
            id=todo_id,
            name=name,
            status=status,
            notes=notes,
            tags=tags,
            project=project,
            area=area,
            due=due,
            created=created,
        )


@pytest.fixture
def work_todos() -> dict[str, Todo]:
    """Todos modelled on a work automation setup (emoji-prefixed area names)."""
    return {
        "meeting_action": Todo(
            id="todo-meeting-1",
            name="Follow up on API changes discussed in standup",
            notes="From meeting on 2025-12-10",
            status=Status.OPEN,
            due=date(2025, 12, 12),
            tags=("meeting-action",),
            project="Mobile App",
            area=WORK_AREA,
        ),
        "jira_task": Todo(
            id="todo-jira-1",
            name="Review PROJ-1234 implementation",
            notes="PR needs review before merge",
            status=Status.OPEN,
            due=date(2025, 12, 11),
            tags=("jira", "review"),
            project="Mobile App",
            area=WORK_AREA,
        ),
        "completed_task": Todo(
            id="todo-completed-work",
            name="Merge PR #267",
            notes="Feature branch merged",
            status=Status.COMPLETED,
            tags=("jira",),
            project="Mobile App",
            area=WORK_AREA,
        ),
        "inline_tags_task": Todo(
            id="todo-inline-tags",
            name="Update documentation",
            status=Status.OPEN,
            tags=("urgent", "review"),
            area=WORK_AREA,
        ),
        "personal_task": Todo(
            id="todo-personal",
            name="Schedule dentist appointment",
            status=Status.OPEN,
            due=date(2025, 12, 17),
            area=PERSONAL_AREA,
        ),
    }

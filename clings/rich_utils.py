"""
Rich formatting utilities for clings.

This module provides utilities for rendering filtered todos on the command line
using the Rich library: a table view with a status summary, plus plain and JSON
renderings for scripting.
"""

import json
from collections import Counter
from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Status, Todo

# Global console instance for consistent styling
console = Console()

_STATUS_COLORS = {
    Status.OPEN: "#00D7AF",
    Status.COMPLETED: "#00AF00",
    Status.CANCELED: "#808080",
}


def get_status_color(status: Status) -> str:
    """Get the display color for a status."""
    return _STATUS_COLORS.get(status, "white")


def print_status(
    message: str, status_type: str = "info", out: Console | None = None
) -> None:
    """Print a status message with appropriate styling."""
    icons = {
        "info": "ℹ️",
        "warning": "⚠️",
    }

    styles = {
        "info": "blue",
        "warning": "yellow",
    }

    icon = icons.get(status_type, "ℹ️")
    style = styles.get(status_type, "white")

    (out or console).print(f"[{style}]{icon} {message}[/{style}]")


def print_todo_table(
    todos: Sequence[Todo], title: str = "Todos", out: Console | None = None
) -> None:
    """Print todos as a table followed by a summary panel."""
    out = out or console
    if not todos:
        return

    table = Table(title=Text(f"📋 {title}"), show_header=True, header_style="bold magenta")
    table.add_column("Status", width=10)
    table.add_column("Name", style="white")
    table.add_column("Project", style="cyan")
    table.add_column("Area", style="cyan")
    table.add_column("Due", style="yellow")
    table.add_column("Tags", style="dim")

    for todo in todos:
        table.add_row(
            Text(todo.status.display_name, style=f"bold {get_status_color(todo.status)}"),
            Text(todo.name),
            Text(todo.project or ""),
            Text(todo.area or ""),
            todo.due.isoformat() if todo.due else "",
            Text(", ".join(todo.tags)),
        )

    out.print(table)

    # Count and status breakdown
    status_counts = Counter(todo.status.display_name for todo in todos)
    breakdown = ", ".join(
        f"{count} {status}" for status, count in sorted(status_counts.items())
    )
    summary = Text(f"Found {len(todos)} todo(s): {breakdown}", style="bold")
    out.print(Panel(summary, title="Summary", border_style="green"))


def format_plain_line(todo: Todo) -> str:
    """Format a todo as one tab-separated line without colors."""
    return "\t".join(
        [
            todo.id,
            todo.status.value,
            todo.name,
            todo.project or "-",
            todo.area or "-",
            todo.due.isoformat() if todo.due else "-",
            ",".join(todo.tags) or "-",
        ]
    )


def format_json(todos: Sequence[Todo]) -> str:
    """Render todos as a JSON array."""
    return json.dumps([todo.to_dict() for todo in todos], indent=2, ensure_ascii=False)

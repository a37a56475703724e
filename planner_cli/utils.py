"""Rendering helpers for the planner CLI."""
import typing as t
from datetime import datetime

from rich.console import Console
from rich.table import Table

from reminder_server.models import Reminder

console = Console()
err_console = Console(stderr=True)

PRIORITY_STYLES = {
    "low": "dim",
    "medium": "white",
    "high": "yellow",
    "critical": "bold red",
}


def format_datetime_human(dt: datetime) -> str:
    """Convert a datetime to a short human-readable format (MM/DD HH:MM)."""
    return dt.strftime("%m/%d %H:%M")


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def create_reminder_table(title: str, reminders: t.Sequence[Reminder]) -> Table:
    """Create a table of reminders in the order given."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Priority")
    table.add_column("Type", style="dim")

    for reminder in reminders:
        priority = reminder.priority.value
        table.add_row(
            reminder.id[:8],
            truncate_title(reminder.title),
            format_datetime_human(reminder.scheduled_date),
            f"[{PRIORITY_STYLES[priority]}]{priority}[/]",
            reminder.reminder_type.value,
        )

    return table


def parse_due_date(value: str) -> datetime:
    """
    Parse an ISO datetime given on the command line.

    Naive values are taken as local time.

    Raises:
        ValueError: If the value isn't an ISO datetime.
    """
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt

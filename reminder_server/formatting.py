# -*- coding: utf-8 -*-
"""Plain-text tables of the reminder center sections."""
from __future__ import annotations

import typing as t
from datetime import datetime

from reminder_server.models import Reminder
from reminder_server.presenter import ReminderSections


def format_datetime(dt: datetime) -> str:
    """Formats a datetime into a concise readable format, e.g. 'Mon 1/15 2:30 PM'."""
    return f"{dt.strftime('%a')} {dt.month}/{dt.day} {dt.strftime('%I:%M %p').lstrip('0')}"


def _truncate(text: str, width: int) -> str:
    return text[: width - 1] if len(text) > width - 1 else text


def _format_rows(reminders: t.Sequence[Reminder]) -> list[str]:
    lines = []
    for idx, reminder in enumerate(reminders, 1):
        title = _truncate(reminder.title, 35)
        message = _truncate(reminder.message, 30) if reminder.message else "-"
        lines.append(
            f"{idx:<4} {title:<35} {format_datetime(reminder.scheduled_date):<18} "
            f"{reminder.priority.value:<9} {message:<30}"
        )
    return lines


def format_reminder_sections(sections: ReminderSections) -> str:
    """Format active and completed reminders as two tables.

    :param sections: The sections to render.
    :return: Formatted table string, or a message if there are no reminders.
    """
    if not sections.active and not sections.completed:
        return "No reminders found."

    header = f"{'#':<4} {'Title':<35} {'Due':<18} {'Priority':<9} {'Message':<30}"
    lines = []
    for label, reminders in (("ACTIVE", sections.active), ("COMPLETED", sections.completed)):
        if not reminders:
            continue
        lines.append(f"{label} REMINDERS")
        lines.append("=" * 100)
        lines.append(header)
        lines.append("-" * 100)
        lines.extend(_format_rows(reminders))
        lines.append("")

    lines.append("=" * 100)
    lines.append(
        f"Total: {len(sections.active)} active, {len(sections.completed)} completed reminder(s)"
    )
    return "\n".join(lines)

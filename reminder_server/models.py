"""
Data models for reminders and the calendar entries created from them.

This module contains the dataclasses and enumerations used to represent
business reminders, their local notifications, and calendar events.
"""
from __future__ import annotations

import calendar
import typing as t
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum


class Priority(str, Enum):
    """How urgent a reminder is."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReminderType(str, Enum):
    """What kind of business task a reminder stands for."""
    CUSTOM = "custom"
    MEETING = "meeting"
    DEADLINE = "deadline"
    FOLLOWUP = "followup"
    MILESTONE = "milestone"


class RecurrenceRule(str, Enum):
    """Repeat interval for a recurring reminder."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def next_date(self, current: datetime) -> datetime:
        """Return ``current`` advanced by one interval.

        Months and years keep the day of month where possible and clamp to the
        last day otherwise (Jan 31 + 1 month -> Feb 28/29).
        """
        if self is RecurrenceRule.DAILY:
            return current + timedelta(days=1)
        if self is RecurrenceRule.WEEKLY:
            return current + timedelta(weeks=1)
        months = 1 if self is RecurrenceRule.MONTHLY else 12
        month_index = current.month - 1 + months
        year = current.year + month_index // 12
        month = month_index % 12 + 1
        day = min(current.day, calendar.monthrange(year, month)[1])
        return current.replace(year=year, month=month, day=day)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _parse_datetime(value: t.Optional[str]) -> t.Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class Reminder:
    """Represents a reminder with title, due date, message and status."""
    title: str
    scheduled_date: datetime
    message: str = ""
    is_completed: bool = False
    notify_via_calendar: bool = False
    priority: Priority = Priority.MEDIUM
    reminder_type: ReminderType = ReminderType.CUSTOM
    recurrence: t.Optional[RecurrenceRule] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=utc_now)
    completed_at: t.Optional[datetime] = None
    notification_id: t.Optional[str] = None

    def to_dict(self) -> dict[str, t.Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "scheduled_date": self.scheduled_date.isoformat(),
            "is_completed": self.is_completed,
            "notify_via_calendar": self.notify_via_calendar,
            "priority": self.priority.value,
            "reminder_type": self.reminder_type.value,
            "recurrence": self.recurrence.value if self.recurrence else None,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "notification_id": self.notification_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> Reminder:
        """Create from a dictionary produced by :meth:`to_dict`."""
        recurrence = data.get("recurrence")
        return cls(
            id=data["id"],
            title=data["title"],
            message=data.get("message", ""),
            scheduled_date=_parse_datetime(data["scheduled_date"]),
            is_completed=data.get("is_completed", False),
            notify_via_calendar=data.get("notify_via_calendar", False),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            reminder_type=ReminderType(data.get("reminder_type", ReminderType.CUSTOM.value)),
            recurrence=RecurrenceRule(recurrence) if recurrence else None,
            created_at=_parse_datetime(data.get("created_at")) or utc_now(),
            completed_at=_parse_datetime(data.get("completed_at")),
            notification_id=data.get("notification_id"),
        )


@dataclass
class ReminderDraft:
    """The values a composer hands over when the user confirms."""
    title: str
    note: str
    due_date: datetime
    add_to_calendar: bool
    priority: Priority = Priority.MEDIUM
    reminder_type: ReminderType = ReminderType.CUSTOM
    enable_notifications: bool = True
    recurrence: t.Optional[RecurrenceRule] = None


@dataclass
class CalendarEvent:
    """Represents a calendar event created for a reminder."""
    title: str
    start: datetime
    end: datetime
    notes: str = ""
    alarm_minutes_before: int = 15
    reminder_id: t.Optional[str] = None


@dataclass
class ScheduledNotification:
    """A pending local notification for a reminder."""
    identifier: str
    title: str
    body: str
    fire_at: datetime
    category: str

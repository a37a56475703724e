# -*- coding: utf-8 -*-
"""
Calendar and notification collaborators for the reminder store.

Both are best-effort: the store logs their failures and never lets them undo
or block the creation of a reminder.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import timedelta

from reminder_server.models import CalendarEvent, Reminder, ScheduledNotification

logger = logging.getLogger(__name__)

EVENT_DURATION = timedelta(hours=1)
ALARM_MINUTES_BEFORE = 15


class CalendarIntegration(t.Protocol):
    def request_access(self) -> bool: ...

    def add_event(self, reminder: Reminder) -> bool: ...


class NotificationScheduler(t.Protocol):
    def schedule(self, reminder: Reminder) -> str: ...

    def cancel(self, notification_id: str) -> None: ...


class LocalCalendar:
    """In-memory calendar that accepts events once access has been granted.

    :param grant_access: What the (simulated) permission prompt answers.
    """

    def __init__(self, grant_access: bool = True) -> None:
        self.grant_access = grant_access
        self.access_granted: t.Optional[bool] = None
        self.events: list[CalendarEvent] = []

    def request_access(self) -> bool:
        # Only the first request prompts; later calls reuse the answer
        if self.access_granted is None:
            self.access_granted = self.grant_access
            logger.info("Calendar access %s", "granted" if self.access_granted else "denied")
        return self.access_granted

    def add_event(self, reminder: Reminder) -> bool:
        if not self.request_access():
            return False
        event = CalendarEvent(
            title=reminder.title,
            start=reminder.scheduled_date,
            end=reminder.scheduled_date + EVENT_DURATION,
            notes=reminder.message,
            alarm_minutes_before=ALARM_MINUTES_BEFORE,
            reminder_id=reminder.id,
        )
        self.events.append(event)
        return True


class LocalNotificationCenter:
    """Keeps pending notifications keyed by identifier."""

    def __init__(self) -> None:
        self.pending: dict[str, ScheduledNotification] = {}

    def schedule(self, reminder: Reminder) -> str:
        identifier = f"reminder_{reminder.id}"
        self.pending[identifier] = ScheduledNotification(
            identifier=identifier,
            title=reminder.title,
            body=reminder.message or "Reminder due",
            fire_at=reminder.scheduled_date,
            category=f"REMINDER_{reminder.priority.value.upper()}",
        )
        return identifier

    def cancel(self, notification_id: str) -> None:
        self.pending.pop(notification_id, None)

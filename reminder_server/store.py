# -*- coding: utf-8 -*-
"""
Canonical reminder collection.

The store owns the list of reminders and is the only place it is mutated.
Listeners registered with :meth:`ReminderStore.subscribe` receive a fresh
snapshot after every change.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import replace
from datetime import datetime, timedelta

from reminder_server.integrations import CalendarIntegration, NotificationScheduler
from reminder_server.models import (
    Priority,
    RecurrenceRule,
    Reminder,
    ReminderDraft,
    ReminderType,
    utc_now,
)
from storage.preferences import REMINDERS_KEY, Preferences

logger = logging.getLogger(__name__)

Listener = t.Callable[[tuple[Reminder, ...]], None]


class ReminderStore:
    """In-memory reminder collection with optional persistence.

    :param preferences: Where the collection is loaded from and saved to.
    :param calendar: Calendar used for reminders created with ``add_to_calendar``.
    :param notifications: Scheduler for local notifications.
    :param clock: Returns the current time; used for ``completed_at``.
    """

    def __init__(
        self,
        preferences: t.Optional[Preferences] = None,
        calendar: t.Optional[CalendarIntegration] = None,
        notifications: t.Optional[NotificationScheduler] = None,
        clock: t.Callable[[], datetime] = utc_now,
    ) -> None:
        self.preferences = preferences
        self.calendar = calendar
        self.notifications = notifications
        self.clock = clock
        self._reminders: list[Reminder] = []
        self._listeners: list[Listener] = []
        if preferences is not None:
            self._reminders = [
                Reminder.from_dict(item) for item in preferences.get(REMINDERS_KEY, [])
            ]

    @property
    def reminders(self) -> tuple[Reminder, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(replace(r) for r in self._reminders)

    def get(self, reminder_id: str) -> t.Optional[Reminder]:
        index = self._index_of(reminder_id)
        return replace(self._reminders[index]) if index is not None else None

    def subscribe(self, listener: Listener) -> t.Callable[[], None]:
        """Register ``listener`` and return a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def create_reminder(
        self,
        title: str,
        due_date: datetime,
        description: str = "",
        reminder_type: ReminderType = ReminderType.CUSTOM,
        priority: Priority = Priority.MEDIUM,
        add_to_calendar: bool = False,
        notify: bool = True,
        recurrence: t.Optional[RecurrenceRule] = None,
    ) -> Reminder:
        """Create a reminder and add it to the collection.

        Calendar sync and notification scheduling are attempted after the
        reminder exists; their failure is logged and does not undo it.

        :raises ValueError: If ``title`` is blank.
        """
        if not title.strip():
            raise ValueError("Reminder title must not be empty")
        if due_date.tzinfo is None:
            # naive values are local time
            due_date = due_date.astimezone()

        reminder = Reminder(
            title=title,
            message=description,
            scheduled_date=due_date,
            notify_via_calendar=add_to_calendar,
            priority=priority,
            reminder_type=reminder_type,
            recurrence=recurrence,
            created_at=self.clock(),
        )
        self._reminders.append(reminder)
        logger.info("Created reminder %s (%s)", reminder.id, reminder.title)

        if notify:
            self._schedule_notification(reminder)
        if add_to_calendar:
            self._sync_calendar(reminder)

        self._changed()
        return replace(reminder)

    def create_from_draft(self, draft: ReminderDraft) -> Reminder:
        return self.create_reminder(
            title=draft.title,
            due_date=draft.due_date,
            description=draft.note,
            reminder_type=draft.reminder_type,
            priority=draft.priority,
            add_to_calendar=draft.add_to_calendar,
            notify=draft.enable_notifications,
            recurrence=draft.recurrence,
        )

    def complete_reminder(self, reminder_id: str) -> t.Optional[Reminder]:
        """Mark a reminder as completed.

        Completing an already-completed reminder changes nothing. A recurring
        reminder spawns its next occurrence on first completion.

        :return: The reminder, or ``None`` if the id is unknown.
        """
        index = self._index_of(reminder_id)
        if index is None:
            logger.debug("complete_reminder: unknown id %s", reminder_id)
            return None

        reminder = self._reminders[index]
        if reminder.is_completed:
            return replace(reminder)

        reminder.is_completed = True
        reminder.completed_at = self.clock()
        self._cancel_notification(reminder)
        logger.info("Completed reminder %s", reminder.id)

        if reminder.recurrence is not None:
            self.create_reminder(
                title=reminder.title,
                due_date=reminder.recurrence.next_date(reminder.scheduled_date),
                description=reminder.message,
                reminder_type=reminder.reminder_type,
                priority=reminder.priority,
                add_to_calendar=False,
                notify=reminder.notification_id is not None,
                recurrence=reminder.recurrence,
            )
        else:
            self._changed()
        return replace(reminder)

    def delete_reminder(self, reminder_id: str) -> bool:
        """Remove a reminder permanently.

        :return: ``True`` if something was removed; unknown ids are ignored.
        """
        index = self._index_of(reminder_id)
        if index is None:
            logger.debug("delete_reminder: unknown id %s", reminder_id)
            return False

        reminder = self._reminders.pop(index)
        self._cancel_notification(reminder)
        logger.info("Deleted reminder %s", reminder.id)
        self._changed()
        return True

    def upcoming_reminders(self, now: t.Optional[datetime] = None, days: int = 7) -> list[Reminder]:
        """Incomplete reminders due between ``now`` and ``now + days``, soonest first."""
        now = now or self.clock()
        horizon = now + timedelta(days=days)
        return sorted(
            (r for r in self.reminders if not r.is_completed and now <= r.scheduled_date <= horizon),
            key=lambda r: r.scheduled_date,
        )

    def overdue_reminders(self, now: t.Optional[datetime] = None) -> list[Reminder]:
        """Incomplete reminders already past their due date, oldest first."""
        now = now or self.clock()
        return sorted(
            (r for r in self.reminders if not r.is_completed and r.scheduled_date < now),
            key=lambda r: r.scheduled_date,
        )

    def _index_of(self, reminder_id: str) -> t.Optional[int]:
        for index, reminder in enumerate(self._reminders):
            if reminder.id == reminder_id:
                return index
        return None

    def _schedule_notification(self, reminder: Reminder) -> None:
        if self.notifications is None:
            return
        try:
            reminder.notification_id = self.notifications.schedule(reminder)
        except Exception:
            logger.exception("Failed to schedule notification for %s", reminder.id)

    def _cancel_notification(self, reminder: Reminder) -> None:
        if self.notifications is None or reminder.notification_id is None:
            return
        try:
            self.notifications.cancel(reminder.notification_id)
        except Exception:
            logger.exception("Failed to cancel notification %s", reminder.notification_id)

    def _sync_calendar(self, reminder: Reminder) -> None:
        if self.calendar is None:
            logger.warning("No calendar configured; skipping sync for %s", reminder.id)
            return
        try:
            if self.calendar.add_event(reminder):
                logger.info("Reminder added to calendar: %s", reminder.title)
            else:
                logger.warning("Calendar access denied; %s kept without calendar entry", reminder.id)
        except Exception:
            logger.exception("Calendar sync failed for %s", reminder.id)

    def _changed(self) -> None:
        if self.preferences is not None:
            self.preferences.set(REMINDERS_KEY, [r.to_dict() for r in self._reminders])
        snapshot = self.reminders
        for listener in list(self._listeners):
            listener(snapshot)

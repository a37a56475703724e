# -*- coding: utf-8 -*-
"""
Reminder composer form state.

A composer collects the fields for one new reminder. Confirming hands a
:class:`ReminderDraft` to the save callback exactly once and closes the
composer; a closed composer never saves again.
"""
from __future__ import annotations

import typing as t
from datetime import datetime, timedelta

from common.settings import DEFAULT_REMINDER_OFFSET_MINUTES
from reminder_server.models import Priority, RecurrenceRule, ReminderDraft, ReminderType

SaveCallback = t.Callable[[ReminderDraft], t.Any]


def default_due_date(now: datetime) -> datetime:
    """Due date pre-filled in a new composer (one hour from ``now`` by default)."""
    return now + timedelta(minutes=DEFAULT_REMINDER_OFFSET_MINUTES)


class ReminderComposer:
    """Quick reminder form: title, note, due date and calendar toggle."""

    def __init__(
        self,
        default_date: datetime,
        on_save: SaveCallback,
        add_to_calendar: bool = True,
    ) -> None:
        self.on_save = on_save
        self.title = ""
        self.note = ""
        self.due_date = default_date
        self.add_to_calendar = add_to_calendar
        self.is_open = True

    @property
    def can_save(self) -> bool:
        return self.is_open and bool(self.title.strip())

    def _draft(self) -> ReminderDraft:
        return ReminderDraft(
            title=self.title,
            note=self.note,
            due_date=self.due_date,
            add_to_calendar=self.add_to_calendar,
        )

    def save(self) -> bool:
        """Submit the form.

        :return: ``True`` if the save callback ran, ``False`` if saving is disabled.
        """
        if not self.can_save:
            return False
        self.on_save(self._draft())
        self.is_open = False
        return True

    def cancel(self) -> None:
        self.is_open = False


class DetailedReminderComposer(ReminderComposer):
    """Full reminder form with priority, type, repeat and notification settings."""

    def __init__(
        self,
        default_date: datetime,
        on_save: SaveCallback,
        add_to_calendar: bool = False,
    ) -> None:
        super().__init__(default_date, on_save, add_to_calendar=add_to_calendar)
        self.priority = Priority.MEDIUM
        self.reminder_type = ReminderType.CUSTOM
        self.enable_notifications = True
        self.recurrence: t.Optional[RecurrenceRule] = None

    def _draft(self) -> ReminderDraft:
        draft = super()._draft()
        draft.priority = self.priority
        draft.reminder_type = self.reminder_type
        draft.enable_notifications = self.enable_notifications
        draft.recurrence = self.recurrence
        return draft

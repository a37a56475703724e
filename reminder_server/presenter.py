# -*- coding: utf-8 -*-
"""
Active / completed views over the reminder store.

Both lists are derived from the store's current snapshot on every access, so
they can never go stale.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from datetime import datetime

from reminder_server.composer import DetailedReminderComposer, ReminderComposer, default_due_date
from reminder_server.models import Reminder
from reminder_server.store import ReminderStore


@dataclass(frozen=True)
class ReminderSections:
    """The two display lists of the reminder center."""
    active: list[Reminder]
    completed: list[Reminder]


def active_reminders(reminders: t.Iterable[Reminder]) -> list[Reminder]:
    """Incomplete reminders, soonest first."""
    return sorted((r for r in reminders if not r.is_completed), key=lambda r: r.scheduled_date)


def completed_reminders(reminders: t.Iterable[Reminder]) -> list[Reminder]:
    """Completed reminders, most recently due first."""
    return sorted(
        (r for r in reminders if r.is_completed),
        key=lambda r: r.scheduled_date,
        reverse=True,
    )


def partition_reminders(reminders: t.Iterable[Reminder]) -> ReminderSections:
    reminders = list(reminders)
    return ReminderSections(
        active=active_reminders(reminders),
        completed=completed_reminders(reminders),
    )


class ReminderListPresenter:
    """Reminder center: sections for display plus complete/delete commands."""

    def __init__(self, store: ReminderStore) -> None:
        self.store = store

    @property
    def active(self) -> list[Reminder]:
        return active_reminders(self.store.reminders)

    @property
    def completed(self) -> list[Reminder]:
        return completed_reminders(self.store.reminders)

    @property
    def sections(self) -> ReminderSections:
        return partition_reminders(self.store.reminders)

    def complete(self, reminder_id: str) -> None:
        self.store.complete_reminder(reminder_id)

    def delete(self, reminder_id: str) -> None:
        self.store.delete_reminder(reminder_id)

    def subscribe(self, callback: t.Callable[[ReminderSections], None]) -> t.Callable[[], None]:
        """Call ``callback`` with freshly derived sections after each store change."""
        return self.store.subscribe(lambda snapshot: callback(partition_reminders(snapshot)))

    def open_composer(self, now: datetime) -> ReminderComposer:
        """A new quick composer whose save creates a reminder in the store."""
        return ReminderComposer(default_due_date(now), on_save=self.store.create_from_draft)

    def open_detailed_composer(self, now: datetime) -> DetailedReminderComposer:
        return DetailedReminderComposer(default_due_date(now), on_save=self.store.create_from_draft)

"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models used by the
reminder store and the onboarding flow, ensuring consistent JSON serialization
between the planner service, the MCP wrapper and the CLI.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


PriorityName = t.Literal["low", "medium", "high", "critical"]
ReminderTypeName = t.Literal["custom", "meeting", "deadline", "followup", "milestone"]
RecurrenceName = t.Literal["daily", "weekly", "monthly", "yearly"]


class Reminder(BaseModel):
    """A reminder as returned by the planner service."""
    id: str
    title: str
    message: str = ""
    scheduled_date: datetime
    is_completed: bool = False
    notify_via_calendar: bool = False
    priority: PriorityName = "medium"
    reminder_type: ReminderTypeName = "custom"
    recurrence: t.Optional[RecurrenceName] = None
    created_at: datetime
    completed_at: t.Optional[datetime] = None
    notification_id: t.Optional[str] = None


class ReminderSections(BaseModel):
    """Active reminders (soonest first) and completed ones (latest first)."""
    active: list[Reminder] = Field(default_factory=list)
    completed: list[Reminder] = Field(default_factory=list)


class OnboardingQuestion(BaseModel):
    """One question of the onboarding catalog."""
    id: str
    text: str
    options: list[str]


# Request/Response Models for API endpoints
class CreateReminderRequest(BaseModel):
    """Request model for creating a reminder."""
    title: str
    description: str = ""
    due_date: datetime
    reminder_type: ReminderTypeName = "custom"
    priority: PriorityName = "medium"
    add_to_calendar: bool = False
    notify: bool = True
    recurrence: t.Optional[RecurrenceName] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value


class ReminderCommandResponse(BaseModel):
    """Outcome of a complete/delete command; ``applied`` is False for unknown ids."""
    id: str
    applied: bool
    reminder: t.Optional[Reminder] = None


class ShowRemindersResponse(BaseModel):
    """Response model for formatted reminders display."""
    formatted_reminders: str


class OnboardingStatusResponse(BaseModel):
    """Whether onboarding has been completed, plus the saved answers."""
    has_completed_onboarding: bool
    answers: dict[str, str] = Field(default_factory=dict)


class CompleteOnboardingRequest(BaseModel):
    """Selected option indexes per question id, plus free-text answers for "Other" options."""
    selections: dict[str, list[int]]
    custom_answers: dict[str, str] = Field(default_factory=dict)

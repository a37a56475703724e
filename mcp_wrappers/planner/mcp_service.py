"""
MCP wrapper for the planner service.

This module exposes the planner tool functions and makes HTTP calls to the
distributed planner service. It handles serialization/deserialization between
the Pydantic wire models and the reminder dataclasses.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

import httpx

from common.settings import PLANNER_SERVICE_URL
from reminder_server.models import Reminder
from services.shared.models import (
    CompleteOnboardingRequest,
    CreateReminderRequest,
    OnboardingStatusResponse,
    ReminderCommandResponse,
    ReminderSections as PydanticReminderSections,
    ShowRemindersResponse,
)

# Timeout settings for fast operations (in seconds)
STANDARD_TIMEOUT = 30.0


def _http_client() -> t.ContextManager[httpx.Client]:
    return httpx.Client(base_url=PLANNER_SERVICE_URL, timeout=STANDARD_TIMEOUT)


def _call(method: str, path: str, what: str, **kwargs: t.Any) -> t.Any:
    """Send one request to the planner service and return the decoded JSON body."""
    try:
        with _http_client() as client:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
        return response.json()

    except httpx.TimeoutException:
        raise RuntimeError(f"{what} timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from planner service: {e.response.status_code} {e.response.text}")
    except httpx.HTTPError as e:
        raise RuntimeError(f"Error calling planner service: {str(e)}")


def _create_reminder(
    title: str,
    due_date: str,
    description: str = "",
    reminder_type: str = "custom",
    priority: str = "medium",
    add_to_calendar: bool = False,
    notify: bool = True,
    recurrence: t.Optional[str] = None,
) -> Reminder:
    """
    Create a reminder.

    :param title: Title of the reminder; must not be blank.
    :param due_date: Due time in ISO format.
    """
    request = CreateReminderRequest(
        title=title,
        description=description,
        due_date=datetime.fromisoformat(due_date.replace("Z", "+00:00")),
        reminder_type=reminder_type,
        priority=priority,
        add_to_calendar=add_to_calendar,
        notify=notify,
        recurrence=recurrence,
    )
    data = _call("POST", "/reminders", "Reminder creation", json=request.model_dump(mode="json"))
    return Reminder.from_dict(data)


def _list_reminders() -> dict[str, list[Reminder]]:
    """List active and completed reminders, each in display order."""
    sections = PydanticReminderSections(**_call("GET", "/reminders", "Listing reminders"))
    return {
        "active": [Reminder.from_dict(r.model_dump(mode="json")) for r in sections.active],
        "completed": [Reminder.from_dict(r.model_dump(mode="json")) for r in sections.completed],
    }


def _list_upcoming_reminders(days: int = 7) -> list[Reminder]:
    data = _call("GET", "/reminders/upcoming", "Listing upcoming reminders", params={"days": days})
    return [Reminder.from_dict(item) for item in data]


def _list_overdue_reminders() -> list[Reminder]:
    data = _call("GET", "/reminders/overdue", "Listing overdue reminders")
    return [Reminder.from_dict(item) for item in data]


def _complete_reminder(reminder_id: str) -> bool:
    """Complete a reminder. Returns False when the id is unknown."""
    data = _call("POST", f"/reminders/{reminder_id}/complete", "Completing reminder")
    return ReminderCommandResponse(**data).applied


def _delete_reminder(reminder_id: str) -> bool:
    """Delete a reminder. Returns False when the id is unknown."""
    data = _call("DELETE", f"/reminders/{reminder_id}", "Deleting reminder")
    return ReminderCommandResponse(**data).applied


def _show_reminders() -> str:
    data = _call("GET", "/reminders/show", "Formatting reminders")
    return ShowRemindersResponse(**data).formatted_reminders


def _list_onboarding_questions() -> list[dict[str, t.Any]]:
    return _call("GET", "/onboarding/questions", "Listing onboarding questions")


def _get_onboarding_status() -> dict[str, t.Any]:
    data = _call("GET", "/onboarding/status", "Reading onboarding status")
    return OnboardingStatusResponse(**data).model_dump()


def _complete_onboarding(
    selections: dict[str, list[int]],
    custom_answers: t.Optional[dict[str, str]] = None,
) -> dict[str, t.Any]:
    """
    Submit selected option indexes for every question, keyed by question id.

    :param custom_answers: Free-text descriptions for selected "Other" options.
    """
    request = CompleteOnboardingRequest(selections=selections, custom_answers=custom_answers or {})
    data = _call("POST", "/onboarding/complete", "Completing onboarding", json=request.model_dump())
    return OnboardingStatusResponse(**data).model_dump()

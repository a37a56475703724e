"""
MCP Gateway Server - unified entry point for the planner service.

This server imports the planner MCP wrapper functions and registers them as
tools on a single FastMCP instance. Each tool call is routed to the planner
service via HTTP.
"""
from __future__ import annotations

import logging

from fastmcp import FastMCP

from common import settings
from common.logs import setup_logging
# Import the raw functions from the MCP wrapper so they can be registered
# with our unified FastMCP instance
from mcp_wrappers.planner.mcp_service import (
    _complete_onboarding, _complete_reminder, _create_reminder, _delete_reminder,
    _get_onboarding_status, _list_onboarding_questions, _list_overdue_reminders,
    _list_reminders, _list_upcoming_reminders, _show_reminders,
    PLANNER_SERVICE_URL,
)
from reminder_server.models import Reminder

logger = logging.getLogger(__name__)

mcp = FastMCP("PlannerGateway")


def get_service_status() -> dict[str, str]:
    """Get the configured planner service URL and the gateway status."""
    return {
        "planner_service": PLANNER_SERVICE_URL,
        "gateway_status": "running",
    }


# Reminder tools
@mcp.tool()
def create_reminder(
    title: str,
    due_date: str,
    description: str = "",
    reminder_type: str = "custom",
    priority: str = "medium",
    add_to_calendar: bool = False,
    notify: bool = True,
    recurrence: str | None = None,
) -> Reminder:
    """Creates a reminder. Due date is an ISO datetime; title must not be blank."""
    return _create_reminder(
        title, due_date, description, reminder_type, priority, add_to_calendar, notify, recurrence
    )


@mcp.tool()
def list_reminders() -> dict[str, list[Reminder]]:
    """Lists active (soonest first) and completed (latest first) reminders."""
    return _list_reminders()


@mcp.tool()
def list_upcoming_reminders(days: int = 7) -> list[Reminder]:
    """Lists incomplete reminders due within the next given number of days."""
    return _list_upcoming_reminders(days)


@mcp.tool()
def list_overdue_reminders() -> list[Reminder]:
    """Lists incomplete reminders that are past their due date."""
    return _list_overdue_reminders()


@mcp.tool()
def complete_reminder(reminder_id: str) -> bool:
    """Marks a reminder completed. Returns false if no such reminder exists."""
    return _complete_reminder(reminder_id)


@mcp.tool()
def delete_reminder(reminder_id: str) -> bool:
    """Deletes a reminder. Returns false if no such reminder exists."""
    return _delete_reminder(reminder_id)


@mcp.tool()
def show_reminders() -> str:
    """Displays all reminders in a nicely formatted view."""
    return _show_reminders()


# Onboarding tools
@mcp.tool()
def list_onboarding_questions() -> list[dict]:
    """Lists the onboarding questions and their options, in order."""
    return _list_onboarding_questions()


@mcp.tool()
def get_onboarding_status() -> dict:
    """Tells whether onboarding has been completed and returns the saved answers."""
    return _get_onboarding_status()


@mcp.tool()
def complete_onboarding(
    selections: dict[str, list[int]],
    custom_answers: dict[str, str] | None = None,
) -> dict:
    """Answers every onboarding question with selected option indexes keyed by question id.
    Custom answers describe selected "Other" options in free text."""
    return _complete_onboarding(selections, custom_answers)


@mcp.tool()
def get_gateway_info() -> dict[str, str]:
    """Get information about the MCP Gateway and the planner service it connects to."""
    return get_service_status()


if __name__ == "__main__":
    setup_logging(settings.PLANNER_LOG_LEVEL)
    logger.info("Starting MCP Gateway for planner service at %s", PLANNER_SERVICE_URL)
    mcp.run()

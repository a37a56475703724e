# -*- coding: utf-8 -*-
import asyncio
import json
import typing as t
from dataclasses import dataclass
from datetime import datetime

import click
from rich.json import JSON
from rich.panel import Panel
from rich.text import Text

from common import settings
from common.logs import setup_logging
from navigation.shell import AppScreen, AppShell
from onboarding.catalog import load_questions
from onboarding.flow import OnboardingFlow
from onboarding.models import FlowStatus, OnboardingQuestion
from planner_cli.utils import console, create_reminder_table, err_console, parse_due_date
from reminder_server.integrations import LocalCalendar, LocalNotificationCenter
from reminder_server.models import Priority, RecurrenceRule, ReminderType
from reminder_server.presenter import ReminderListPresenter
from reminder_server.store import ReminderStore
from storage.preferences import OnboardingFlags, Preferences


@dataclass
class CliContext:
    """Objects shared by every command of one CLI invocation."""
    preferences: Preferences
    store: ReminderStore
    presenter: ReminderListPresenter
    flags: OnboardingFlags
    questions_file: t.Optional[str]

    def questions(self) -> tuple[OnboardingQuestion, ...]:
        return load_questions(self.questions_file)


def _resolve_id(store: ReminderStore, value: str) -> str:
    """Accept a full reminder id or a unique prefix of one."""
    if store.get(value) is not None:
        return value
    matches = [r.id for r in store.reminders if r.id.startswith(value)]
    return matches[0] if len(matches) == 1 else value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=lambda: settings.PLANNER_DATA_FILE or None,
    help="Preferences JSON file (defaults to $PLANNER_DATA_FILE, else in-memory).",
)
@click.option("--questions-file", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, data_file: t.Optional[str], questions_file: t.Optional[str], verbose: bool) -> None:
    """Business planner: reminders and the onboarding questionnaire."""
    setup_logging("DEBUG" if verbose else settings.PLANNER_LOG_LEVEL, console=console)
    preferences = Preferences(data_file)
    store = ReminderStore(
        preferences=preferences,
        calendar=LocalCalendar(grant_access=settings.PLANNER_CALENDAR_ACCESS),
        notifications=LocalNotificationCenter(),
    )
    ctx.obj = CliContext(
        preferences=preferences,
        store=store,
        presenter=ReminderListPresenter(store),
        flags=OnboardingFlags(preferences),
        questions_file=questions_file or settings.PLANNER_QUESTIONS_FILE or None,
    )


@main.group()
def reminders() -> None:
    """Create, list, complete and delete reminders."""


@reminders.command("add")
@click.argument("title")
@click.option("--note", default="", help="Free-text description.")
@click.option("--due", "due", default=None, help="Due date (ISO). Defaults to one hour from now.")
@click.option("--calendar/--no-calendar", default=False, help="Also add the reminder to the calendar.")
@click.option("--notify/--no-notify", default=True, help="Schedule a local notification.")
@click.option("--priority", type=click.Choice([p.value for p in Priority]), default=Priority.MEDIUM.value)
@click.option("--type", "reminder_type", type=click.Choice([r.value for r in ReminderType]),
              default=ReminderType.CUSTOM.value)
@click.option("--repeat", type=click.Choice([r.value for r in RecurrenceRule]), default=None)
@click.pass_obj
def add_reminder(
    obj: CliContext,
    title: str,
    note: str,
    due: t.Optional[str],
    calendar: bool,
    notify: bool,
    priority: str,
    reminder_type: str,
    repeat: t.Optional[str],
) -> None:
    """Create a reminder called TITLE."""
    composer = obj.presenter.open_detailed_composer(datetime.now().astimezone())
    composer.title = title
    composer.note = note
    composer.add_to_calendar = calendar
    composer.enable_notifications = notify
    composer.priority = Priority(priority)
    composer.reminder_type = ReminderType(reminder_type)
    if due:
        try:
            composer.due_date = parse_due_date(due)
        except ValueError:
            raise click.BadParameter(f"'{due}' is not an ISO datetime", param_hint="--due")

    composer.recurrence = RecurrenceRule(repeat) if repeat else None

    if not composer.save():
        err_console.print("[red]Error:[/red] Reminder title must not be empty.")
        raise SystemExit(1)
    reminder = obj.store.reminders[-1]
    console.print(f"[bold green]✓[/bold green] Reminder created: {reminder.title} ({reminder.id[:8]})")


@reminders.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON instead of tables.")
@click.pass_obj
def list_reminders(obj: CliContext, as_json: bool) -> None:
    """Show active and completed reminders."""
    sections = obj.presenter.sections
    if as_json:
        data = {
            "active": [r.to_dict() for r in sections.active],
            "completed": [r.to_dict() for r in sections.completed],
        }
        console.print(JSON(json.dumps(data, indent=2)))
        return

    if not sections.active and not sections.completed:
        console.print("No reminders found.")
        return

    stats_text = Text()
    stats_text.append("Active: ", style="white")
    stats_text.append(f"{len(sections.active)}", style="bold green")
    stats_text.append("\n")
    stats_text.append("Completed: ", style="white")
    stats_text.append(f"{len(sections.completed)}", style="bold green")
    console.print(Panel(stats_text, title="Reminders", border_style="green"))

    if sections.active:
        console.print(create_reminder_table("Active", sections.active))
    if sections.completed:
        console.print(create_reminder_table("Completed", sections.completed))


@reminders.command("upcoming")
@click.option("--days", default=7, show_default=True, help="How far ahead to look.")
@click.pass_obj
def upcoming_reminders(obj: CliContext, days: int) -> None:
    """Show incomplete reminders due in the next few days."""
    upcoming = obj.store.upcoming_reminders(days=days)
    if not upcoming:
        console.print(f"Nothing due in the next {days} day(s).")
        return
    console.print(create_reminder_table(f"Due in the next {days} day(s)", upcoming))


@reminders.command("overdue")
@click.pass_obj
def overdue_reminders(obj: CliContext) -> None:
    """Show incomplete reminders that are past due."""
    overdue = obj.store.overdue_reminders()
    if not overdue:
        console.print("Nothing overdue.")
        return
    console.print(create_reminder_table("Overdue", overdue))


@reminders.command("complete")
@click.argument("reminder_id")
@click.pass_obj
def complete_reminder(obj: CliContext, reminder_id: str) -> None:
    """Mark REMINDER_ID (or a unique prefix) completed."""
    reminder_id = _resolve_id(obj.store, reminder_id)
    if obj.store.get(reminder_id) is None:
        console.print(f"No reminder with id {reminder_id}; nothing to complete.")
        return
    obj.presenter.complete(reminder_id)
    console.print(f"[bold green]✓[/bold green] Completed {reminder_id[:8]}")


@reminders.command("delete")
@click.argument("reminder_id")
@click.pass_obj
def delete_reminder(obj: CliContext, reminder_id: str) -> None:
    """Delete REMINDER_ID (or a unique prefix) permanently."""
    reminder_id = _resolve_id(obj.store, reminder_id)
    if obj.store.get(reminder_id) is None:
        console.print(f"No reminder with id {reminder_id}; nothing to delete.")
        return
    obj.presenter.delete(reminder_id)
    console.print(f"[bold green]✓[/bold green] Deleted {reminder_id[:8]}")


def _ask(flow: OnboardingFlow) -> bool:
    """Prompt for the current question. Returns False if the user quits."""
    question = flow.current_question
    console.print(f"\n[bold]{question.text}[/bold]")
    for number, option in enumerate(question.options, 1):
        console.print(f"  {number}. {option}")

    while True:
        raw = click.prompt("Choose option number(s), comma separated, or q to quit", default="",
                           show_default=False).strip()
        if raw.lower() == "q":
            return False
        try:
            picks = [int(part) - 1 for part in raw.split(",") if part.strip()]
        except ValueError:
            picks = None
        # reject the whole answer before selecting anything
        if picks is None or any(not 0 <= pick < len(question.options) for pick in picks):
            console.print("[red]Please enter numbers from the list.[/red]")
            continue
        for pick in picks:
            flow.select(pick)
        if flow.can_advance:
            if flow.free_text_selected:
                text = click.prompt("Please describe (Enter to keep the option)", default="",
                                    show_default=False)
                flow.describe_other(text)
            return True
        console.print("[yellow]Select at least one option to continue.[/yellow]")


@main.command()
@click.option("--reset", is_flag=True, help="Forget a previous completion first.")
@click.pass_obj
def onboarding(obj: CliContext, reset: bool) -> None:
    """Answer the onboarding questionnaire."""
    if reset:
        obj.flags.reset()
    if obj.flags.has_completed_onboarding:
        console.print("Onboarding already completed. Use --reset to answer again.")
        return

    flow = OnboardingFlow(obj.questions(), obj.flags)
    while flow.status is FlowStatus.IN_PROGRESS:
        console.print(
            f"\n[dim]Question {flow.current_index + 1}/{len(flow.questions)} "
            f"({flow.progress:.0%})[/dim]"
        )
        if not _ask(flow):
            flow.dismiss()
            break
        flow.advance()

    if flow.status is FlowStatus.COMPLETED:
        console.print("\n[bold green]✅ Onboarding complete![/bold green]")
        for question in flow.questions:
            console.print(f"  {question.id}: {flow.answers.get(question.id, '')}")
    else:
        console.print("\nOnboarding dismissed; nothing was saved.")


@main.command()
@click.pass_obj
def status(obj: CliContext) -> None:
    """Show which screen the app would open on."""
    shell = AppShell(obj.flags)
    screen = shell.finish_launch()
    if screen is AppScreen.ONBOARDING:
        console.print("First run: the onboarding questionnaire would be shown.")
    else:
        console.print(f"Onboarding completed; opening the {shell.tab.title} tab.")
    console.print(f"Active reminders: {len(obj.presenter.active)}")


@main.command("tools")
def list_tools() -> None:
    """List the tool schemas exposed by the MCP gateway."""
    from registry import list_tool_schemas

    schemas = asyncio.run(list_tool_schemas())
    console.print(JSON(json.dumps(schemas, indent=2)))


if __name__ == "__main__":
    main()

"""
FastAPI service for reminder and onboarding operations.

This service wraps the reminder store and the onboarding flow and exposes them
as REST API endpoints. Every operation is a fast, in-process state change.
"""
from __future__ import annotations

import logging
import typing as t
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI, HTTPException, Request

from common import settings
from common.logs import setup_logging
from onboarding.catalog import load_questions
from onboarding.flow import OnboardingFlow
from onboarding.models import FlowStatus, OnboardingQuestion
from reminder_server.formatting import format_reminder_sections
from reminder_server.integrations import LocalCalendar, LocalNotificationCenter
from reminder_server.models import Priority, RecurrenceRule, Reminder, ReminderType
from reminder_server.presenter import ReminderListPresenter
from reminder_server.store import ReminderStore
from services.shared.models import (
    CompleteOnboardingRequest,
    CreateReminderRequest,
    OnboardingQuestion as PydanticOnboardingQuestion,
    OnboardingStatusResponse,
    Reminder as PydanticReminder,
    ReminderCommandResponse,
    ReminderSections as PydanticReminderSections,
    ShowRemindersResponse,
)
from storage.preferences import OnboardingFlags, Preferences

logger = logging.getLogger(__name__)


@dataclass
class PlannerState:
    """Everything the endpoints operate on."""
    store: ReminderStore
    presenter: ReminderListPresenter
    flags: OnboardingFlags
    questions: tuple[OnboardingQuestion, ...]


def build_state(
    preferences: Preferences,
    questions: t.Optional[t.Sequence[OnboardingQuestion]] = None,
) -> PlannerState:
    """Wire the store, presenter and onboarding flags around one preferences document."""
    store = ReminderStore(
        preferences=preferences,
        calendar=LocalCalendar(grant_access=settings.PLANNER_CALENDAR_ACCESS),
        notifications=LocalNotificationCenter(),
    )
    if questions is None:
        questions = load_questions(settings.PLANNER_QUESTIONS_FILE or None)
    return PlannerState(
        store=store,
        presenter=ReminderListPresenter(store),
        flags=OnboardingFlags(preferences),
        questions=tuple(questions),
    )


def _to_pydantic(reminder: Reminder) -> PydanticReminder:
    return PydanticReminder(**reminder.to_dict())


def _state(request: Request) -> PlannerState:
    return request.app.state.planner


def create_app(
    preferences: t.Optional[Preferences] = None,
    questions: t.Optional[t.Sequence[OnboardingQuestion]] = None,
) -> FastAPI:
    """Create the planner service app.

    :param preferences: Backing document; defaults to ``PLANNER_DATA_FILE``.
    :param questions: Onboarding catalog; defaults to the bundled questions.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the planner state on startup; a bad catalog fails startup."""
        prefs = preferences if preferences is not None else Preferences(settings.PLANNER_DATA_FILE or None)
        app.state.planner = build_state(prefs, questions)
        logger.info("Planner service ready with %d questions", len(app.state.planner.questions))
        yield

    app = FastAPI(
        title="Planner Service",
        description="REST API for business reminders and onboarding",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {"status": "healthy", "service": "planner-service"}

    @app.post("/reminders", response_model=PydanticReminder)
    def create_reminder(body: CreateReminderRequest, request: Request) -> PydanticReminder:
        """Create a single reminder."""
        try:
            reminder = _state(request).store.create_reminder(
                title=body.title,
                due_date=body.due_date,
                description=body.description,
                reminder_type=ReminderType(body.reminder_type),
                priority=Priority(body.priority),
                add_to_calendar=body.add_to_calendar,
                notify=body.notify,
                recurrence=RecurrenceRule(body.recurrence) if body.recurrence else None,
            )
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _to_pydantic(reminder)

    @app.get("/reminders", response_model=PydanticReminderSections)
    def list_reminders(request: Request) -> PydanticReminderSections:
        """Active and completed reminders, each in display order."""
        sections = _state(request).presenter.sections
        return PydanticReminderSections(
            active=[_to_pydantic(r) for r in sections.active],
            completed=[_to_pydantic(r) for r in sections.completed],
        )

    @app.get("/reminders/upcoming", response_model=list[PydanticReminder])
    def upcoming_reminders(request: Request, days: int = 7) -> list[PydanticReminder]:
        """Incomplete reminders due within the next ``days`` days."""
        return [_to_pydantic(r) for r in _state(request).store.upcoming_reminders(days=days)]

    @app.get("/reminders/overdue", response_model=list[PydanticReminder])
    def overdue_reminders(request: Request) -> list[PydanticReminder]:
        """Incomplete reminders already past their due date."""
        return [_to_pydantic(r) for r in _state(request).store.overdue_reminders()]

    @app.get("/reminders/show", response_model=ShowRemindersResponse)
    def show_reminders(request: Request) -> ShowRemindersResponse:
        """Formatted table view of the reminder center."""
        formatted = format_reminder_sections(_state(request).presenter.sections)
        return ShowRemindersResponse(formatted_reminders=formatted)

    @app.post("/reminders/{reminder_id}/complete", response_model=ReminderCommandResponse)
    def complete_reminder(reminder_id: str, request: Request) -> ReminderCommandResponse:
        """Mark a reminder completed; unknown ids are reported, not rejected."""
        reminder = _state(request).store.complete_reminder(reminder_id)
        return ReminderCommandResponse(
            id=reminder_id,
            applied=reminder is not None,
            reminder=_to_pydantic(reminder) if reminder else None,
        )

    @app.delete("/reminders/{reminder_id}", response_model=ReminderCommandResponse)
    def delete_reminder(reminder_id: str, request: Request) -> ReminderCommandResponse:
        """Delete a reminder permanently; unknown ids are reported, not rejected."""
        removed = _state(request).store.delete_reminder(reminder_id)
        return ReminderCommandResponse(id=reminder_id, applied=removed)

    @app.get("/onboarding/questions", response_model=list[PydanticOnboardingQuestion])
    def onboarding_questions(request: Request) -> list[PydanticOnboardingQuestion]:
        """The static onboarding catalog, in order."""
        return [
            PydanticOnboardingQuestion(id=q.id, text=q.text, options=list(q.options))
            for q in _state(request).questions
        ]

    @app.get("/onboarding/status", response_model=OnboardingStatusResponse)
    def onboarding_status(request: Request) -> OnboardingStatusResponse:
        flags = _state(request).flags
        return OnboardingStatusResponse(
            has_completed_onboarding=flags.has_completed_onboarding,
            answers=flags.answers,
        )

    @app.post("/onboarding/complete", response_model=OnboardingStatusResponse)
    def complete_onboarding(body: CompleteOnboardingRequest, request: Request) -> OnboardingStatusResponse:
        """
        Replay a whole questionnaire through the onboarding flow.

        Every question needs at least one selected option; the flag is only
        written once the last question is answered. A completed questionnaire
        is never replayed.
        """
        state = _state(request)
        if state.flags.has_completed_onboarding:
            raise HTTPException(status_code=409, detail="Onboarding has already been completed")

        flow = OnboardingFlow(state.questions, state.flags)
        while flow.status is FlowStatus.IN_PROGRESS:
            question = flow.current_question
            try:
                for option_index in body.selections.get(question.id, []):
                    flow.select(option_index)
                if question.id in body.custom_answers:
                    flow.describe_other(body.custom_answers[question.id])
            except (IndexError, ValueError) as e:
                raise HTTPException(status_code=422, detail=str(e))
            if not flow.can_advance:
                raise HTTPException(
                    status_code=422,
                    detail=f"Question '{question.id}' needs at least one selected option",
                )
            flow.advance()
        return OnboardingStatusResponse(
            has_completed_onboarding=state.flags.has_completed_onboarding,
            answers=state.flags.answers,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    setup_logging(settings.PLANNER_LOG_LEVEL)
    uvicorn.run(app, host="0.0.0.0", port=settings.PLANNER_SERVICE_PORT)

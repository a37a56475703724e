# -*- coding: utf-8 -*-
"""Tests for the planner REST service."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from onboarding.models import OnboardingQuestion
from services.planner_service.app import create_app
from storage.preferences import Preferences

QUESTIONS = [
    OnboardingQuestion(id="experience", text="Experience?", options=("Beginner", "Advanced")),
    OnboardingQuestion(id="goal", text="Goal?", options=("Income", "Brand", "Impact")),
]


@pytest.fixture
def client():
    app = create_app(Preferences(), QUESTIONS)
    with TestClient(app) as test_client:
        yield test_client


def _iso(dt: datetime) -> str:
    return dt.isoformat()


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_health(client) -> None:
    response = client.get("/health")
    assert response.json() == {"status": "healthy", "service": "planner-service"}


def test_create_and_list_sections(client) -> None:
    base = datetime(2025, 11, 7, 9, 0, tzinfo=timezone.utc)
    late = client.post("/reminders", json={"title": "Late", "due_date": _iso(base + timedelta(days=2))}).json()
    early = client.post("/reminders", json={
        "title": "Call supplier",
        "description": "re: invoice",
        "due_date": _iso(base + timedelta(days=1)),
        "priority": "high",
        "reminder_type": "followup",
    }).json()

    assert early["message"] == "re: invoice"
    assert early["priority"] == "high"
    assert _parse(early["scheduled_date"]) == base + timedelta(days=1)

    client.post(f"/reminders/{late['id']}/complete")
    sections = client.get("/reminders").json()

    assert [r["id"] for r in sections["active"]] == [early["id"]]
    assert [r["id"] for r in sections["completed"]] == [late["id"]]
    assert sections["completed"][0]["completed_at"] is not None


def test_blank_title_rejected(client) -> None:
    response = client.post("/reminders", json={"title": "  ", "due_date": _iso(datetime.now(timezone.utc))})

    assert response.status_code == 422
    assert client.get("/reminders").json() == {"active": [], "completed": []}


def test_unknown_ids_are_noops(client) -> None:
    completed = client.post("/reminders/missing/complete")
    deleted = client.delete("/reminders/missing")

    assert completed.status_code == 200
    assert completed.json() == {"id": "missing", "applied": False, "reminder": None}
    assert deleted.json() == {"id": "missing", "applied": False, "reminder": None}


def test_complete_twice_and_delete(client) -> None:
    created = client.post("/reminders", json={"title": "Pay rent", "due_date": _iso(datetime.now(timezone.utc))}).json()

    first = client.post(f"/reminders/{created['id']}/complete").json()
    second = client.post(f"/reminders/{created['id']}/complete").json()
    assert first["applied"] is True and second["applied"] is True
    assert first["reminder"]["completed_at"] == second["reminder"]["completed_at"]

    assert client.delete(f"/reminders/{created['id']}").json()["applied"] is True
    assert client.delete(f"/reminders/{created['id']}").json()["applied"] is False


def test_recurring_reminder_via_api(client) -> None:
    due = datetime(2025, 1, 31, 12, 0, tzinfo=timezone.utc)
    created = client.post("/reminders", json={
        "title": "Invoice clients", "due_date": _iso(due), "recurrence": "monthly",
    }).json()

    client.post(f"/reminders/{created['id']}/complete")
    active = client.get("/reminders").json()["active"]

    assert len(active) == 1
    assert _parse(active[0]["scheduled_date"]) == datetime(2025, 2, 28, 12, 0, tzinfo=timezone.utc)


def test_upcoming_and_overdue(client) -> None:
    now = datetime.now(timezone.utc)
    client.post("/reminders", json={"title": "Past", "due_date": _iso(now - timedelta(days=1))})
    client.post("/reminders", json={"title": "Soon", "due_date": _iso(now + timedelta(days=1))})
    client.post("/reminders", json={"title": "Far", "due_date": _iso(now + timedelta(days=20))})

    assert [r["title"] for r in client.get("/reminders/overdue").json()] == ["Past"]
    assert [r["title"] for r in client.get("/reminders/upcoming").json()] == ["Soon"]
    assert [r["title"] for r in client.get("/reminders/upcoming", params={"days": 30}).json()] == ["Soon", "Far"]


def test_show_reminders(client) -> None:
    assert client.get("/reminders/show").json() == {"formatted_reminders": "No reminders found."}

    client.post("/reminders", json={"title": "Pitch deck", "due_date": "2025-11-10T14:30:00+00:00"})
    text = client.get("/reminders/show").json()["formatted_reminders"]

    assert "ACTIVE REMINDERS" in text
    assert "Pitch deck" in text
    assert "Mon 11/10 2:30 PM" in text
    assert "Total: 1 active, 0 completed reminder(s)" in text


def test_onboarding_questions_and_status(client) -> None:
    questions = client.get("/onboarding/questions").json()

    assert [q["id"] for q in questions] == ["experience", "goal"]
    assert questions[1]["options"] == ["Income", "Brand", "Impact"]
    assert client.get("/onboarding/status").json() == {"has_completed_onboarding": False, "answers": {}}


def test_complete_onboarding(client) -> None:
    response = client.post("/onboarding/complete", json={"selections": {"experience": [0], "goal": [0, 2]}})

    assert response.status_code == 200
    assert response.json() == {
        "has_completed_onboarding": True,
        "answers": {"experience": "Beginner", "goal": "Income, Impact"},
    }
    assert client.get("/onboarding/status").json()["has_completed_onboarding"] is True


def test_complete_onboarding_requires_every_answer(client) -> None:
    missing = client.post("/onboarding/complete", json={"selections": {"experience": [1]}})
    out_of_range = client.post("/onboarding/complete", json={"selections": {"experience": [5], "goal": [0]}})

    assert missing.status_code == 422
    assert "goal" in missing.json()["detail"]
    assert out_of_range.status_code == 422
    assert client.get("/onboarding/status").json()["has_completed_onboarding"] is False


def test_empty_catalog_fails_startup() -> None:
    from onboarding.models import OnboardingConfigurationError

    app = create_app(Preferences(), questions=[])
    with pytest.raises(OnboardingConfigurationError):
        with TestClient(app):
            pass


def test_completed_onboarding_is_not_replayed(client) -> None:
    client.post("/onboarding/complete", json={"selections": {"experience": [0], "goal": [0]}})

    again = client.post("/onboarding/complete", json={"selections": {"experience": [1], "goal": [1]}})

    assert again.status_code == 409
    assert client.get("/onboarding/status").json()["answers"] == {"experience": "Beginner", "goal": "Income"}


def test_complete_onboarding_with_free_text_answer() -> None:
    questions = [OnboardingQuestion(id="industry", text="Industry?", options=("Retail", "Other"))]
    with TestClient(create_app(Preferences(), questions)) as other_client:
        response = other_client.post("/onboarding/complete", json={
            "selections": {"industry": [1]},
            "custom_answers": {"industry": "Pet grooming"},
        })

    assert response.status_code == 200
    assert response.json()["answers"] == {"industry": "Pet grooming"}


def test_free_text_answer_needs_other_option(client) -> None:
    response = client.post("/onboarding/complete", json={
        "selections": {"experience": [0], "goal": [0]},
        "custom_answers": {"goal": "World domination"},
    })

    assert response.status_code == 422
    assert client.get("/onboarding/status").json()["has_completed_onboarding"] is False


def test_writing_endpoints_run_in_threadpool() -> None:
    """Endpoints that write the preferences file are plain functions, not coroutines."""
    import inspect

    from fastapi.routing import APIRoute

    app = create_app(Preferences(), QUESTIONS)
    endpoints = {
        (route.path, method): route.endpoint
        for route in app.routes if isinstance(route, APIRoute)
        for method in route.methods
    }

    for key in [
        ("/reminders", "POST"),
        ("/reminders/{reminder_id}/complete", "POST"),
        ("/reminders/{reminder_id}", "DELETE"),
        ("/onboarding/complete", "POST"),
    ]:
        assert not inspect.iscoroutinefunction(endpoints[key]), key

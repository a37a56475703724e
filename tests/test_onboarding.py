# -*- coding: utf-8 -*-
"""Tests for the onboarding question catalog and the questionnaire flow."""
import json
import typing as t

import pytest

from onboarding.catalog import DEFAULT_CATALOG, load_questions, parse_questions
from onboarding.flow import OnboardingFlow
from onboarding.models import (
    FlowStatus,
    OnboardingConfigurationError,
    OnboardingQuestion,
    SelectionMode,
    is_free_text_option,
)
from storage.preferences import OnboardingFlags, Preferences


class RecordingFlags:
    """Completion sink that counts how often it is written."""

    def __init__(self) -> None:
        self.calls: list[t.Optional[dict[str, str]]] = []

    def mark_onboarding_completed(self, answers: t.Optional[dict[str, str]] = None) -> None:
        self.calls.append(answers)


def make_questions(*option_counts: int) -> list[OnboardingQuestion]:
    return [
        OnboardingQuestion(
            id=f"q{i}",
            text=f"Question {i}?",
            options=tuple(f"option {i}.{j}" for j in range(count)),
        )
        for i, count in enumerate(option_counts)
    ]


def test_bundled_catalog_loads_in_order() -> None:
    questions = load_questions()

    assert [q.id for q in questions] == ["experience", "industry", "timeline", "budget", "goal"]
    assert len(questions[0].options) == 3
    assert questions[1].options[-1] == "Other"


def test_missing_catalog_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_questions(tmp_path / "nope.json")


def test_empty_catalog_fails_fast(tmp_path) -> None:
    path = tmp_path / "questions.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(OnboardingConfigurationError):
        load_questions(path)


def test_invalid_catalogs_rejected() -> None:
    with pytest.raises(OnboardingConfigurationError):
        parse_questions([{"id": "a", "text": "A?", "options": []}])
    with pytest.raises(OnboardingConfigurationError):
        parse_questions([{"id": "a", "text": "A?"}])
    with pytest.raises(OnboardingConfigurationError):
        parse_questions([
            {"id": "a", "text": "A?", "options": ["x"]},
            {"id": "a", "text": "Again?", "options": ["y"]},
        ])
    with pytest.raises(OnboardingConfigurationError):
        parse_questions({"id": "a"})


def test_custom_catalog_file(tmp_path) -> None:
    path = tmp_path / "questions.json"
    path.write_text(json.dumps([{"id": "only", "text": "Only?", "options": ["yes", "no"]}]), encoding="utf-8")

    [question] = load_questions(path)

    assert question == OnboardingQuestion(id="only", text="Only?", options=("yes", "no"))
    assert DEFAULT_CATALOG.name == "questions.json"


def test_zero_questions_is_a_configuration_error() -> None:
    with pytest.raises(OnboardingConfigurationError):
        OnboardingFlow([], RecordingFlags())


def test_initial_state() -> None:
    flow = OnboardingFlow(make_questions(3, 5), RecordingFlags())

    assert flow.current_index == 0
    assert flow.selections == [False, False, False]
    assert flow.progress == 0.5
    assert flow.status is FlowStatus.IN_PROGRESS
    assert flow.can_advance is False


def test_select_then_advance_resets_selections() -> None:
    """select(1) + advance moves on and sizes selections for the next question."""
    flow = OnboardingFlow(make_questions(3, 5, 2), RecordingFlags())

    flow.select(1)
    assert flow.selections == [False, True, False]
    flow.advance()

    assert flow.current_index == 1
    assert flow.selections == [False] * 5
    assert flow.progress == pytest.approx(2 / 3)


def test_advance_without_selection_is_noop() -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow(make_questions(3, 2), flags)

    assert flow.advance() is FlowStatus.IN_PROGRESS

    assert flow.current_index == 0
    assert flow.selections == [False, False, False]
    assert flags.calls == []


@pytest.mark.parametrize("total", [1, 2, 5, 10])
def test_last_question_completes_exactly_once(total: int) -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow(make_questions(*([2] * total)), flags)

    for _ in range(total):
        flow.select(0)
        flow.advance()

    assert flow.status is FlowStatus.COMPLETED
    assert len(flags.calls) == 1

    flow.select(1)
    flow.advance()
    assert len(flags.calls) == 1
    assert flow.current_index == total - 1


def test_additive_selection_keeps_previous_choices() -> None:
    flow = OnboardingFlow(make_questions(4), RecordingFlags())

    flow.select(0)
    flow.select(2)
    flow.select(2)

    assert flow.selections == [True, False, True, False]


def test_single_selection_mode_is_exclusive() -> None:
    flow = OnboardingFlow(make_questions(3), RecordingFlags(), selection_mode=SelectionMode.SINGLE)

    flow.select(0)
    flow.select(2)

    assert flow.selections == [False, False, True]


def test_toggle_selection_mode_flips() -> None:
    flow = OnboardingFlow(make_questions(3), RecordingFlags(), selection_mode=SelectionMode.TOGGLE)

    flow.select(1)
    flow.select(1)

    assert flow.selections == [False, False, False]
    assert flow.can_advance is False


def test_select_out_of_range() -> None:
    flow = OnboardingFlow(make_questions(3), RecordingFlags())

    with pytest.raises(IndexError):
        flow.select(3)
    with pytest.raises(IndexError):
        flow.select(-1)


def test_answers_recorded_per_question() -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow(make_questions(3, 3), flags)

    flow.select(0)
    flow.select(2)
    flow.advance()
    flow.select(1)
    flow.advance()

    assert flags.calls == [{"q0": "option 0.0, option 0.2", "q1": "option 1.1"}]


def test_dismiss_persists_nothing() -> None:
    preferences = Preferences()
    flags = OnboardingFlags(preferences)
    flow = OnboardingFlow(make_questions(2, 2), flags)

    flow.select(0)
    flow.advance()
    flow.dismiss()

    assert flow.status is FlowStatus.DISMISSED
    assert flags.has_completed_onboarding is False
    flow.select(0)
    assert flow.advance() is FlowStatus.DISMISSED
    assert flags.has_completed_onboarding is False


def test_completion_writes_persisted_flag(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    flow = OnboardingFlow(load_questions(), OnboardingFlags(Preferences(path)))

    while flow.status is FlowStatus.IN_PROGRESS:
        flow.select(0)
        flow.advance()

    reloaded = OnboardingFlags(Preferences(path))
    assert reloaded.has_completed_onboarding is True
    assert reloaded.answers["experience"] == "Beginner - Just starting out"
    assert reloaded.answers["goal"] == "Generate income"


def _industry_question() -> OnboardingQuestion:
    return OnboardingQuestion(id="industry", text="Industry?", options=("Retail", "Other"))


def test_other_option_takes_free_text_answer() -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow([_industry_question()], flags)

    flow.select(0)
    assert flow.free_text_selected is False
    flow.select(1)
    assert flow.free_text_selected is True
    flow.describe_other("  Pet grooming  ")
    flow.advance()

    assert flags.calls == [{"industry": "Retail, Pet grooming"}]


def test_blank_description_keeps_option_label() -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow([_industry_question()], flags)

    flow.select(1)
    flow.describe_other("   ")
    flow.advance()

    assert flags.calls == [{"industry": "Other"}]


def test_describe_requires_free_text_option() -> None:
    flow = OnboardingFlow([_industry_question()], RecordingFlags())

    with pytest.raises(ValueError):
        flow.describe_other("Pet grooming")

    flow.select(0)
    with pytest.raises(ValueError):
        flow.describe_other("Pet grooming")


def test_deselecting_other_drops_description() -> None:
    flags = RecordingFlags()
    flow = OnboardingFlow([_industry_question()], flags, selection_mode=SelectionMode.SINGLE)

    flow.select(1)
    flow.describe_other("Pet grooming")
    flow.select(0)
    flow.select(1)
    flow.advance()

    assert flags.calls == [{"industry": "Other"}]


def test_description_does_not_leak_into_next_question() -> None:
    flags = RecordingFlags()
    questions = [_industry_question(), OnboardingQuestion(id="goal", text="Goal?", options=("Tell us more",))]
    flow = OnboardingFlow(questions, flags)

    flow.select(1)
    flow.describe_other("Pet grooming")
    flow.advance()
    flow.select(0)
    flow.advance()

    assert flags.calls == [{"industry": "Pet grooming", "goal": "Tell us more"}]


def test_bundled_industry_other_is_free_text() -> None:
    industry = load_questions()[1]

    assert [is_free_text_option(option) for option in industry.options] == [False] * 5 + [True]

# -*- coding: utf-8 -*-
"""
Onboarding questionnaire state machine.

The flow walks a fixed, ordered list of questions. Advancing requires at least
one selected option; advancing past the last question completes the flow and
persists the completion flag once.
"""
from __future__ import annotations

import logging
import typing as t

from onboarding.models import (
    FlowStatus,
    OnboardingConfigurationError,
    OnboardingProgressState,
    OnboardingQuestion,
    SelectionMode,
    is_free_text_option,
)

logger = logging.getLogger(__name__)


class CompletionSink(t.Protocol):
    def mark_onboarding_completed(self, answers: t.Optional[dict[str, str]] = None) -> None: ...


class OnboardingFlow:
    """One questionnaire session.

    :param questions: The static question catalog, in order.
    :param flags: Receives the completion flag when the last question is answered.
    :param selection_mode: How ``select`` treats the other options.
    :raises OnboardingConfigurationError: If ``questions`` is empty.
    """

    def __init__(
        self,
        questions: t.Sequence[OnboardingQuestion],
        flags: CompletionSink,
        selection_mode: SelectionMode = SelectionMode.ADDITIVE,
    ) -> None:
        if not questions:
            raise OnboardingConfigurationError("Onboarding needs at least one question")
        self.questions = tuple(questions)
        self.flags = flags
        self.selection_mode = selection_mode
        self.answers: dict[str, str] = {}
        self.state = OnboardingProgressState(
            current_index=0,
            total_questions=len(self.questions),
            selections=self._blank_selections(0),
        )

    def _blank_selections(self, index: int) -> list[bool]:
        return [False] * len(self.questions[index].options)

    @property
    def current_question(self) -> OnboardingQuestion:
        return self.questions[self.state.current_index]

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def selections(self) -> list[bool]:
        return list(self.state.selections)

    @property
    def progress(self) -> float:
        return self.state.progress

    @property
    def status(self) -> FlowStatus:
        return self.state.status

    @property
    def is_last_question(self) -> bool:
        return self.state.current_index == len(self.questions) - 1

    @property
    def free_text_selected(self) -> bool:
        """Whether an option like "Other" is selected and may be described."""
        options = self.current_question.options
        return any(
            chosen and is_free_text_option(options[i])
            for i, chosen in enumerate(self.state.selections)
        )

    @property
    def can_advance(self) -> bool:
        return self.state.status is FlowStatus.IN_PROGRESS and any(self.state.selections)

    def select(self, option_index: int) -> None:
        """Select an option of the current question.

        :raises IndexError: If the question has no such option.
        """
        if self.state.status is not FlowStatus.IN_PROGRESS:
            return
        selections = self.state.selections
        if not 0 <= option_index < len(selections):
            raise IndexError(
                f"Question '{self.current_question.id}' has no option {option_index}"
            )

        if self.selection_mode is SelectionMode.TOGGLE:
            selections[option_index] = not selections[option_index]
        else:
            if self.selection_mode is SelectionMode.SINGLE:
                selections[:] = [False] * len(selections)
            selections[option_index] = True

        if not self.free_text_selected:
            self.state.custom_text = None

    def describe_other(self, text: str) -> None:
        """Describe the selected free-text option in the user's own words.

        The text replaces that option's label in the recorded answer; blank
        text falls back to the label.

        :raises ValueError: If no free-text option is selected.
        """
        if self.state.status is not FlowStatus.IN_PROGRESS:
            return
        if not self.free_text_selected:
            raise ValueError(
                f"Question '{self.current_question.id}' has no free-text option selected"
            )
        self.state.custom_text = text.strip() or None

    def selected_options(self) -> list[str]:
        options = self.current_question.options
        return [options[i] for i, chosen in enumerate(self.state.selections) if chosen]

    def _answer(self) -> str:
        custom = self.state.custom_text
        labels = [
            custom if custom and is_free_text_option(label) else label
            for label in self.selected_options()
        ]
        return ", ".join(labels)

    def advance(self) -> FlowStatus:
        """Move to the next question, or complete the flow from the last one.

        Does nothing while no option is selected.
        """
        if not self.can_advance:
            return self.state.status

        question = self.current_question
        self.answers[question.id] = self._answer()

        if not self.is_last_question:
            self.state.current_index += 1
            self.state.selections = self._blank_selections(self.state.current_index)
            self.state.custom_text = None
            logger.debug("Onboarding advanced to question %d", self.state.current_index)
            return self.state.status

        self.state.status = FlowStatus.COMPLETED
        self.flags.mark_onboarding_completed(dict(self.answers))
        logger.info("Onboarding completed after %d questions", len(self.questions))
        return self.state.status

    def dismiss(self) -> None:
        """Leave the questionnaire without persisting anything."""
        if self.state.status is FlowStatus.IN_PROGRESS:
            self.state.status = FlowStatus.DISMISSED

"""
Data models for the onboarding questionnaire.

This module contains the dataclasses and enumerations describing the static
questions and the progress of one questionnaire session.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from enum import Enum


class FlowStatus(Enum):
    """Lifecycle of an onboarding session."""
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DISMISSED = "DISMISSED"


class SelectionMode(Enum):
    """How tapping an option affects the other options of the question."""
    ADDITIVE = "additive"  # selecting never clears others
    SINGLE = "single"      # selecting clears the others
    TOGGLE = "toggle"      # tapping flips the option


class OnboardingConfigurationError(ValueError):
    """The question catalog cannot drive a questionnaire."""


# Option labels that ask the user to describe their own answer
FREE_TEXT_MARKERS = ("other", "something else", "tell us")


def is_free_text_option(label: str) -> bool:
    lower = label.lower()
    return any(marker in lower for marker in FREE_TEXT_MARKERS)


@dataclass(frozen=True)
class OnboardingQuestion:
    """A prompt and its ordered choice labels."""
    id: str
    text: str
    options: tuple[str, ...]


@dataclass
class OnboardingProgressState:
    """Position in the questionnaire and the selections for the current question."""
    current_index: int
    total_questions: int
    selections: list[bool] = field(default_factory=list)
    status: FlowStatus = FlowStatus.IN_PROGRESS
    custom_text: t.Optional[str] = None

    @property
    def progress(self) -> float:
        return (self.current_index + 1) / self.total_questions

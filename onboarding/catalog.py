"""Loading the static onboarding question catalog."""
from __future__ import annotations

import json
import typing as t
from pathlib import Path

from onboarding.models import OnboardingConfigurationError, OnboardingQuestion

DEFAULT_CATALOG = Path(__file__).resolve().parent / "questions.json"


def parse_questions(data: t.Any) -> tuple[OnboardingQuestion, ...]:
    """
    Build questions from decoded catalog JSON.

    Raises:
        OnboardingConfigurationError: If the catalog is empty, a question has
            no options, or ids repeat.
    """
    if not isinstance(data, list) or not data:
        raise OnboardingConfigurationError("Question catalog must be a non-empty list")

    questions = []
    seen_ids: set[str] = set()
    for position, entry in enumerate(data):
        try:
            question = OnboardingQuestion(
                id=str(entry["id"]),
                text=str(entry["text"]),
                options=tuple(str(option) for option in entry["options"]),
            )
        except (KeyError, TypeError) as e:
            raise OnboardingConfigurationError(f"Malformed question at position {position}: {e}")
        if not question.options:
            raise OnboardingConfigurationError(f"Question '{question.id}' has no options")
        if question.id in seen_ids:
            raise OnboardingConfigurationError(f"Duplicate question id '{question.id}'")
        seen_ids.add(question.id)
        questions.append(question)
    return tuple(questions)


def load_questions(path: t.Optional[t.Union[str, Path]] = None) -> tuple[OnboardingQuestion, ...]:
    """
    Load the question catalog from a JSON file.

    Args:
        path: Optional custom catalog file. Defaults to the bundled
              ``questions.json``.

    Returns:
        The questions in catalog order.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        OnboardingConfigurationError: If the catalog can't drive a questionnaire.
    """
    catalog_file = Path(path) if path else DEFAULT_CATALOG

    if not catalog_file.exists():
        raise FileNotFoundError(f"Question catalog not found: {catalog_file}")

    with open(catalog_file, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise OnboardingConfigurationError(f"Question catalog {catalog_file} is not valid JSON: {e}")
    return parse_questions(data)

# -*- coding: utf-8 -*-
"""
Key-value preferences document.

A small JSON document on disk (or in memory) holding the persisted reminder
collection and the onboarding completion flag. Every write rewrites the whole
document.
"""
from __future__ import annotations

import json
import logging
import typing as t
from pathlib import Path

logger = logging.getLogger(__name__)

HAS_COMPLETED_ONBOARDING_KEY = "hasCompletedOnboarding"
ONBOARDING_ANSWERS_KEY = "onboarding_answers"
REMINDERS_KEY = "app_reminders"


class Preferences:
    """JSON-backed key-value store.

    :param path: File to persist to. ``None`` keeps the values in memory only.
    """

    def __init__(self, path: t.Optional[t.Union[str, Path]] = None) -> None:
        self.path = Path(path) if path else None
        self._values: dict[str, t.Any] = {}
        if self.path is not None and self.path.exists():
            self._values = self._read()

    def _read(self) -> dict[str, t.Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Preferences file {self.path} is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Preferences file {self.path} must hold a JSON object")
        return data

    def _write(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._values, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)
        logger.debug("Wrote preferences to %s", self.path)

    def get(self, key: str, default: t.Any = None) -> t.Any:
        return self._values.get(key, default)

    def get_bool(self, key: str) -> bool:
        return bool(self._values.get(key, False))

    def set(self, key: str, value: t.Any) -> None:
        self._values[key] = value
        self._write()

    def remove(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._write()


class OnboardingFlags:
    """The persisted ``hasCompletedOnboarding`` flag and the saved answers."""

    def __init__(self, preferences: Preferences) -> None:
        self.preferences = preferences

    @property
    def has_completed_onboarding(self) -> bool:
        return self.preferences.get_bool(HAS_COMPLETED_ONBOARDING_KEY)

    @property
    def answers(self) -> dict[str, str]:
        return dict(self.preferences.get(ONBOARDING_ANSWERS_KEY, {}))

    def mark_onboarding_completed(self, answers: t.Optional[dict[str, str]] = None) -> None:
        """Persist the completion flag, plus the answers when given."""
        if answers is not None:
            self.preferences.set(ONBOARDING_ANSWERS_KEY, dict(answers))
        self.preferences.set(HAS_COMPLETED_ONBOARDING_KEY, True)
        logger.info("Onboarding marked as completed")

    def reset(self) -> None:
        self.preferences.remove(ONBOARDING_ANSWERS_KEY)
        self.preferences.remove(HAS_COMPLETED_ONBOARDING_KEY)

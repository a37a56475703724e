# -*- coding: utf-8 -*-
"""
App navigation state.

Which top-level screen is showing, which tab is selected, and which sheet (if
any) is presented over the main screen.
"""
from __future__ import annotations

import logging
import typing as t
from enum import Enum

from storage.preferences import OnboardingFlags

logger = logging.getLogger(__name__)


class AppScreen(Enum):
    LAUNCH = "launch"
    ONBOARDING = "onboarding"
    MAIN = "main"


class Tab(Enum):
    HOME = "home"
    IDEAS = "ideas"
    JOURNEY = "journey"
    PROGRESS = "progress"
    ASSISTANT = "assistant"

    @property
    def title(self) -> str:
        return "AI" if self is Tab.ASSISTANT else self.value.capitalize()


class Sheet(Enum):
    REMINDER_CENTER = "reminder_center"
    REMINDER_COMPOSER = "reminder_composer"
    ADD_REMINDER = "add_reminder"


class NavigationError(RuntimeError):
    """A navigation action was requested from a screen that doesn't allow it."""


class AppShell:
    """Screen / tab / sheet state with explicit transitions."""

    def __init__(self, flags: OnboardingFlags) -> None:
        self.flags = flags
        self.screen = AppScreen.LAUNCH
        self.tab = Tab.HOME
        self.sheet: t.Optional[Sheet] = None

    def _require(self, screen: AppScreen, action: str) -> None:
        if self.screen is not screen:
            raise NavigationError(f"Cannot {action} while on the {self.screen.value} screen")

    def finish_launch(self) -> AppScreen:
        """Leave the launch screen: onboarding on first run, otherwise main."""
        self._require(AppScreen.LAUNCH, "finish launch")
        if self.flags.has_completed_onboarding:
            self.screen = AppScreen.MAIN
        else:
            self.screen = AppScreen.ONBOARDING
        logger.debug("Launch finished, showing %s", self.screen.value)
        return self.screen

    def finish_onboarding(self) -> AppScreen:
        """Leave the questionnaire (completed or dismissed) for the main screen."""
        self._require(AppScreen.ONBOARDING, "finish onboarding")
        self.screen = AppScreen.MAIN
        self.tab = Tab.HOME
        return self.screen

    def select_tab(self, tab: Tab) -> None:
        self._require(AppScreen.MAIN, "select a tab")
        self.tab = tab

    def present_sheet(self, sheet: Sheet) -> None:
        self._require(AppScreen.MAIN, "present a sheet")
        if self.sheet is not None:
            raise NavigationError(f"Sheet {self.sheet.value} is already presented")
        self.sheet = sheet

    def dismiss_sheet(self) -> None:
        # Dismissing with nothing presented is harmless
        self.sheet = None

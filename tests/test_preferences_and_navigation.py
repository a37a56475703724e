# -*- coding: utf-8 -*-
"""Tests for the preferences document and the app navigation shell."""
import json

import pytest

from navigation.shell import AppScreen, AppShell, NavigationError, Sheet, Tab
from storage.preferences import HAS_COMPLETED_ONBOARDING_KEY, OnboardingFlags, Preferences


def test_in_memory_preferences_write_no_file(tmp_path) -> None:
    preferences = Preferences()
    preferences.set("key", 1)

    assert preferences.get("key") == 1
    assert list(tmp_path.iterdir()) == []


def test_preferences_persist_as_json(tmp_path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    Preferences(path).set("answer", {"a": 1})

    assert json.loads(path.read_text(encoding="utf-8")) == {"answer": {"a": 1}}
    assert Preferences(path).get("answer") == {"a": 1}


def test_corrupt_preferences_file_is_reported(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        Preferences(path)


def test_onboarding_flags_default_false_and_reset() -> None:
    flags = OnboardingFlags(Preferences())
    assert flags.has_completed_onboarding is False
    assert flags.answers == {}

    flags.mark_onboarding_completed({"goal": "Build a brand"})
    assert flags.has_completed_onboarding is True
    assert flags.preferences.get(HAS_COMPLETED_ONBOARDING_KEY) is True

    flags.reset()
    assert flags.has_completed_onboarding is False
    assert flags.answers == {}


def test_first_launch_goes_to_onboarding_then_main() -> None:
    shell = AppShell(OnboardingFlags(Preferences()))
    assert shell.screen is AppScreen.LAUNCH

    assert shell.finish_launch() is AppScreen.ONBOARDING
    assert shell.finish_onboarding() is AppScreen.MAIN
    assert shell.tab is Tab.HOME


def test_returning_user_skips_onboarding() -> None:
    flags = OnboardingFlags(Preferences())
    flags.mark_onboarding_completed()

    shell = AppShell(flags)

    assert shell.finish_launch() is AppScreen.MAIN


def test_tabs_and_sheets_only_on_main_screen() -> None:
    shell = AppShell(OnboardingFlags(Preferences()))

    with pytest.raises(NavigationError):
        shell.select_tab(Tab.JOURNEY)
    with pytest.raises(NavigationError):
        shell.present_sheet(Sheet.REMINDER_COMPOSER)
    with pytest.raises(NavigationError):
        shell.finish_onboarding()

    shell.finish_launch()
    shell.finish_onboarding()
    shell.select_tab(Tab.PROGRESS)
    shell.present_sheet(Sheet.REMINDER_CENTER)

    assert shell.tab is Tab.PROGRESS
    assert shell.sheet is Sheet.REMINDER_CENTER
    with pytest.raises(NavigationError):
        shell.present_sheet(Sheet.ADD_REMINDER)

    shell.dismiss_sheet()
    shell.dismiss_sheet()
    assert shell.sheet is None
    with pytest.raises(NavigationError):
        shell.finish_launch()


def test_tab_titles() -> None:
    assert [tab.title for tab in Tab] == ["Home", "Ideas", "Journey", "Progress", "AI"]

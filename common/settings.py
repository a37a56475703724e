# -*- coding: utf-8 -*-
"""
Environment-driven configuration for the planner packages.

Every value is read once at import time, with a default suitable for local
development.
"""
from __future__ import annotations

import os


def _parse_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on", "y")


# Path to the JSON preferences document (reminders + onboarding flag).
# Empty means keep everything in memory.
PLANNER_DATA_FILE = os.getenv("PLANNER_DATA_FILE", "")

# Optional override for the onboarding question catalog
PLANNER_QUESTIONS_FILE = os.getenv("PLANNER_QUESTIONS_FILE", "")

# Service URL - used by the MCP wrapper and the CLI
PLANNER_SERVICE_URL = os.getenv("PLANNER_SERVICE_URL", "http://localhost:8004")
PLANNER_SERVICE_PORT = int(os.getenv("PLANNER_SERVICE_PORT", "8004"))

PLANNER_LOG_LEVEL = os.getenv("PLANNER_LOG_LEVEL", "INFO")

# Whether the local calendar grants access when asked
PLANNER_CALENDAR_ACCESS = _parse_bool("PLANNER_CALENDAR_ACCESS", True)

# Default offset for a new reminder's due date, in minutes
DEFAULT_REMINDER_OFFSET_MINUTES = int(os.getenv("DEFAULT_REMINDER_OFFSET_MINUTES", "60"))

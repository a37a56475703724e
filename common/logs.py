# -*- coding: utf-8 -*-
"""Logging setup shared by the service, the gateway and the CLI."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route stdlib logging through rich.

    Safe to call more than once; only the first call installs the handler.

    :param level: Root log level name (e.g. ``"DEBUG"``).
    :param console: Optional rich console to render to (defaults to stderr).
    """
    global _configured
    if _configured:
        logging.getLogger().setLevel(level.upper())
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    _configured = True

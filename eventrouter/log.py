"""Logging setup for scripts and the CLI.

Library code only ever calls ``logging.getLogger``; installing handlers is
left to the application.  ``configure_logging`` is the convenience used by
the ``eventrouter`` command.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Install a ``RichHandler`` on the ``eventrouter`` logger at *level*."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("eventrouter")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(
        RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=True)
    )
    root.setLevel(level)

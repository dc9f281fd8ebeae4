"""Spinner shown while a request to the model is in flight."""
from __future__ import annotations

from typing import Optional

from rich.console import Console
from yaspin import yaspin

from .ansi import console as default_console


class Spinner:
    """Display a small spinner next to a prefix while work is done.

    The spinner only animates when *console* is attached to a terminal;
    otherwise (pipes, tests) entering and leaving the context is a no-op.
    """

    def __init__(self, text: str = "", console: Optional[Console] = None):
        self._console = console or default_console
        self._spinner = yaspin(text=text, side="right")
        self._started = False

    def start(self) -> None:
        if self._started or not self._console.is_terminal:
            return
        self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._spinner.stop()
        self._started = False

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

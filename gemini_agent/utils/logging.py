"""Logging setup: one :class:`rich.logging.RichHandler` on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route the root logger through rich at *level*.

    Library loggers (``google_genai``, ``httpx``) are held at WARNING unless a
    more verbose level was asked for, so DEBUG shows their traffic too.
    """
    numeric = logging.getLevelName(level.upper())

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    if numeric > logging.DEBUG:
        for name in ("google_genai", "httpx", "httpcore"):
            logging.getLogger(name).setLevel(max(numeric, logging.WARNING))

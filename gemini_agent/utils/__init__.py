from .ansi import BANNER_STYLE, ERROR_LABEL, console
from .logging import configure_logging
from .spinner import Spinner

__all__ = [
    "BANNER_STYLE",
    "ERROR_LABEL",
    "console",
    "configure_logging",
    "Spinner",
]

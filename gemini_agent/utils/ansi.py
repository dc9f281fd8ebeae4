"""Shared :mod:`rich` console and the styles the chat prints with.

Rich drops colour by itself when ``NO_COLOR`` is set.
"""

from rich.console import Console


console = Console()

BANNER_STYLE = "bold magenta"
ERROR_LABEL = "[bold red]error[/]"

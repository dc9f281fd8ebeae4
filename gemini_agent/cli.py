"""Terminal chat loop for a Gemini agent with local function calling."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import readline  # noqa: F401 – side-effect: history & line editing
from typing import List, Optional

from google import genai
from google.genai import errors
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .core import (
    ChatSession,
    ConfigError,
    ToolRegistry,
    USAGE,
    WELCOME_MESSAGE,
    get_config,
    response_text,
)
from .utils import (
    BANNER_STYLE,
    ERROR_LABEL,
    Spinner,
    configure_logging,
    console as default_console,
)

logger = logging.getLogger(__name__)

EXIT_COMMAND = ".exit"
HELP_ARGS = ("--help", "-h", "help")

FIRST_PROMPT = f"{WELCOME_MESSAGE}\n\n> "
EMPTY_PROMPT = "> "
NEXT_PROMPT = "\n> "
RETRY_PROMPT = "\nSomething went wrong, try asking again\n\n> "


class AgentCLI:
    """Read a line, run it through the model and its tool calls, print, repeat."""

    def __init__(
        self,
        session: ChatSession,
        registry: ToolRegistry,
        console: Optional[Console] = None,
    ):
        self.session = session
        self.registry = registry
        self.console = console or default_console

    # ---------------- Output ----------------

    def emit(self, response) -> None:
        """Print the text of *response*, which may be empty."""
        self.console.print(
            response_text(response), markup=False, highlight=False, end=""
        )

    def report_error(self, exc: Exception) -> None:
        if isinstance(exc, errors.APIError):
            message = f"Gemini API error: {exc}"
        else:
            message = str(exc) or exc.__class__.__name__
        self.console.print(f"\n[{ERROR_LABEL}] {escape(message)}")

    # ---------------- Model round-trips ----------------

    async def _send(self, message):
        with Spinner(console=self.console):
            return await self.session.send_message(message)

    async def handle_message(self, line: str) -> None:
        """Send one user line, then answer tool calls until the model stops asking."""
        response = await self._send(line)
        self.emit(response)

        calls = response.function_calls or []
        while calls:
            logger.info("Model requested %d tool call(s)", len(calls))
            results = await self.registry.dispatch(calls)
            response = await self._send(results)
            self.emit(response)
            calls = response.function_calls or []

    # ---------------- Interaction loop ---------------

    def repl(self) -> None:
        """Run the interactive read–eval–print-loop until ``.exit``.

        Lines are read on the calling thread; each one is then handled to
        completion on a single event loop that lives as long as the REPL.
        """
        self.console.print(Panel.fit("Gemini Agent", style=BANNER_STYLE))

        loop = asyncio.new_event_loop()
        try:
            self._read_eval_loop(loop)
        finally:
            loop.close()
        self.console.print("Bye!")

    def _read_eval_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        prompt = FIRST_PROMPT
        while True:
            try:
                line = self.console.input(prompt)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break

            if line.strip().lower() == EXIT_COMMAND:
                break

            if not line.strip():
                prompt = EMPTY_PROMPT
                continue

            try:
                loop.run_until_complete(self.handle_message(line))
                prompt = NEXT_PROMPT
            except Exception as exc:
                logger.debug("Failed to handle %r", line, exc_info=True)
                self.report_error(exc)
                prompt = RETRY_PROMPT


# ---------------------------------------------------------------------------
# Entrypoint helpers (keeping it separate simplifies __main__ handling)
# ---------------------------------------------------------------------------


def _parse_args(argv: List[str]) -> argparse.Namespace:
    # Help flags are handled before parsing so usage goes to stderr.
    parser = argparse.ArgumentParser(prog="gemini-agent", add_help=False)
    parser.add_argument("--gemini-api-key", dest="gemini_api_key")
    parser.add_argument("--model")
    parser.add_argument("--log-level", dest="log_level")
    return parser.parse_args(argv)


def run_cli(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else list(argv)

    if any(arg in HELP_ARGS for arg in args):
        sys.stderr.write(f"{USAGE}\n")
        return

    try:
        config = get_config(vars(_parse_args(args)))
    except ConfigError as exc:
        sys.stderr.write(f"{exc}\n\n{USAGE}\n")
        return

    configure_logging(config.log_level)

    client = genai.Client(api_key=config.gemini_api_key)
    registry = ToolRegistry(client, model=config.model)
    session = ChatSession(client, registry, model=config.model)

    try:
        AgentCLI(session, registry).repl()
    except KeyboardInterrupt:
        default_console.print("\n[interrupted]", markup=False)


if __name__ == "__main__":  # pragma: no cover
    run_cli()

"""Startup configuration: command-line options with environment fallback."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_LOG_LEVEL = "WARNING"

USAGE = """
gemini-agent - A CLI example of an LLM agent powered by Gemini

USAGE:
  $ gemini-agent [OPTIONS]

OPTIONS:
  --gemini-api-key      The API key for the Gemini API
  --model               The Gemini model to chat with (default: gemini-2.0-flash)
  --log-level           Log verbosity: DEBUG, INFO, WARNING or ERROR (default: WARNING)

You can also provide any of the options as environment variables. Command line
options override environment variables.

ENVIRONMENT VARIABLES:
  GEMINI_API_KEY              The API key for the Gemini API
  GEMINI_MODEL                The Gemini model to chat with
  GEMINI_AGENT_LOG_LEVEL      Log verbosity

Type .exit at the prompt to leave the chat.
""".strip()

# option name -> environment variable
_ENV_FALLBACKS = {
    "gemini_api_key": "GEMINI_API_KEY",
    "model": "GEMINI_MODEL",
    "log_level": "GEMINI_AGENT_LOG_LEVEL",
}

_REQUIRED = ("gemini_api_key",)


class ConfigError(Exception):
    """Raised when the configuration is incomplete or invalid."""


@dataclass(frozen=True)
class Config:
    gemini_api_key: str
    model: str = DEFAULT_MODEL
    log_level: str = DEFAULT_LOG_LEVEL


def _resolve(
    key: str, options: Mapping[str, Optional[str]], environ: Mapping[str, str]
) -> Optional[str]:
    value = options.get(key)
    if value is None:
        value = environ.get(_ENV_FALLBACKS[key])
    if value is None or not value.strip():
        return None
    return value.strip()


def get_config(
    options: Mapping[str, Optional[str]],
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Build a :class:`Config` from parsed *options*, falling back to *environ*.

    *options* is keyed by the dataclass field names (``gemini_api_key``,
    ``model``, ``log_level``), which is what ``vars()`` of the argparse
    namespace gives. Raises :class:`ConfigError` naming every required value
    that is missing or blank.
    """
    if environ is None:
        environ = os.environ

    values = {key: _resolve(key, options, environ) for key in _ENV_FALLBACKS}

    missing = [key for key in _REQUIRED if values[key] is None]
    if missing:
        raise ConfigError(f"Missing configuration values: {', '.join(missing)}")

    log_level = (values["log_level"] or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Invalid log level: {values['log_level']}")

    return Config(
        gemini_api_key=values["gemini_api_key"],
        model=values["model"] or DEFAULT_MODEL,
        log_level=log_level,
    )

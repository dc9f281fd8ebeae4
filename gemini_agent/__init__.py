"""Terminal chat agent powered by Gemini.

The model can call four local tools while it answers: exact addition and
multiplication, the current date and time, and a web search that is itself a
search-grounded Gemini request.

Run `gemini-agent` or `python -m gemini_agent`; type `.exit` to leave.
"""
# Re-export useful symbols for convenience
from .core import (
    ChatSession,
    Config,
    ConfigError,
    ToolKind,
    ToolRegistry,
    get_config,
)
from .cli import AgentCLI, run_cli

__all__ = [
    "ChatSession",
    "Config",
    "ConfigError",
    "ToolKind",
    "ToolRegistry",
    "get_config",
    "AgentCLI",
    "run_cli",
]

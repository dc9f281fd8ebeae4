from .config import Config, ConfigError, DEFAULT_MODEL, USAGE, get_config
from .session import ChatSession, SYSTEM_PROMPT, WELCOME_MESSAGE, response_text
from .tools import ToolKind, ToolRegistry, ToolArgumentError, UnknownToolError

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_MODEL",
    "USAGE",
    "get_config",
    "ChatSession",
    "SYSTEM_PROMPT",
    "WELCOME_MESSAGE",
    "response_text",
    "ToolKind",
    "ToolRegistry",
    "ToolArgumentError",
    "UnknownToolError",
]

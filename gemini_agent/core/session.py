"""The single Gemini chat session the CLI talks to."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AsyncIterator, List, Union

from google import genai
from google.genai import types

from .config import DEFAULT_MODEL

if TYPE_CHECKING:
    from .tools import ToolRegistry

logger = logging.getLogger(__name__)

# Fixed for the lifetime of the session.
SYSTEM_PROMPT = (
    "You are a helpful assistant running in a terminal (CLI) environment. "
    "Keep answers concise and readable as plain text. You have tools for "
    "exact arithmetic, for the current date and time, and for searching the "
    "web. Always use the add and multiply tools instead of doing arithmetic "
    "yourself, call getDateAndTime whenever the answer depends on today's "
    "date, and call callSearchAgent for recent events or facts you are not "
    "sure about. Mention briefly when an answer comes from a web search."
)

WELCOME_MESSAGE = (
    "Hi! I'm a Gemini agent. I can do maths, tell the time and search the web. "
    "Ask me anything, or type .exit to quit."
)

GENERATION_SETTINGS = {
    "temperature": 1,
    "top_p": 0.95,
    "top_k": 64,
    "max_output_tokens": 8192,
    "response_mime_type": "text/plain",
}

Message = Union[str, List[types.Part]]


def build_chat_config(tools: List[types.Tool]) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_PROMPT,
        tools=tools,
        **GENERATION_SETTINGS,
    )


def response_text(response: types.GenerateContentResponse) -> str:
    """Return the text parts of the first candidate joined together.

    Function-call and thought parts are skipped; a response with no text gives
    ``""``.
    """
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return ""
    texts: List[str] = []
    for part in candidates[0].content.parts or []:
        if part.thought:
            continue
        if isinstance(part.text, str):
            texts.append(part.text)
    return "".join(texts)


class ChatSession:
    """Thin wrapper around one ``client.aio.chats`` conversation.

    Every call appends to the same remote conversation in the order it is
    made. Errors from the SDK propagate; nothing is retried.
    """

    def __init__(
        self,
        client: genai.Client,
        registry: "ToolRegistry",
        model: str = DEFAULT_MODEL,
    ):
        self.model = model
        self.config = build_chat_config(registry.tools())
        self._chat = client.aio.chats.create(model=model, config=self.config)
        logger.debug(
            "Chat session created (model=%s, tools=%s)",
            model,
            ", ".join(registry.get_tool_names()),
        )

    async def send_message(self, message: Message) -> types.GenerateContentResponse:
        """Send a user string or a batch of function-response parts."""
        return await self._chat.send_message(message)

    async def send_message_stream(self, message: Message) -> AsyncIterator[str]:
        """Send *message* and yield the reply's text as it arrives."""
        async for chunk in await self._chat.send_message_stream(message):
            text = response_text(chunk)
            if text:
                yield text

"""
Tool registry: the function declarations advertised to Gemini and the local
handlers that answer them.

The set of tools is closed. ``ToolKind`` lists every wire name the model may
call, ``declarations()`` describes each one, and ``ToolRegistry.call`` routes a
kind to its handler with one branch per member.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Sequence

from google import genai
from google.genai import types

from .config import DEFAULT_MODEL
from .session import response_text

logger = logging.getLogger(__name__)


class UnknownToolError(KeyError):
    """The model asked for a tool that is not declared."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Tool '{self.name}' not found in registry"


class ToolArgumentError(ValueError):
    """A tool call carried arguments that do not match its declaration."""


class ToolKind(str, enum.Enum):
    GET_DATE_AND_TIME = "getDateAndTime"
    ADD = "add"
    MULTIPLY = "multiply"
    CALL_SEARCH_AGENT = "callSearchAgent"

    @classmethod
    def parse(cls, name: str) -> "ToolKind":
        try:
            return cls(name)
        except ValueError:
            raise UnknownToolError(name) from None


def _number_schema(description: str) -> types.Schema:
    return types.Schema(type=types.Type.NUMBER, description=description)


def _operands_schema(description: str) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        description=description,
        required=["a", "b"],
        properties={
            "a": _number_schema("The first number"),
            "b": _number_schema("The second number"),
        },
    )


def declarations() -> List[types.FunctionDeclaration]:
    """Return one declaration per :class:`ToolKind`, in enum order."""
    return [
        types.FunctionDeclaration(
            name=ToolKind.GET_DATE_AND_TIME.value,
            description="Get the current date and time.",
        ),
        types.FunctionDeclaration(
            name=ToolKind.ADD.value,
            description="Add two numbers together. Use this for accurate addition.",
            parameters=_operands_schema("The numbers to add together"),
        ),
        types.FunctionDeclaration(
            name=ToolKind.MULTIPLY.value,
            description=(
                "Multiply two numbers together. Use this for accurate multiplication."
            ),
            parameters=_operands_schema("The numbers to multiply together"),
        ),
        types.FunctionDeclaration(
            name=ToolKind.CALL_SEARCH_AGENT.value,
            description=(
                "Perform a web search to retrieve information that you don't know "
                "or that is recent enough to be missing from your training data."
            ),
            parameters=types.Schema(
                type=types.Type.OBJECT,
                description="Query the web with these properties.",
                required=["prompt"],
                properties={
                    "prompt": types.Schema(
                        type=types.Type.STRING,
                        description="The search query",
                    ),
                },
            ),
        ),
    ]


# Nested search request: Google Search is the only tool and the model must use it.
SEARCH_CONFIG = types.GenerateContentConfig(
    tools=[types.Tool(google_search=types.GoogleSearch())],
    tool_config=types.ToolConfig(
        function_calling_config=types.FunctionCallingConfig(
            mode=types.FunctionCallingConfigMode.ANY,
        ),
    ),
)


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------


def _require_number(args: Mapping[str, Any], key: str) -> float:
    value = args.get(key)
    # bool is an int subclass but never a valid operand
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolArgumentError(f"Argument '{key}' must be a number, got {value!r}")
    return value


def _require_text(args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ToolArgumentError(f"Argument '{key}' must be a non-empty string")
    return value


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def get_date_and_time() -> Dict[str, str]:
    return {"date": datetime.now(timezone.utc).isoformat(timespec="milliseconds")}


def add(args: Mapping[str, Any]) -> Dict[str, float]:
    return {"additionResult": _require_number(args, "a") + _require_number(args, "b")}


def multiply(args: Mapping[str, Any]) -> Dict[str, float]:
    return {
        "multiplicationResult": _require_number(args, "a") * _require_number(args, "b")
    }


async def call_search_agent(
    client: genai.Client, model: str, args: Mapping[str, Any]
) -> Dict[str, str]:
    """Answer *prompt* with a one-shot, search-grounded Gemini request."""
    prompt = _require_text(args, "prompt")
    response = await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=SEARCH_CONFIG,
    )
    return {"searchResults": response_text(response)}


class ToolRegistry:
    """Declarations plus dispatch for the fixed tool set.

    *client* is the same ``genai.Client`` the chat session uses; the search
    tool makes its own request through it.
    """

    def __init__(self, client: genai.Client, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model
        self._declarations = declarations()

    def declarations(self) -> List[types.FunctionDeclaration]:
        return list(self._declarations)

    def tools(self) -> List[types.Tool]:
        """Tool list for the chat session's ``GenerateContentConfig``."""
        return [types.Tool(function_declarations=self.declarations())]

    def get_tool_names(self) -> List[str]:
        return [kind.value for kind in ToolKind]

    async def call(self, name: str, args: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Execute the tool called *name* with *args*.

        Raises:
            UnknownToolError: *name* is not a declared tool
            ToolArgumentError: *args* do not match the declaration
        """
        kind = ToolKind.parse(name)

        if kind is ToolKind.GET_DATE_AND_TIME:
            return get_date_and_time()
        elif kind is ToolKind.ADD:
            return add(args)
        elif kind is ToolKind.MULTIPLY:
            return multiply(args)
        elif kind is ToolKind.CALL_SEARCH_AGENT:
            return await call_search_agent(self.client, self.model, args)
        raise AssertionError(f"Unhandled tool kind: {kind}")

    async def _call_for_turn(self, call: types.FunctionCall) -> Dict[str, Any]:
        name = call.name or ""
        args = call.args or {}
        logger.info("Tool call: %s(%s)", name, args)
        try:
            result = await self.call(name, args)
        except UnknownToolError as e:
            # Reported back to the model as a result so it can pick a real tool.
            logger.warning("%s", e)
            return {"error": str(e)}
        logger.info("Tool result: %s -> %s", name, result)
        return result

    async def dispatch(self, calls: Sequence[types.FunctionCall]) -> List[types.Part]:
        """
        Run every function call of one model turn concurrently.

        Returns one function-response part per call, in request order. Any
        handler exception fails the whole batch.
        """
        tasks = [asyncio.ensure_future(self._call_for_turn(c)) for c in calls]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # Nothing from a failed batch may outlive this cycle.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [
            types.Part.from_function_response(name=call.name or "", response=result)
            for call, result in zip(calls, results)
        ]

"""Tool dispatcher: the catalog of invocable operations.

A :class:`ToolDispatcher` maps tool names to :class:`Tool` entries.
:meth:`ToolDispatcher.call` validates arguments first, then runs the
handler while holding the bridge session's lock so that no two
handlers interleave their remote calls.

Domain failures raised by handlers become failed :class:`ToolResult`
objects; any other exception propagates to the transport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import ValidationError

from tetris_bridge.errors import BridgeDomainError, ToolArgumentError, UnknownToolError
from tetris_bridge.session.bridge import BridgeSession
from tetris_bridge.tools.arguments import NoArguments, ToolArguments

logger = logging.getLogger(__name__)

Handler = Callable[[BridgeSession, ToolArguments], "ToolResult"]


@dataclass
class ToolResult:
    """Text content returned to the client.

    Attributes
    ----------
    text : str
        The single text content item.
    is_error : bool
        ``True`` for domain-level failures the client should react to.
    """

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(text, is_error=True)


@dataclass
class Tool:
    """One catalog entry."""

    name: str
    description: str
    handler: Handler
    arguments: type[ToolArguments] = NoArguments
    input_schema: dict[str, Any] = field(init=False)

    def __post_init__(self) -> None:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        self.input_schema = schema

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolDispatcher:
    """Validates and serializes tool calls against one bridge session.

    Parameters
    ----------
    session : BridgeSession
        The shared session every handler operates on.
    """

    def __init__(self, session: BridgeSession) -> None:
        self.session = session
        self._tools: dict[str, Tool] = {}

    # -- Catalog -------------------------------------------------------

    def register(
        self,
        name: str,
        description: str,
        arguments: type[ToolArguments] = NoArguments,
    ) -> Callable[[Handler], Handler]:
        """Decorator adding ``handler`` to the catalog under ``name``."""

        def decorator(handler: Handler) -> Handler:
            if name in self._tools:
                raise ValueError(f"Tool {name!r} is already registered")
            self._tools[name] = Tool(name, description, handler, arguments)
            return handler

        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    # -- Dispatch ------------------------------------------------------

    def validate(self, name: str, arguments: dict[str, Any] | None) -> ToolArguments:
        """Return parsed arguments for tool ``name``.

        Raises
        ------
        UnknownToolError
            If ``name`` is not in the catalog.
        ToolArgumentError
            If ``arguments`` do not match the tool's model.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        try:
            return tool.arguments.model_validate(arguments or {})
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False)
            fields = ", ".join(".".join(str(p) for p in e["loc"]) or "<root>" for e in errors)
            raise ToolArgumentError(
                name, f"Invalid arguments for {name}: {fields}", errors
            ) from exc

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate, then run tool ``name`` with the session lock held."""
        parsed = self.validate(name, arguments)
        tool = self._tools[name]

        with self.session.lock:
            logger.info("Tool call: %s %s", name, parsed.model_dump())
            try:
                return tool.handler(self.session, parsed)
            except BridgeDomainError as exc:
                logger.warning("Tool %s failed: %s", name, exc)
                return ToolResult.failure(str(exc))

"""
Tool protocol for sandfly-fabric.

- Tool: a named, schema-described action
- ToolResult: the envelope shells return to callers
- ToolAnnotations: advisory behaviour hints derived from the HTTP verb

Two ways to run a tool:
    - run(arguments): returns the raw JSON-serializable value and lets
      errors propagate. This is what the registry's invoke() uses.
    - execute(arguments): wraps run() into a ToolResult, reporting
      failures IN the result with is_error=True. Shells use this.

The wire names (inputSchema, isError, readOnlyHint, ...) follow the
Model Context Protocol.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """One text block of a tool result."""

    text: str

    def to_dict(self) -> dict[str, str]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    """
    Advisory hints about what a tool does to the remote service.

    Reads are read-only and idempotent; deletes are destructive; every
    Sandfly tool talks to an external server (open world). Nothing here
    is enforced.
    """

    read_only_hint: bool = False
    destructive_hint: bool = True
    idempotent_hint: bool = False
    open_world_hint: bool = False

    def to_dict(self) -> dict[str, bool]:
        """Only the hints that differ from the protocol defaults."""
        hints = {
            "readOnlyHint": self.read_only_hint or None,
            "destructiveHint": False if not self.destructive_hint else None,
            "idempotentHint": self.idempotent_hint or None,
            "openWorldHint": self.open_world_hint or None,
        }
        return {key: value for key, value in hints.items() if value is not None}


@dataclass(frozen=True, slots=True)
class ToolResult:
    """
    Outcome of one tool execution.

    Example:
        ToolResult.from_value({"ok": True})
        ToolResult.error("Unknown tool: sandfly_nope")
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False
    structured_content: Any = None

    @classmethod
    def from_value(cls, value: Any) -> ToolResult:
        """Successful result carrying a JSON value, pretty-printed."""
        return cls(
            content=(ContentBlock(json.dumps(value, indent=2, default=str)),),
            structured_content=value,
        )

    @classmethod
    def error(cls, message: str) -> ToolResult:
        """Error result carrying the original error text."""
        return cls(content=(ContentBlock(message),), is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "content": [block.to_dict() for block in self.content],
        }
        if self.is_error:
            result["isError"] = True
        if self.structured_content is not None:
            result["structuredContent"] = self.structured_content
        return result


class Tool(ABC):
    """
    Base class for all tools (MCP-aligned).

    Contract:
        - name: Unique identifier (snake_case)
        - description: Clear description for LLM understanding
        - input_schema: JSON Schema for arguments (advisory, not enforced)
        - run: Async method that performs the action
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool (e.g., "sandfly_list_hosts")."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """
        JSON Schema defining expected input arguments.

        Must be a JSON Schema object with:
        - type: "object"
        - properties: dict of parameter definitions
        - required: optional list of required parameter names
        """
        ...

    @property
    def annotations(self) -> ToolAnnotations:
        """Behavioral hints for the tool."""
        return ToolAnnotations()

    @abstractmethod
    async def run(self, arguments: dict[str, Any]) -> Any:
        """
        Perform the action and return a JSON-serializable value.

        Arguments are passed through unvalidated. Errors propagate.
        """
        ...

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """
        Run the tool and wrap the outcome in a ToolResult.

        Failures are reported in the result, not raised.
        """
        try:
            value = await self.run(arguments)
        except Exception as e:
            logger.warning(f"[tool:{self.name}] Failed: {e}")
            return ToolResult.error(str(e))
        return ToolResult.from_value(value)

    def to_schema(self) -> dict[str, Any]:
        """
        Public descriptor fields in MCP tool format.

        Never includes the action itself.
        """
        schema: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

        annotations = self.annotations.to_dict()
        if annotations:
            schema["annotations"] = annotations

        return schema

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"

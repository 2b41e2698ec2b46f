"""Tool registry — register tools and dispatch calls to them."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..errors import ErrorKind, ToolResult, ValidationError, describe_error

logger = logging.getLogger("slackgate.tools.registry")


@dataclass
class Tool:
    name: str
    description: str
    parameters: dict                    # JSON Schema for parameters
    handler: Callable                   # async function returning rendered text
    enabled: bool = True


def _coerce(name: str, value: Any, schema: dict) -> Any:
    expected = schema.get("type")
    if expected == "string":
        if not isinstance(value, str):
            raise ValidationError(f"'{name}' must be a string")
        return value
    if expected == "integer":
        if isinstance(value, bool):
            raise ValidationError(f"'{name}' must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        raise ValidationError(f"'{name}' must be an integer")
    return value


def validate_arguments(parameters: dict, arguments: Optional[dict]) -> dict:
    """Check arguments against a tool's JSON schema.

    Required keys must be present and, for strings, non-blank. Declared types
    are enforced (integral strings and floats are accepted for integers).
    Keys the schema does not declare are dropped.

    Raises:
        ValidationError: on the first problem found
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ValidationError("Arguments must be an object")

    properties = parameters.get("properties", {})
    for name in parameters.get("required", []):
        value = arguments.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"'{name}' is required")

    cleaned = {}
    for name, value in arguments.items():
        if name not in properties:
            logger.debug(f"Ignoring unknown argument '{name}'")
            continue
        if value is None:
            continue
        cleaned[name] = _coerce(name, value, properties[name])
    return cleaned


class ToolRegistry:
    """Manages the tools exposed to the caller."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(
        self,
        name: str,
        description: str,
        parameters: dict,
        handler: Callable,
        enabled: bool = True,
    ):
        """Register a new tool."""
        self._tools[name] = Tool(
            name=name,
            description=description,
            parameters=parameters,
            handler=handler,
            enabled=enabled,
        )

    def unregister(self, name: str):
        """Remove a tool."""
        self._tools.pop(name, None)

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List enabled tools in registration order."""
        return [tool for tool in self._tools.values() if tool.enabled]

    def to_mcp_schema(self) -> list[dict]:
        """Tool catalog in MCP tools/list format."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.parameters,
            }
            for tool in self.list_tools()
        ]

    async def execute(self, name: str, arguments: Optional[dict]) -> ToolResult:
        """Execute a tool by name.

        Never raises: every failure becomes a ToolResult error.
        """
        tool = self.get(name)
        if not tool:
            return ToolResult.failure(ErrorKind.VALIDATION, f"Unknown tool: {name}")

        if not tool.enabled:
            return ToolResult.failure(ErrorKind.VALIDATION, f"Tool '{name}' is disabled.")

        try:
            kwargs = validate_arguments(tool.parameters, arguments)
            result = await tool.handler(**kwargs)
            return ToolResult.success(str(result))
        except Exception as e:
            kind, message = describe_error(e)
            if kind is ErrorKind.INTERNAL:
                logger.error(f"Error executing tool '{name}': {e}", exc_info=True)
            else:
                logger.info(f"Tool '{name}' failed ({kind.value}): {message}")
            return ToolResult.failure(kind, message)

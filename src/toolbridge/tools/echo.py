"""The ``echo`` sample tool."""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolbridge.tools.models import TextContent, ToolArguments, ToolDescriptor

if TYPE_CHECKING:
    from toolbridge.tools.registry import ToolRegistry

ECHO_TOOL = ToolDescriptor(
    name="echo",
    description="Echo back the input text",
    input_schema={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text to echo back",
            },
        },
        "required": ["text"],
    },
)


def echo(arguments: ToolArguments) -> list[TextContent]:
    return [TextContent(text=f"Echo: {arguments['text']}")]


def register_builtin_tools(registry: ToolRegistry) -> None:
    """Register every tool shipped with toolbridge."""
    registry.register(ECHO_TOOL, echo)

"""Tool layer — registry, argument validation, execution and built-in tools."""

from toolbridge.tools.echo import ECHO_TOOL, register_builtin_tools
from toolbridge.tools.engine import ExecutionEngine
from toolbridge.tools.errors import RegistryError, RegistryFrozenError
from toolbridge.tools.models import (
    ContentItem,
    ImageContent,
    TextContent,
    ToolArguments,
    ToolBehavior,
    ToolDescriptor,
)
from toolbridge.tools.registry import RegisteredTool, ToolRegistry
from toolbridge.tools.schema import check_arguments, validate_arguments

__all__ = [
    "ECHO_TOOL",
    "ContentItem",
    "ExecutionEngine",
    "ImageContent",
    "RegisteredTool",
    "RegistryError",
    "RegistryFrozenError",
    "TextContent",
    "ToolArguments",
    "ToolBehavior",
    "ToolDescriptor",
    "ToolRegistry",
    "check_arguments",
    "register_builtin_tools",
    "validate_arguments",
]

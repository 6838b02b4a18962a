"""Tests for the built-in echo tool."""

from toolbridge.tools.echo import ECHO_TOOL, echo, register_builtin_tools
from toolbridge.tools.engine import ExecutionEngine
from toolbridge.tools.models import TextContent, ToolArguments
from toolbridge.tools.registry import ToolRegistry


class TestEchoDescriptor:
    def test_schema(self) -> None:
        assert ECHO_TOOL.name == "echo"
        assert ECHO_TOOL.description == "Echo back the input text"
        schema = ECHO_TOOL.input_schema
        assert schema["type"] == "object"
        assert schema["properties"]["text"]["type"] == "string"
        assert schema["required"] == ["text"]


class TestEchoBehavior:
    def test_prefixes_text(self) -> None:
        result = echo(ToolArguments("echo", {"text": "Hello, World!"}))
        assert result == [TextContent(text="Echo: Hello, World!")]

    def test_empty_text(self) -> None:
        assert echo(ToolArguments("echo", {"text": ""})) == [TextContent(text="Echo: ")]


class TestRegisterBuiltinTools:
    def test_registers_echo(self) -> None:
        reg = ToolRegistry()
        register_builtin_tools(reg)
        assert [d.name for d in reg.list()] == ["echo"]

    def test_through_engine(self) -> None:
        reg = ToolRegistry()
        register_builtin_tools(reg)
        engine = ExecutionEngine(reg)
        content = engine.invoke(reg.lookup("echo"), {"text": "hi"})
        assert content == [TextContent(text="Echo: hi")]

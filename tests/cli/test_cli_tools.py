"""Tests for ``toolbridge tools`` CLI commands."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from toolbridge.cli import main


class TestToolsList:
    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list"])
        assert result.exit_code == 0
        assert "echo" in result.output
        assert "Echo back the input text" in result.output

    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["tools"][0]["name"] == "echo"
        assert data["tools"][0]["input_schema"]["required"] == ["text"]


class TestToolsCall:
    def test_echo(self) -> None:
        result = CliRunner().invoke(
            main, ["tools", "call", "echo", "--arguments", '{"text": "Hello"}']
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {"content": [{"type": "text", "text": "Echo: Hello"}]}

    def test_missing_argument(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "echo"])
        assert result.exit_code == 1
        assert "-32602" in result.output

    def test_unknown_tool(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "does_not_exist"])
        assert result.exit_code == 1
        assert "-31001" in result.output

    def test_invalid_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "echo", "-a", "{nope"])
        assert result.exit_code == 1
        assert "Invalid --arguments JSON" in result.output

    def test_no_response(self) -> None:
        dispatcher = MagicMock()
        dispatcher.dispatch.return_value = None
        with patch("toolbridge.server.build_dispatcher", return_value=dispatcher):
            result = CliRunner().invoke(main, ["tools", "call", "echo", "-a", '{"text": "x"}'])
        assert result.exit_code == 1
        assert "No response" in result.output


class TestVersion:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

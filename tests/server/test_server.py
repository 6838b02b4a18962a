"""Tests for the serve loop and its assembly."""

from __future__ import annotations

import io
import json
from typing import Any
from unittest.mock import MagicMock

from toolbridge.config import ServerConfig
from toolbridge.server.server import Server, build_dispatcher, build_server
from toolbridge.server.transport import StdioTransport
from toolbridge.tools.models import TextContent, ToolDescriptor
from toolbridge.tools.registry import ToolRegistry


def _run(lines: list[str]) -> list[dict[str, Any]]:
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()
    server = build_server(ServerConfig(), transport=StdioTransport(stdin, stdout))
    server.serve_forever()
    output = stdout.getvalue()
    assert output == "" or output.endswith("\n")
    return [json.loads(line) for line in output.splitlines()]


def _request(id: Any, method: str, params: Any = None) -> str:
    payload: dict[str, Any] = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        payload["params"] = params
    return json.dumps(payload)


class TestServeForever:
    def test_full_session(self) -> None:
        responses = _run(
            [
                _request(1, "initialize", {"clientInfo": {"name": "test", "version": "1.0"}}),
                _request(2, "tools/list"),
                _request(3, "tools/call", {"name": "echo", "arguments": {"text": "Hello, World!"}}),
            ]
        )
        assert [r["id"] for r in responses] == [1, 2, 3]
        assert responses[0]["result"]["serverInfo"]["name"] == "mcp-server"
        assert responses[1]["result"]["tools"][0]["name"] == "echo"
        assert responses[2]["result"] == {
            "content": [{"type": "text", "text": "Echo: Hello, World!"}]
        }

    def test_order_preserved(self) -> None:
        ids = list(range(50))
        lines = [
            _request(i, "tools/call", {"name": "echo", "arguments": {"text": str(i)}})
            for i in ids
        ]
        responses = _run(lines)
        assert [r["id"] for r in responses] == ids
        assert [r["result"]["content"][0]["text"] for r in responses] == [f"Echo: {i}" for i in ids]

    def test_one_response_per_request_line(self) -> None:
        responses = _run(
            [
                "{broken",
                _request(1, "nope"),
                '{"jsonrpc": "2.0", "id": 2}',
                _request(3, "tools/call", {"name": "echo", "arguments": {}}),
                _request(4, "tools/call", {"name": "does_not_exist", "arguments": {}}),
                _request(5, "tools/list"),
            ]
        )
        assert [r["id"] for r in responses] == [None, 1, 2, 3, 4, 5]
        assert [r.get("error", {}).get("code") for r in responses] == [
            -32700,
            -32601,
            -32600,
            -32602,
            -31001,
            None,
        ]

    def test_blank_lines_skipped(self) -> None:
        responses = _run(["", "   ", _request(1, "tools/list"), ""])
        assert len(responses) == 1

    def test_notifications_get_no_response(self) -> None:
        responses = _run(
            [
                _request(1, "initialize"),
                '{"jsonrpc": "2.0", "method": "notifications/initialized"}',
                _request(2, "tools/list"),
            ]
        )
        assert [r["id"] for r in responses] == [1, 2]

    def test_empty_input(self) -> None:
        assert _run([]) == []

    def test_broken_output_stops_loop(self) -> None:
        transport = MagicMock()
        transport.read_line.side_effect = [_request(1, "tools/list"), _request(2, "tools/list"), None]
        transport.write_line.side_effect = BrokenPipeError("gone")

        server = Server(build_dispatcher(ServerConfig()), transport)
        server.serve_forever()

        assert transport.write_line.call_count == 1
        assert transport.read_line.call_count == 1
        transport.close.assert_called_once()


class TestProcessLine:
    def test_returns_encoded_response(self) -> None:
        server = Server(build_dispatcher(ServerConfig()), MagicMock())
        reply = server.process_line(_request(9, "tools/list"))
        assert reply is not None
        assert json.loads(reply)["id"] == 9

    def test_salvaged_id_on_bad_method(self) -> None:
        server = Server(build_dispatcher(ServerConfig()), MagicMock())
        reply = server.process_line('{"jsonrpc": "2.0", "id": "k", "method": 5}')
        assert reply is not None
        assert json.loads(reply)["id"] == "k"


class TestBuild:
    def test_registry_frozen(self) -> None:
        reg = ToolRegistry()
        build_dispatcher(ServerConfig(), reg)
        assert reg.frozen

    def test_server_info_from_config(self) -> None:
        dispatcher = build_dispatcher(ServerConfig(name="custom", version="9.9"))
        server = Server(dispatcher, MagicMock())
        reply = server.process_line(_request(1, "initialize"))
        assert reply is not None
        assert json.loads(reply)["result"]["serverInfo"] == {"name": "custom", "version": "9.9"}

    def test_default_transport_is_stdio(self) -> None:
        server = build_server(ServerConfig())
        assert isinstance(server._transport, StdioTransport)


class TestByteLevelInput:
    def _run_bytes(self, data: bytes) -> list[dict[str, Any]]:
        stdin = io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")
        raw_out = io.BytesIO()
        stdout = io.TextIOWrapper(raw_out, encoding="utf-8", write_through=True)
        server = build_server(ServerConfig(), transport=StdioTransport(stdin, stdout))
        server.serve_forever()
        return [json.loads(line) for line in raw_out.getvalue().decode("ascii").splitlines()]

    def test_invalid_utf8_line_is_parse_error(self) -> None:
        data = b"\xff\xfe garbage\n" + _request(2, "tools/list").encode() + b"\n"
        responses = self._run_bytes(data)
        assert responses[0]["id"] is None
        assert responses[0]["error"]["code"] == -32700
        assert responses[1]["id"] == 2
        assert responses[1]["result"]["tools"][0]["name"] == "echo"

    def test_lone_surrogate_does_not_stop_loop(self) -> None:
        data = (
            b'{"jsonrpc": "2.0", "id": 1, "method": "tools/call",'
            b' "params": {"name": "echo", "arguments": {"text": "\\ud800"}}}\n'
            + _request(2, "tools/list").encode()
            + b"\n"
        )
        responses = self._run_bytes(data)
        assert [r["id"] for r in responses] == [1, 2]
        assert "result" in responses[1]


class TestRequestIds:
    def test_null_id_gets_response(self) -> None:
        responses = _run(['{"jsonrpc": "2.0", "id": null, "method": "tools/list"}'])
        assert len(responses) == 1
        assert responses[0]["id"] is None
        assert "result" in responses[0]

    def test_fractional_id_echoed(self) -> None:
        responses = _run([_request(1.5, "tools/list"), _request(2.5, "nope")])
        assert [r["id"] for r in responses] == [1.5, 2.5]
        assert responses[1]["error"]["code"] == -32601


class TestToolFaults:
    def test_failing_generator_is_tool_error(self) -> None:
        def stream(args: Any) -> Any:
            yield TextContent(text="partial")
            raise ValueError("boom")

        registry = ToolRegistry()
        registry.register(ToolDescriptor(name="stream"), stream)
        stdin = io.StringIO(_request(1, "tools/call", {"name": "stream", "arguments": {}}) + "\n")
        stdout = io.StringIO()
        build_server(ServerConfig(), registry=registry, transport=StdioTransport(stdin, stdout)).serve_forever()

        response = json.loads(stdout.getvalue())
        assert response["error"]["code"] == -31002
        assert response["error"]["message"] == "Tool execution failed: stream (boom)"

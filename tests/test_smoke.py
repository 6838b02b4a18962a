"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import toolbridge

    assert toolbridge.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from toolbridge.cli import main

    assert callable(main)


def test_package_exports() -> None:
    from toolbridge.protocol import Dispatcher, JsonRpcRequest, decode, encode
    from toolbridge.server import Server, build_server
    from toolbridge.tools import ExecutionEngine, ToolRegistry

    assert Dispatcher is not None
    assert JsonRpcRequest is not None
    assert callable(decode)
    assert callable(encode)
    assert Server is not None
    assert callable(build_server)
    assert ExecutionEngine is not None
    assert ToolRegistry is not None

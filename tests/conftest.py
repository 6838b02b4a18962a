"""Shared fixtures for the toolbridge test suite."""

from __future__ import annotations

import pytest

from toolbridge.config import ServerConfig
from toolbridge.protocol.dispatcher import Dispatcher
from toolbridge.server import build_dispatcher
from toolbridge.tools.echo import register_builtin_tools
from toolbridge.tools.registry import ToolRegistry


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry()
    register_builtin_tools(reg)
    return reg


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    return build_dispatcher(ServerConfig(), registry)

"""Method handlers for ``initialize``, ``tools/list`` and ``tools/call``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from pydantic import ValidationError

from toolbridge.protocol.errors import InvalidParamsError
from toolbridge.protocol.models import (
    PROTOCOL_VERSION,
    ClientInfo,
    InitializeResult,
    ServerInfo,
    ToolCallParams,
)
from toolbridge.tools.models import dump_content
from toolbridge.utils.telemetry import ATTR_CLIENT_NAME, ATTR_CLIENT_VERSION

if TYPE_CHECKING:
    from toolbridge.tools.engine import ExecutionEngine
    from toolbridge.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

Params = dict[str, Any] | list[Any] | None


class MethodHandlers:
    """The three request handlers, bound to one registry and engine.

    Handlers return the ``result`` payload of a successful response and
    raise :class:`~toolbridge.protocol.errors.ProtocolError` subclasses for
    anything else.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        engine: ExecutionEngine,
        *,
        server_info: ServerInfo,
        protocol_version: str = PROTOCOL_VERSION,
    ) -> None:
        self._registry = registry
        self._engine = engine
        self._server_info = server_info
        self._protocol_version = protocol_version

    @property
    def server_info(self) -> ServerInfo:
        return self._server_info

    def initialize(self, params: Params) -> dict[str, Any]:
        """Negotiate the connection. Never fails."""
        client = self._client_info(params)
        logger.info("Client connected: %s %s", client.name, client.version)

        span = trace.get_current_span()
        span.set_attribute(ATTR_CLIENT_NAME, client.name)
        span.set_attribute(ATTR_CLIENT_VERSION, client.version)

        result = InitializeResult(
            protocol_version=self._protocol_version,
            server_info=self._server_info,
        )
        return result.model_dump(by_alias=True)

    def list_tools(self, params: Params) -> dict[str, Any]:  # noqa: ARG002
        """Describe every registered tool in registration order."""
        return {"tools": [tool.model_dump() for tool in self._registry.list()]}

    def call_tool(self, params: Params) -> dict[str, Any]:
        """Run one tool and wrap its content items."""
        if not isinstance(params, dict):
            raise InvalidParamsError(errors=["'params' must be an object with 'name' and 'arguments'"])
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as exc:
            raise InvalidParamsError(errors=_describe(exc)) from exc

        descriptor = self._registry.lookup(call.name)
        content = self._engine.invoke(descriptor, call.arguments)
        return {"content": dump_content(content)}

    @staticmethod
    def _client_info(params: Params) -> ClientInfo:
        raw = params.get("clientInfo") if isinstance(params, dict) else None
        if not isinstance(raw, dict):
            return ClientInfo()
        try:
            return ClientInfo.model_validate(raw)
        except ValidationError:
            logger.debug("Ignoring malformed clientInfo: %r", raw)
            return ClientInfo()


def _describe(exc: ValidationError) -> list[str]:
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "params"
        problems.append(f"{loc}: {err['msg']}")
    return problems

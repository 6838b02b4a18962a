"""Server — the read, dispatch, write loop and its assembly."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolbridge.protocol.codec import decode, encode
from toolbridge.protocol.dispatcher import Dispatcher
from toolbridge.protocol.errors import DecodeError
from toolbridge.protocol.handlers import MethodHandlers
from toolbridge.protocol.models import JsonRpcResponse, ServerInfo
from toolbridge.server.transport import StdioTransport
from toolbridge.tools.echo import register_builtin_tools
from toolbridge.tools.engine import ExecutionEngine
from toolbridge.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from toolbridge.config import ServerConfig
    from toolbridge.server.transport import LineTransport

logger = logging.getLogger(__name__)


class Server:
    """Processes one request line at a time, strictly in order.

    A response is written and flushed before the next line is read.  The
    loop ends at end of input or when the output side can no longer be
    written to.
    """

    def __init__(self, dispatcher: Dispatcher, transport: LineTransport) -> None:
        self._dispatcher = dispatcher
        self._transport = transport

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def process_line(self, line: str) -> str | None:
        """Handle one raw line; return the encoded response, if any."""
        if not line.strip():
            return None
        try:
            request = decode(line)
        except DecodeError as exc:
            logger.warning("Rejected request line: %s", exc.message)
            response: JsonRpcResponse | None = JsonRpcResponse.failure(exc.request_id, exc.to_error())
        else:
            response = self._dispatcher.dispatch(request)
        if response is None:
            return None
        return encode(response)

    def serve_forever(self) -> None:
        """Run until end of input or a broken output stream."""
        logger.info("Server loop started")
        try:
            while True:
                line = self._transport.read_line()
                if line is None:
                    logger.info("End of input, shutting down")
                    break
                reply = self.process_line(line)
                if reply is None:
                    continue
                try:
                    self._transport.write_line(reply)
                except OSError as exc:
                    logger.error("Output stream closed: %s", exc)
                    break
        finally:
            self._transport.close()


def build_dispatcher(config: ServerConfig, registry: ToolRegistry | None = None) -> Dispatcher:
    """Wire registry, engine and handlers into a dispatcher.

    When *registry* is omitted a new one holding the built-in tools is
    created.  The registry is frozen before it is handed over.
    """
    if registry is None:
        registry = ToolRegistry()
        register_builtin_tools(registry)
    registry.freeze()

    handlers = MethodHandlers(
        registry,
        ExecutionEngine(registry),
        server_info=ServerInfo(name=config.name, version=config.version),
        protocol_version=config.protocol_version,
    )
    return Dispatcher(handlers)


def build_server(
    config: ServerConfig,
    *,
    registry: ToolRegistry | None = None,
    transport: LineTransport | None = None,
) -> Server:
    """Assemble a ready-to-run :class:`Server` (stdio unless *transport* is given)."""
    dispatcher = build_dispatcher(config, registry)
    return Server(dispatcher, transport or StdioTransport())

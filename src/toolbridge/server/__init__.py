"""Server — transports and the request processing loop."""

from toolbridge.server.server import Server, build_dispatcher, build_server
from toolbridge.server.transport import LineTransport, StdioTransport

__all__ = [
    "LineTransport",
    "Server",
    "StdioTransport",
    "build_dispatcher",
    "build_server",
]

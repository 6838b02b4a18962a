"""Shared error types for the protocol layer.

Every per-request fault is a :class:`ProtocolError` carrying the JSON-RPC
``code``, ``message`` and optional ``data`` it is reported with.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from toolbridge.protocol.models import JsonRpcError, RequestId


class ErrorCode(IntEnum):
    """JSON-RPC error codes emitted by the server.

    The tool codes live outside the range reserved by JSON-RPC 2.0
    (-32768 to -32000).
    """

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    TOOL_NOT_FOUND = -31001
    TOOL_EXECUTION_FAILED = -31002


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        """Build the wire error object for this fault."""
        return JsonRpcError(code=int(self.code), message=self.message, data=self.data)


class DecodeError(ProtocolError):
    """A line could not be turned into a request.

    ``request_id`` holds the correlation id when one could be salvaged.
    """

    def __init__(self, message: str, request_id: RequestId = None, data: Any = None) -> None:
        self.request_id = request_id
        super().__init__(message, data)


class ParseError(DecodeError):
    """The line is not well-formed JSON."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Parse error", data={"detail": detail} if detail else None)


class InvalidRequestError(DecodeError):
    """Well-formed JSON that is not a valid request envelope."""

    code = ErrorCode.INVALID_REQUEST

    def __init__(self, detail: str, request_id: RequestId = None) -> None:
        self.detail = detail
        super().__init__("Invalid Request", request_id=request_id, data={"detail": detail})


class MethodNotFoundError(ProtocolError):
    """The method name is not one the server implements."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__("Method not found")


class InvalidParamsError(ProtocolError):
    """Method parameters failed structural validation."""

    code = ErrorCode.INVALID_PARAMS

    def __init__(self, message: str = "Invalid params", errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message, data={"errors": self.errors} if self.errors else None)


class InternalError(ProtocolError):
    """An unexpected failure inside a handler."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Internal error", data={"detail": detail} if detail else None)


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    code = ErrorCode.TOOL_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}", data={"tool": name})


class ToolExecutionError(ProtocolError):
    """A tool ran and reported failure."""

    code = ErrorCode.TOOL_EXECUTION_FAILED

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(
            f"Tool execution failed: {name}" + (f" ({detail})" if detail else ""),
            data={"tool": name},
        )

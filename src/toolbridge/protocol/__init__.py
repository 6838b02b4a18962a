"""Protocol layer — JSON-RPC envelopes, dispatch and MCP method handlers."""

from toolbridge.protocol.errors import (
    DecodeError,
    ErrorCode,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from toolbridge.protocol.models import (
    PROTOCOL_VERSION,
    ClientInfo,
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    ServerInfo,
    ToolCallParams,
)
from toolbridge.protocol.codec import decode, decode_response, encode
from toolbridge.protocol.dispatcher import Dispatcher, Method
from toolbridge.protocol.handlers import MethodHandlers

__all__ = [
    "PROTOCOL_VERSION",
    "ClientInfo",
    "DecodeError",
    "Dispatcher",
    "ErrorCode",
    "InitializeResult",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "MethodHandlers",
    "MethodNotFoundError",
    "ParseError",
    "ProtocolError",
    "RequestId",
    "ServerInfo",
    "ToolCallParams",
    "ToolExecutionError",
    "ToolNotFoundError",
    "decode",
    "decode_response",
    "encode",
]

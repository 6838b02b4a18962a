"""Protocol models — JSON-RPC 2.0 messages and MCP handshake payloads.

Implements the message format used by the Model Context Protocol for
connection negotiation (``initialize``), tool discovery (``tools/list``)
and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

PROTOCOL_VERSION = "2024-11-05"

# Correlation token. ``None`` is an explicit null on requests and
# "no id could be recovered" on responses.
RequestId = Union[StrictInt, StrictFloat, StrictStr, None]

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: RequestId = None
    params: dict[str, Any] | list[Any] | None = None

    @property
    def is_notification(self) -> bool:
        """True when the request carried no ``id`` member at all.

        An explicit ``"id": null`` is still a request and gets a response.
        """
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, error: JsonRpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=error)


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ClientInfo(BaseModel):
    """Identity a client announces in ``initialize``."""

    name: str = "unknown"
    version: str = ""


class ServerInfo(BaseModel):
    """Identity the server reports in ``initialize``."""

    name: str
    version: str


class InitializeResult(BaseModel):
    """Result payload of ``initialize``."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(alias="serverInfo")


class ToolCallParams(BaseModel):
    """Parameters of ``tools/call``."""

    name: StrictStr
    arguments: dict[str, Any]

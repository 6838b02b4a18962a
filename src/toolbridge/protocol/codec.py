"""Envelope codec — one JSON-RPC message per line of text."""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import ValidationError

from toolbridge.protocol.errors import InvalidRequestError, ParseError
from toolbridge.protocol.models import JsonRpcRequest, JsonRpcResponse, RequestId


def _salvage_id(envelope: dict[str, Any]) -> RequestId:
    value = envelope.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (int, str)):
        return value
    return None


def decode(line: str) -> JsonRpcRequest:
    """Parse one line into a request.

    A request without an ``id`` member decodes as a notification; an
    explicit ``"id": null`` does not.

    Raises:
        ParseError: The line is not valid JSON.
        InvalidRequestError: The JSON is not a valid request envelope.
            ``request_id`` is set when the envelope carried a usable id.
    """
    try:
        envelope: Any = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc)) from exc

    if not isinstance(envelope, dict):
        raise InvalidRequestError("request must be a JSON object")

    request_id = _salvage_id(envelope)

    if envelope.get("id") is not None and request_id is None:
        raise InvalidRequestError("'id' must be a string or a number")
    if envelope.get("jsonrpc", "2.0") != "2.0":
        raise InvalidRequestError("'jsonrpc' must be exactly \"2.0\"", request_id)
    if "method" not in envelope:
        raise InvalidRequestError("missing 'method'", request_id)
    if not isinstance(envelope["method"], str):
        raise InvalidRequestError("'method' must be a string", request_id)

    params = envelope.get("params")
    if params is not None and not isinstance(params, (dict, list)):
        raise InvalidRequestError("'params' must be an object or an array", request_id)

    if "id" not in envelope:
        return JsonRpcRequest(method=envelope["method"], params=params)
    return JsonRpcRequest(method=envelope["method"], id=request_id, params=params)


def encode(response: JsonRpcResponse) -> str:
    """Serialize *response* to a single line without its terminator.

    Non-ASCII characters are written as ``\\u`` escapes, so the line is
    plain ASCII whatever the tool returned.
    """
    payload: dict[str, Any] = {"jsonrpc": response.jsonrpc, "id": response.id}
    if response.error is not None:
        payload["error"] = response.error.model_dump()
    else:
        payload["result"] = response.result
    return json.dumps(payload, separators=(",", ":"))


def decode_response(line: str) -> JsonRpcResponse:
    """Parse a line written by :func:`encode` back into a response.

    Raises:
        ParseError: The line is not valid JSON.
        InvalidRequestError: The JSON is not a valid response envelope.
    """
    try:
        envelope: Any = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc)) from exc
    try:
        return JsonRpcResponse.model_validate(envelope)
    except ValidationError as exc:
        salvaged = _salvage_id(envelope) if isinstance(envelope, dict) else None
        raise InvalidRequestError(str(exc), salvaged) from exc

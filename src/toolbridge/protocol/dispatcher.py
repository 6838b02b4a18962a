"""Dispatcher — routes decoded requests to their method handler."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from toolbridge.protocol.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
)
from toolbridge.protocol.models import JsonRpcResponse
from toolbridge.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    get_tracer,
)

if TYPE_CHECKING:
    from toolbridge.protocol.handlers import MethodHandlers
    from toolbridge.protocol.models import JsonRpcError, JsonRpcRequest

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class Method(str, Enum):
    """The methods the server implements."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"

    @classmethod
    def parse(cls, name: str) -> Method | None:
        """Exact match of *name* against the known methods."""
        try:
            return cls(name)
        except ValueError:
            return None


class Dispatcher:
    """Turns a :class:`JsonRpcRequest` into a :class:`JsonRpcResponse`.

    ``dispatch`` never raises: every fault is converted into an error
    response carrying the request's id.  Notifications are executed but
    produce no response.

    Usage::

        dispatcher = Dispatcher(handlers)
        response = dispatcher.dispatch(request)
    """

    def __init__(self, handlers: MethodHandlers) -> None:
        self._handlers = handlers

    def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        with _tracer.start_as_current_span("toolbridge.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_RPC_ID, str(request.id))

            method = Method.parse(request.method)
            if method is None and request.is_notification:
                logger.debug("Ignoring notification %s", request.method)
                return None

            try:
                result = self._run(method, request)
            except ProtocolError as exc:
                error = exc.to_error()
            except ValidationError as exc:
                error = InvalidParamsError(errors=[str(exc)]).to_error()
            except Exception as exc:
                logger.exception("Unhandled error in %s", request.method)
                error = InternalError(str(exc)).to_error()
            else:
                if request.is_notification:
                    return None
                return JsonRpcResponse.success(request.id, result)

            span.set_attribute(ATTR_RPC_ERROR_CODE, error.code)
            self._log_error(request, error)
            if request.is_notification:
                return None
            return JsonRpcResponse.failure(request.id, error)

    def _run(self, method: Method | None, request: JsonRpcRequest) -> dict[str, Any]:
        if method is Method.INITIALIZE:
            return self._handlers.initialize(request.params)
        if method is Method.TOOLS_LIST:
            return self._handlers.list_tools(request.params)
        if method is Method.TOOLS_CALL:
            return self._handlers.call_tool(request.params)
        raise MethodNotFoundError(request.method)

    @staticmethod
    def _log_error(request: JsonRpcRequest, error: JsonRpcError) -> None:
        logger.warning(
            "Request %r (%s) failed with %d: %s",
            request.id,
            request.method,
            error.code,
            error.message,
        )

"""ExecutionEngine — validates arguments and runs tool behaviors."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from toolbridge.protocol.errors import ToolExecutionError
from toolbridge.tools.models import ImageContent, TextContent, content_adapter
from toolbridge.tools.schema import validate_arguments
from toolbridge.utils.telemetry import ATTR_TOOL_CONTENT_ITEMS, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from toolbridge.tools.models import ToolDescriptor
    from toolbridge.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ExecutionEngine:
    """Runs registered tools on behalf of ``tools/call``.

    1. **Validation** — arguments are checked against the descriptor's
       ``input_schema``; failures raise
       :class:`~toolbridge.protocol.errors.InvalidParamsError`.
    2. **Invocation** — the bound behavior receives a
       :class:`~toolbridge.tools.models.ToolArguments` bundle.
    3. **Normalization** — a bare string becomes one text item; anything
       else must validate as a list of content items.

    Any exception escaping a behavior is reported as a
    :class:`~toolbridge.protocol.errors.ToolExecutionError`.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    def invoke(
        self, descriptor: ToolDescriptor, arguments: Mapping[str, Any]
    ) -> list[TextContent | ImageContent]:
        """Validate *arguments* and run the tool described by *descriptor*."""
        with _tracer.start_as_current_span("toolbridge.tool") as span:
            span.set_attribute(ATTR_TOOL_NAME, descriptor.name)

            validated = validate_arguments(descriptor.name, descriptor.input_schema, arguments)
            behavior = self._registry.behavior(descriptor.name)

            try:
                raw = _materialize(behavior(validated))
            except ToolExecutionError:
                raise
            except Exception as exc:
                logger.exception("Tool %s raised", descriptor.name)
                raise ToolExecutionError(descriptor.name, str(exc) or type(exc).__name__) from exc

            content = self._normalize(descriptor.name, raw)
            span.set_attribute(ATTR_TOOL_CONTENT_ITEMS, len(content))
            return content

    @staticmethod
    def _normalize(name: str, raw: Any) -> list[TextContent | ImageContent]:
        if isinstance(raw, str):
            return [TextContent(text=raw)]
        if isinstance(raw, (TextContent, ImageContent)):
            return [raw]
        try:
            return content_adapter.validate_python(list(raw))
        except (TypeError, ValidationError) as exc:
            logger.error("Tool %s returned malformed content: %s", name, exc)
            raise ToolExecutionError(name, "tool returned malformed content") from exc


def _materialize(raw: Any) -> Any:
    # Generators and other lazy iterables run tool code while being consumed.
    if isinstance(raw, Iterable) and not isinstance(raw, (str, Mapping, BaseModel)):
        return list(raw)
    return raw

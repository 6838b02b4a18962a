"""Tracing for the request path.

Dispatch and tool invocation open spans through :func:`get_tracer`.  Until
:func:`configure_telemetry` installs an SDK provider those spans are the
OpenTelemetry API's no-ops.  Exported spans go to stderr or an OTLP
collector, never to stdout, which carries the JSON-RPC stream.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# Span attribute keys
ATTR_RPC_METHOD = "toolbridge.rpc.method"
ATTR_RPC_ID = "toolbridge.rpc.id"
ATTR_RPC_ERROR_CODE = "toolbridge.rpc.error_code"
ATTR_CLIENT_NAME = "toolbridge.client.name"
ATTR_CLIENT_VERSION = "toolbridge.client.version"
ATTR_TOOL_NAME = "toolbridge.tool.name"
ATTR_TOOL_CONTENT_ITEMS = "toolbridge.tool.content_items"

_INSTRUMENTATION_NAME = "toolbridge"

_SDK_HINT = "Install it with: pip install toolbridge[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, or for the package when omitted."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "toolbridge",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider for ``toolbridge serve --telemetry``.

    Spans are printed to stderr when *export_to_console* is set and batched
    to *otlp_endpoint* when one is given.  Raises :class:`ImportError` when
    ``opentelemetry-sdk`` (or the OTLP exporter, if requested) is missing.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for tracing. {_SDK_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)

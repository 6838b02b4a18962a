"""``toolbridge serve`` — run the JSON-RPC loop over stdin/stdout."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from toolbridge.cli_commands._config import resolve_config
from toolbridge.cli_commands._output import err_console

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LEVELS, case_sensitive=False),
    default=None,
    help="Override the configured log level (logs go to stderr).",
)
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(config_path: str | None, log_level: str | None, telemetry: bool) -> None:
    """Serve tools over line-delimited JSON-RPC on stdin/stdout."""
    from toolbridge.server import build_server
    from toolbridge.utils.log import configure_logging
    from toolbridge.utils.telemetry import configure_telemetry

    config = resolve_config(config_path)
    if log_level:
        config.log_level = log_level.upper()  # type: ignore[assignment]
    if telemetry:
        config.telemetry.enabled = True

    configure_logging(config.log_level)

    if config.telemetry.enabled:
        try:
            configure_telemetry(
                service_name=config.name,
                export_to_console=config.telemetry.otlp_endpoint is None,
                otlp_endpoint=config.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {escape(str(exc))}")
            sys.exit(1)

    server = build_server(config)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass

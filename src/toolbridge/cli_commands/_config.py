"""Configuration loading shared by the CLI commands."""

from __future__ import annotations

import sys

from rich.markup import escape

from toolbridge.cli_commands._output import err_console
from toolbridge.config import ConfigError, ServerConfig, load_config


def resolve_config(path: str | None) -> ServerConfig:
    """Load *path* if given, else defaults; exit with status 1 on a bad file."""
    if path is None:
        return ServerConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(1)

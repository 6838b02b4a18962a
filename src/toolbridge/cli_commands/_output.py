"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from toolbridge.protocol.models import JsonRpcError
    from toolbridge.tools.models import ToolDescriptor

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print registered tools as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.input_schema.get("required") or []
        table.add_row(
            tool.name,
            _truncate(tool.description),
            ", ".join(str(r) for r in required) or "-",
        )

    console.print(table)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_rpc_error(error: JsonRpcError) -> None:
    err_console.print(f"[red]Error {error.code}:[/red] {escape(error.message)}")
    if error.data is not None:
        err_console.print_json(json.dumps(error.data, default=str))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."

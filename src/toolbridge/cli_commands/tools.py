"""``toolbridge tools`` — inspect and invoke the registered tools."""

from __future__ import annotations

import json
import sys

import click
from rich.markup import escape

from toolbridge.cli_commands._config import resolve_config
from toolbridge.cli_commands._output import (
    console,
    err_console,
    print_json,
    print_rpc_error,
    print_tools_table,
)


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list result as JSON.")
def list_cmd(as_json: bool) -> None:
    """List the tools the server exposes."""
    from toolbridge.tools import ToolRegistry, register_builtin_tools

    registry = ToolRegistry()
    register_builtin_tools(registry)
    descriptors = registry.list()

    if as_json:
        print_json({"tools": [d.model_dump() for d in descriptors]})
        return

    if not descriptors:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arguments",
    "-a",
    "arguments",
    default="{}",
    help="Tool arguments as a JSON object.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
def call(name: str, arguments: str, config_path: str | None) -> None:
    """Invoke tool NAME once through the request dispatcher."""
    from toolbridge.protocol.models import JsonRpcRequest
    from toolbridge.server import build_dispatcher

    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid --arguments JSON:[/red] {escape(str(exc))}")
        sys.exit(1)

    dispatcher = build_dispatcher(resolve_config(config_path))
    request = JsonRpcRequest(
        method="tools/call",
        id=1,
        params={"name": name, "arguments": parsed},
    )
    response = dispatcher.dispatch(request)
    if response is None:
        err_console.print("[red]No response from dispatcher.[/red]")
        sys.exit(1)

    if response.error is not None:
        print_rpc_error(response.error)
        sys.exit(1)

    print_json(response.result)

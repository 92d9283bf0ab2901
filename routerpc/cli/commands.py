"""CLI commands for routerpc.

The CLI is the single entry point: `serve` hosts wrapped routes, `call` invokes
one through a route client, `status` shows the effective configuration, and
the `config` group edits ~/.routerpc/config.json.
"""

import asyncio
import json

import typer
from rich.console import Console
from rich.syntax import Syntax

from routerpc import __logo__, __version__
from routerpc.api.rpc.client import create_route_client
from routerpc.cli.command_groups.config_commands import register_config_commands
from routerpc.cli.shared.config_utils import parse_value
from routerpc.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from routerpc.config.access import get_config
from routerpc.config.loader import get_config_path

app = typer.Typer(
    name="routerpc",
    help=f"{__logo__} routerpc - JSON RPC routes over HTTP",
    no_args_is_help=True,
)

console = Console()


def _print_json(value: object) -> None:
    console.print(Syntax(json.dumps(value, indent=2, ensure_ascii=False), "json", theme="ansi_dark"))


@app.command()
def version():
    """Show routerpc version."""
    console.print(f"{__logo__} routerpc v{__version__}")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", "-h", help="Bind host (defaults to server.host)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (defaults to server.port)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Serve the configured RPC routes."""
    from routerpc.api.server import run_server

    config = get_config()
    level = "DEBUG" if verbose else config.logging.level
    configure_console_logging(level)
    if config.logging.file_enabled:
        log_path = ensure_rotating_log_file("serve", level=level)
        console.print(f"[dim]Logging to {log_path}[/dim]")
    console.print(f"{__logo__} Serving on {host or config.server.host}:{port or config.server.port}")
    run_server(config, host=host, port=port)


@app.command()
def call(
    url: str = typer.Argument(..., help="Route URL or path relative to client.baseUrl"),
    method: str = typer.Option(None, "--method", "-X", help="GET, POST, PUT or DELETE"),
    body: str = typer.Option(None, "--body", "-d", help="JSON body (plain strings are sent as JSON strings)"),
    timeout: float = typer.Option(None, "--timeout", "-t", help="Timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Call an RPC route and print its JSON result."""
    config = get_config()
    configure_console_logging("DEBUG" if verbose else "WARNING")
    http_method = (method or config.client.method).upper()
    if http_method not in {"GET", "POST", "PUT", "DELETE"}:
        console.print(f"[red]Unsupported method:[/red] {http_method}")
        raise typer.Exit(2)
    client = create_route_client(
        url,
        http_method,
        timeout if timeout is not None else config.client.timeout_seconds,
        base_url=config.client.base_url,
    )
    payload = parse_value(body) if body is not None else None
    ok, value, error = asyncio.run(client.try_call(payload))
    if ok:
        if value is None:
            console.print("[dim](no content)[/dim]")
        else:
            _print_json(value)
        return
    console.print(f"[red]RPC call failed[/red] ({(error or {}).get('code', 'no code')})")
    _print_json(error)
    raise typer.Exit(1)


@app.command()
def status():
    """Show routerpc configuration."""
    config_path = get_config_path()
    config = get_config()
    console.print(f"{__logo__} routerpc Status\n")
    console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[dim]defaults[/dim]'}")
    console.print(f"Server: {config.server_url()} (bind {config.server.host}:{config.server.port})")
    console.print(f"Demo route: {'on' if config.server.hello_route else 'off'}")
    timeout = config.client.timeout_seconds
    console.print(
        f"Client: {config.client.method} {config.client.base_url} "
        f"timeout={'default' if timeout is None else f'{timeout}s'}"
    )
    console.print(f"Log level: {config.logging.level} file={'on' if config.logging.file_enabled else 'off'}")


register_config_commands(app=app, console=console)


if __name__ == "__main__":
    app()

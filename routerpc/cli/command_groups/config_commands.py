"""Config get/set command group."""

from __future__ import annotations

import json

import typer
from rich.console import Console

from routerpc.cli.shared.config_utils import (
    deep_get,
    deep_set,
    load_config_json,
    parse_value,
    save_config_json,
)
from routerpc.config.access import clear_config_cache
from routerpc.config.loader import load_config


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register the config command group."""
    config_app = typer.Typer(help="Config helpers (get/set)")
    app.add_typer(config_app, name="config")

    @config_app.command("get")
    def config_get(
        key: str = typer.Argument(..., help="Dotted key path, e.g. client.baseUrl"),
    ) -> None:
        data = load_config_json()
        try:
            value = deep_get(data, key)
        except KeyError:
            console.print(f"[red]Key not found:[/red] {key}")
            raise typer.Exit(1)
        console.print(json.dumps(value, indent=2, ensure_ascii=False))

    @config_app.command("set")
    def config_set(
        key: str = typer.Argument(..., help="Dotted key path"),
        value: str = typer.Argument(..., help="JSON value or plain string"),
    ) -> None:
        data = load_config_json()
        deep_set(data, key, parse_value(value))
        path = save_config_json(data)
        try:
            load_config(path)
        except ValueError as e:
            console.print(f"[red]Saved config does not validate:[/red] {e}")
            raise typer.Exit(1)
        clear_config_cache(config_path=path)
        console.print(f"[green]✓[/green] Set {key}")

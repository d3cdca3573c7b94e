"""Configuration commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from runform.commands.common import get_state, print_json_payload
from runform.core.config import DEFAULT_CONFIG, dict_to_toml, save_config

app = typer.Typer(help="Configuration commands")


@app.command("init")
def init_command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(None, help="Where to write the config (default: active config path)"),
    force: bool = typer.Option(False, help="Overwrite an existing file"),
) -> None:
    """Write a config file with default settings."""
    state = get_state(ctx)
    target = (path or state.config_path).expanduser().resolve()
    if target.exists() and not force:
        typer.echo(f"Config file already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    written = save_config(DEFAULT_CONFIG, target)
    if state.json_output:
        print_json_payload(state, {"status": "created", "path": str(written)})
        return
    if state.plain_output:
        typer.echo(f"created\t{written}")
        return
    state.console.print(f"Config written to {written}")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Show the active, merged configuration."""
    state = get_state(ctx)
    if state.json_output:
        print_json_payload(state, {"path": str(state.config_path), "config": state.config})
        return
    if state.plain_output:
        typer.echo(f"path\t{state.config_path}")
        typer.echo(dict_to_toml(state.config))
        return
    state.console.print(f"# {state.config_path}", markup=False)
    state.console.print(dict_to_toml(state.config), markup=False)

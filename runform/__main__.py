"""Entry point for runform."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from runform import __version__
from runform.commands import config as config_commands
from runform.commands.analyze import analyze_command, compare_command, simple_command
from runform.commands.coaching import errors_command, focus_command, recommend_command, report_command
from runform.core.config import ConfigError, config_language, default_config_path, load_config
from runform.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Running technique analysis command-line interface",
    invoke_without_command=True,
)


def _configure_logging(console: Console, verbose: bool) -> None:
    handler = RichHandler(console=console, show_time=False, show_path=False)
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    _configure_logging(console, verbose)

    prefers_json = cfg["display"]["output_format"] == "json"
    ctx.obj = CLIState(
        json_output=(json_output or prefers_json) and not plain_output,
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        language=config_language(cfg),
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("analyze")(analyze_command)
app.command("simple")(simple_command)
app.command("compare")(compare_command)
app.command("errors")(errors_command)
app.command("recommend")(recommend_command)
app.command("focus")(focus_command)
app.command("report")(report_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()

"""Shared command helpers."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional, TypeVar

import typer

from runform.core.models import to_payload
from runform.core.schemas import InputValidationError
from runform.core.state import CLIState
from runform.utils.parsing import InputFileError, load_input_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    data = to_payload(payload)
    if state.plain_output:
        typer.echo(json.dumps(data, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=data)


def fail(message: str) -> NoReturn:
    """Report a user-facing error and exit with code 2."""
    typer.echo(message)
    raise typer.Exit(code=2)


def read_input(file: Optional[Path], stdin: bool) -> dict:
    """Load the input object for a command from FILE, '-' or --stdin."""
    use_stdin = stdin or (file is not None and str(file) == "-")
    stdin_text = sys.stdin.read() if use_stdin else ""
    try:
        return load_input_payload(file_path=file, read_stdin=use_stdin, stdin_text=stdin_text)
    except InputFileError as exc:
        fail(f"Input error: {exc}")


def run_engine(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call an engine entry point, mapping validation failures to exit code 2."""
    try:
        return func(*args, **kwargs)
    except InputValidationError as exc:
        logger.debug("Validation errors: %s", exc.errors)
        fail(f"Validation error: {exc}")

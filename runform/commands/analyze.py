"""Technique scoring commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from runform.commands.common import get_state, print_json_payload, read_input, run_engine
from runform.core.analysis import analyze_run
from runform.core.comparison import compare_runs
from runform.core.constants import CATEGORY_ORDER
from runform.core.models import RunAnalysisResult, to_payload
from runform.core.simple import analyze_simple
from runform.core.state import CLIState
from runform.exporters.json_export import write_json
from runform.utils.formatting import (
    category_label,
    format_percent,
    format_score,
    level_label,
    score_style,
)


def _analysis_payload(result: RunAnalysisResult, include_breakdown: bool) -> dict:
    payload = to_payload(result)
    if not include_breakdown:
        payload.pop("breakdown", None)
    return payload


def _print_analysis(state: CLIState, result: RunAnalysisResult, include_breakdown: bool = False) -> None:
    if state.json_output:
        print_json_payload(state, _analysis_payload(result, include_breakdown))
        return

    scores = result.category_scores.as_dict()
    if state.plain_output:
        typer.echo(f"score\t{result.composite_score}")
        typer.echo(f"level\t{result.classification.value}")
        for name in CATEGORY_ORDER:
            typer.echo(f"{name}\t{scores[name]}")
        if result.bmi is not None:
            typer.echo(f"bmi\t{result.bmi}")
            typer.echo(f"weight_category\t{result.weight_category}")
        if result.recommended_cadence is not None:
            typer.echo(f"recommended_cadence\t{result.recommended_cadence}")
        return

    table = Table(title=f"Technique score {format_score(result.composite_score)}")
    table.add_column("Category")
    table.add_column("Score", justify="right")
    for name in CATEGORY_ORDER:
        score = scores[name]
        table.add_row(category_label(name, state.language), f"[{score_style(score)}]{score:.1f}[/]")

    state.console.print(table)
    state.console.print(f"Level: {level_label(result.classification.value, state.language)}")
    if result.recommended_cadence is not None:
        state.console.print(f"Recommended cadence: {result.recommended_cadence} spm")
    state.console.print(result.summary)


def analyze_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML biomechanics file ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
    breakdown: bool = typer.Option(False, "--breakdown", help="Include per-scorer details in JSON"),
    output_file: Optional[Path] = typer.Option(None, help="Write JSON result to file"),
) -> None:
    """Score running technique from joint-angle statistics."""
    state = get_state(ctx)
    result = run_engine(analyze_run, read_input(file, stdin))

    if output_file:
        write_json(output_file, _analysis_payload(result, breakdown))
    _print_analysis(state, result, include_breakdown=breakdown)


def simple_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML file with per-joint means ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
    output_file: Optional[Path] = typer.Option(None, help="Write JSON result to file"),
) -> None:
    """Score running technique from joint-angle means only."""
    state = get_state(ctx)
    result = run_engine(analyze_simple, read_input(file, stdin))

    if output_file:
        write_json(output_file, _analysis_payload(result, False))
    _print_analysis(state, result)


def compare_command(
    ctx: typer.Context,
    before: Path = typer.Argument(..., help="Earlier run (JSON/YAML)"),
    after: Path = typer.Argument(..., help="Later run (JSON/YAML)"),
) -> None:
    """Compare two runs of the same athlete."""
    state = get_state(ctx)
    before_result = run_engine(analyze_run, read_input(before, False))
    after_result = run_engine(analyze_run, read_input(after, False))
    comparison = compare_runs(before_result, after_result)

    if state.json_output:
        print_json_payload(state, comparison)
        return

    if state.plain_output:
        typer.echo(f"improvement\t{comparison.improvement_percentage}")
        for name in CATEGORY_ORDER:
            typer.echo(f"{name}\t{comparison.category_changes[name]}")
        typer.echo(f"from_level\t{comparison.classification_change.from_level.value}")
        typer.echo(f"to_level\t{comparison.classification_change.to_level.value}")
        return

    table = Table(title=f"Comparison ({format_percent(comparison.improvement_percentage)})")
    table.add_column("Category")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_column("Change", justify="right")
    before_scores = before_result.category_scores.as_dict()
    after_scores = after_result.category_scores.as_dict()
    for name in CATEGORY_ORDER:
        delta = comparison.category_changes[name]
        style = "green" if delta > 0 else "red" if delta < 0 else ""
        table.add_row(
            category_label(name, state.language),
            f"{before_scores[name]:.1f}",
            f"{after_scores[name]:.1f}",
            f"[{style}]{delta:+.1f}[/]" if style else f"{delta:+.1f}",
        )
    state.console.print(table)
    state.console.print(comparison.summary)
    if comparison.areas_to_focus:
        state.console.print("Areas to focus: " + ", ".join(comparison.areas_to_focus))

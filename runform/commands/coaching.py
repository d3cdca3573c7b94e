"""Error detection and coaching commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from runform.commands.common import get_state, print_json_payload, read_input, run_engine
from runform.core.analysis import analyze_run
from runform.core.config import config_limits
from runform.core.detection import detect_errors
from runform.core.focus import get_focus_areas
from runform.core.models import RunnerLevel
from runform.core.recommendations import get_recommendations
from runform.core.report import build_report_blocks, run_full_analysis
from runform.exporters.json_export import write_json
from runform.exporters.markdown import report_to_markdown, write_report_markdown
from runform.utils.formatting import difficulty_label, severity_label, severity_style


def errors_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML biomechanics file ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
) -> None:
    """Detect technique errors."""
    state = get_state(ctx)
    result = run_engine(detect_errors, read_input(file, stdin))

    if state.json_output:
        print_json_payload(state, result)
        return

    if state.plain_output:
        typer.echo("type\tseverity\tconfidence\tname")
        for error in result.errors:
            typer.echo(
                f"{error.error_type.value}\t{error.severity.value}\t{error.confidence:.1f}\t{error.error_name}"
            )
        typer.echo(f"total\t{result.error_count}")
        return

    if not result.errors:
        state.console.print(result.summary)
        return

    table = Table(title=f"Technique errors ({result.error_count})")
    table.add_column("Error")
    table.add_column("Severity")
    table.add_column("Confidence", justify="right")
    table.add_column("Description")
    for error in result.errors:
        style = severity_style(error.severity.value)
        table.add_row(
            error.error_name,
            f"[{style}]{severity_label(error.severity.value, state.language)}[/]",
            f"{error.confidence:.0f}%",
            error.description,
        )
    state.console.print(table)


def _parse_level(value: Optional[str]) -> Optional[RunnerLevel]:
    if value is None:
        return None
    try:
        return RunnerLevel(value.upper())
    except ValueError:
        choices = ", ".join(level.value for level in RunnerLevel)
        raise typer.BadParameter(f"--level must be one of: {choices}")


def recommend_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML biomechanics file ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
    level: Optional[str] = typer.Option(
        None,
        help="Runner level for the time estimate (default: classified from the input)",
    ),
) -> None:
    """Build ranked recommendations and exercises."""
    state = get_state(ctx)
    runner_level = _parse_level(level)
    limits = config_limits(state.config)

    payload = read_input(file, stdin)
    detection = run_engine(detect_errors, payload)
    if runner_level is None:
        runner_level = run_engine(analyze_run, payload).classification

    result = get_recommendations(
        detection.errors,
        runner_level=runner_level,
        limit=limits["max_recommendations"],
        exercise_limit=limits["max_exercises"],
    )

    if state.json_output:
        print_json_payload(state, result)
        return

    if state.plain_output:
        for item in result.recommendations:
            typer.echo(f"{item.priority}\t{item.focus_area}\t{item.recommendation}")
        for exercise in result.exercises:
            typer.echo(f"exercise\t{exercise.id}\t{exercise.name}")
        typer.echo(f"estimated_improvement_time\t{result.estimated_improvement_time}")
        return

    for item in result.recommendations:
        state.console.print(f"[bold]{item.priority}. {item.focus_area}[/bold]")
        state.console.print(f"   {item.recommendation}")
        state.console.print(f"   Expected: {item.expected_improvement}")

    if result.exercises:
        table = Table(title="Exercises")
        table.add_column("Exercise")
        table.add_column("Dosage")
        table.add_column("Frequency")
        table.add_column("Difficulty")
        for exercise in result.exercises:
            table.add_row(
                exercise.name,
                f"{exercise.sets} x {exercise.reps}",
                exercise.frequency,
                difficulty_label(exercise.difficulty.value, state.language),
            )
        state.console.print(table)

    state.console.print(f"Focus areas: {', '.join(result.focus_areas)}")
    state.console.print(f"Estimated improvement time: {result.estimated_improvement_time}")


def focus_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML biomechanics file ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
) -> None:
    """Rank training focus areas."""
    state = get_state(ctx)
    limits = config_limits(state.config)
    payload = read_input(file, stdin)
    analysis = run_engine(analyze_run, payload)
    detection = run_engine(detect_errors, payload)
    result = get_focus_areas(detection.errors, analysis, limit=limits["max_priorities"])

    if state.json_output:
        print_json_payload(state, result)
        return

    if state.plain_output:
        for priority in result.priorities:
            typer.echo(f"{priority.priority}\t{priority.source}\t{priority.area}")
        typer.echo(f"estimated_improvement\t{result.estimated_improvement}")
        return

    for priority in result.priorities:
        state.console.print(f"[bold]{priority.priority}. {priority.area}[/bold]: {priority.action}")
        state.console.print(f"   {priority.reason}")
    for tip in result.tips:
        state.console.print(f"- {tip}")
    state.console.print(f"Estimated improvement: {result.estimated_improvement}")


def report_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="JSON/YAML biomechanics file ('-' for stdin)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
    output_format: str = typer.Option("markdown", "--format", help="Output format: markdown|json"),
    output_file: Optional[Path] = typer.Option(None, help="Write result to file"),
) -> None:
    """Run every engine and produce a full report."""
    state = get_state(ctx)
    if output_format not in {"markdown", "json"}:
        raise typer.BadParameter("--format must be one of: markdown, json")

    full = run_engine(run_full_analysis, read_input(file, stdin), **config_limits(state.config))

    if state.json_output or output_format == "json":
        blocks = build_report_blocks(full, language=state.language)
        if output_file:
            write_json(output_file, blocks)
        print_json_payload(state, blocks)
        return

    if output_file:
        write_report_markdown(output_file, full, language=state.language)
    markdown = report_to_markdown(full, language=state.language)
    if state.plain_output:
        typer.echo(markdown)
        return
    state.console.print(markdown, markup=False)

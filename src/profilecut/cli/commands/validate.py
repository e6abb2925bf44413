"""Validate command for checking job files.

Loads a job file, checks it against the schema, then dry-runs the
consumption estimate so catalogue problems (skipped standard lengths, cuts
longer than any pipe) are reported before the job is used.
"""

from pathlib import Path
from typing import Annotated

import typer

from profilecut.application import OptimizeConsumptionCommand
from profilecut.application.config import ConfigError, load_config
from profilecut.application.diagnostics import CollectingDiagnostics


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a profile cutting job file.

    Exit codes:
        0 - Job is valid with no warnings
        1 - Job has errors (cannot be used)
        2 - Job is valid but has warnings

    Example:
        profilecut validate window-frames.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        job = load_config(job_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    diagnostics = CollectingDiagnostics()
    output = OptimizeConsumptionCommand(diagnostics=diagnostics).execute(job)

    if output.errors:
        typer.echo("Errors:", err=True)
        for error in output.errors:
            typer.echo(f"  {error}", err=True)
        typer.echo()

    if diagnostics.warnings:
        typer.echo("Warnings:")
        for warning in diagnostics.warnings:
            typer.echo(f"  {warning}")
        typer.echo()

    if output.errors:
        typer.echo(
            f"Validation failed: {len(output.errors)} error(s), "
            f"{len(diagnostics.warnings)} warning(s)",
            err=True,
        )
        raise typer.Exit(code=1)
    if diagnostics.warnings:
        typer.echo(f"Validation passed with {len(diagnostics.warnings)} warning(s)")
        raise typer.Exit(code=2)
    typer.echo("Validation passed. Job is valid.")


def _display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    if error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for d in error.details:
            typer.echo(
                f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
                f"{d.get('message', '')}",
                err=True,
            )
    elif error.error_type == "validation" and error.details:
        for d in error.details:
            suffix = f" (got {d['value']!r})" if d.get("value") is not None else ""
            path = d.get("path") or "<root>"
            typer.echo(f"  {path}: {d.get('message')}{suffix}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)

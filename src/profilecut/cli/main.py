"""Typer CLI for profile cutting."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from profilecut.application import (
    GenerateCuttingPlanCommand,
    OptimizeConsumptionCommand,
)
from profilecut.application.config import ConfigError, JobConfiguration, load_config
from profilecut.cli.commands import validate_command
from profilecut.domain import convert_unit
from profilecut.infrastructure import (
    ConsumptionReportFormatter,
    CuttingPlanFormatter,
    cutting_plan_to_dict,
)


class OutputFormat(str, Enum):
    """Report formats."""

    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="profilecut",
    help="Plan stock pipe consumption and cutting layouts for profile materials.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """Profile cutting-stock optimizer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_job(job_file: Path) -> JobConfiguration:
    try:
        return load_config(job_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def optimize(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    layouts: Annotated[
        bool, typer.Option("--layouts/--no-layouts", help="Show per-pipe layouts")
    ] = True,
) -> None:
    """Estimate how many stock pipes the job's cuts consume."""
    job = _load_job(job_file)
    output = OptimizeConsumptionCommand().execute(job)

    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(output.result.to_dict(), indent=2))
    else:
        formatter = ConsumptionReportFormatter(include_layouts=layouts)
        typer.echo(formatter.format(output.result, output.material_name))


@app.command()
def plan(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
) -> None:
    """Build a stock-limited cutting plan from the job's plan section."""
    job = _load_job(job_file)
    output = GenerateCuttingPlanCommand().execute(job)

    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(cutting_plan_to_dict(output.plan), indent=2))
    else:
        typer.echo(CuttingPlanFormatter().format(output.plan))


@app.command()
def convert(
    value: Annotated[float, typer.Argument(help="Value to convert")],
    from_unit: Annotated[str, typer.Argument(help="Unit of the value")],
    to_unit: Annotated[str, typer.Argument(help="Target unit")],
) -> None:
    """Convert a length or area between units."""
    conversion = convert_unit(value, from_unit, to_unit)
    if not conversion.ok:
        typer.echo(f"Error: {conversion.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{value:g} {from_unit} = {conversion.result:.6g} {to_unit}")


if __name__ == "__main__":
    app()

"""CLI interface using Typer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from pax_presence import __version__
from pax_presence.config import OutputFormat, PresenceConfig
from pax_presence.exporters import (
    export_csv,
    export_json,
    export_markdown,
    export_series_json,
)
from pax_presence.loaders import load_flights
from pax_presence.models import Flight, PresenceGrid
from pax_presence.presence import passenger_distribution, passenger_grid

Exporter = Callable[[PresenceGrid, Path], Path]

EXPORTERS: dict[str, Exporter] = {
    "json": export_json,
    "csv": export_csv,
    "markdown": export_markdown,
}

app = typer.Typer(
    name="pax-presence",
    help="Estimate passengers present in the terminal around flight times.",
    add_completion=False,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pax-presence {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def _load(flights_file: Path) -> list[Flight]:
    try:
        return load_flights(flights_file)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Could not load flights:[/red] {exc}")
        raise typer.Exit(code=1) from None


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Pax Presence: terminal passenger presence for disrupted flights."""


@app.command()
def series(
    flights_file: Annotated[
        Path, typer.Argument(help="JSON or CSV file of flight rows.")
    ],
    flight_number: Annotated[
        str, typer.Argument(help="Flight number to estimate.")
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the series as JSON to this path."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on unrecognized flight types."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Show the passenger presence curve of a single flight."""
    _configure_logging(verbose)
    config = PresenceConfig.from_overrides(strict_flight_types=strict or None)

    flights = [f for f in _load(flights_file) if f.flight_number == flight_number]
    if not flights:
        console.print(f"[red]Flight {flight_number} not found in {flights_file}[/red]")
        raise typer.Exit(code=1)
    flight = flights[0]

    try:
        points = passenger_distribution(flight, config)
    except ValueError as exc:
        console.print(f"[red]Estimation failed:[/red] {exc}")
        raise typer.Exit(code=1) from None

    if not points:
        console.print(
            f"[yellow]No presence curve for {flight_number} "
            f"(type={flight.flight_type!r}, no usable type or time).[/yellow]"
        )
        raise typer.Exit()

    if output is not None:
        export_series_json(points, output)

    table = Table(title=f"{flight_number} ({flight.flight_type}) passengers in terminal")
    table.add_column("Time (UTC)", style="bold")
    table.add_column("Passengers", justify="right")
    for p in points:
        table.add_row(p.time_formatted, str(p.passenger_count))

    console.print()
    console.print(table)
    if output is not None:
        console.print(f"\nJSON written to [bold]{output}[/bold]")


@app.command()
def grid(
    flights_file: Annotated[
        Path, typer.Argument(help="JSON or CSV file of flight rows.")
    ],
    flight: Annotated[
        list[str] | None,
        typer.Option("--flight", help="Flight number to include (repeatable). Default: all."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path. Default: passenger_grid.json."),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: json, csv, markdown. Default: json."),
    ] = None,
    buffer_hours: Annotated[
        int | None,
        typer.Option("--buffer-hours", help="Trailing hours after the last window. Default: 2."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on unrecognized flight types."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Build the combined presence grid of several flights."""
    _configure_logging(verbose)

    try:
        config = PresenceConfig.from_overrides(
            grid_buffer_hours=buffer_hours,
            strict_flight_types=strict or None,
            output_file=output,
            output_format=output_format,
        )
    except ValueError as exc:
        console.print(f"[red]Invalid options:[/red] {exc}")
        raise typer.Exit(code=1) from None

    flights = _load(flights_file)
    if flight:
        wanted = set(flight)
        flights = [f for f in flights if f.flight_number in wanted]

    try:
        result = passenger_grid(flights, config)
    except ValueError as exc:
        console.print(f"[red]Estimation failed:[/red] {exc}")
        raise typer.Exit(code=1) from None

    if not result:
        console.print("[yellow]No flights with a usable type and time.[/yellow]")
        raise typer.Exit()

    exporter = EXPORTERS[config.output_format]
    exporter(result, config.output_file)

    console.print()
    table = Table(title="Passenger Presence by Flight")
    table.add_column("Flight", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Peak", justify="right", style="red")
    for c in result.columns:
        peak = max(row.counts[c.key] for row in result.rows)
        table.add_row(c.flight_number, c.flight_type.value, str(peak))

    console.print(table)
    console.print(
        f"\n{config.output_format.upper()} written to [bold]{config.output_file}[/bold]"
    )
    console.print(f"Time buckets: {len(result.rows)}")
    peak_row = result.peak
    console.print(f"Peak presence: {peak_row.total} at {peak_row.time_formatted} UTC")

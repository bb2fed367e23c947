"""Markdown exporter for presence grids."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pax_presence.models import PresenceGrid


def export_markdown(
    grid: PresenceGrid,
    output_path: Path,
) -> Path:
    """Export a presence grid as a Markdown report with flight and timeline tables."""
    timestamp = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    lines: list[str] = [
        "# Terminal Passenger Presence",
        f"Generated: {timestamp}",
        "",
    ]

    if not grid.rows:
        lines.append("No flights with a usable type and time.")
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path

    # -- Flights --
    lines.extend([
        "## Flights",
        "",
        "| Flight | Type | Peak |",
        "|--------|------|-----:|",
    ])
    for c in grid.columns:
        peak = max(row.counts.get(c.key, 0) for row in grid.rows)
        lines.append(f"| {c.flight_number} | {c.flight_type.value} | {peak} |")

    peak_row = grid.peak
    lines.extend([
        "",
        f"**Peak presence**: {peak_row.total} passengers at {peak_row.time_formatted} UTC",
        "",
    ])

    # -- Timeline --
    header = ["Time (UTC)", *(c.flight_number for c in grid.columns), "Total"]
    lines.extend([
        "## Timeline",
        "",
        "| " + " | ".join(header) + " |",
        "|" + "|".join(["------"] + ["-----:"] * (len(header) - 1)) + "|",
    ])
    for row in grid.rows:
        cells = [
            row.time_formatted,
            *(str(row.counts.get(c.key, 0)) for c in grid.columns),
            str(row.total),
        ]
        lines.append("| " + " | ".join(cells) + " |")

    output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return output_path

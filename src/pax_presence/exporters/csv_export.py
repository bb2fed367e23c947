"""CSV exporter for presence grids."""

from __future__ import annotations

import csv
from pathlib import Path

from pax_presence.models import PresenceGrid


def export_csv(
    grid: PresenceGrid,
    output_path: Path,
) -> Path:
    """Export a presence grid as CSV, one row per time bucket.

    Per-flight columns are headed by flight number, in grid column order.
    """
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["time", "time_formatted", *(c.flight_number for c in grid.columns), "total"]
        )
        for row in grid.rows:
            writer.writerow([
                row.time,
                row.time_formatted,
                *(row.counts.get(c.key, 0) for c in grid.columns),
                row.total,
            ])

    return output_path

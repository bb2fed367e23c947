"""JSON exporters for presence grids and single-flight series."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from pax_presence.models import PassengerTimePoint, PresenceGrid
from pax_presence.presence import to_chart_series


def grid_to_dict(grid: PresenceGrid) -> dict[str, Any]:
    """Columns, flattened rows and chart series of a grid."""
    return {
        "columns": [
            {
                "key": c.key,
                "flight_number": c.flight_number,
                "flight_type": c.flight_type.value,
            }
            for c in grid.columns
        ],
        "rows": [row.as_dict() for row in grid.rows],
        "series": [asdict(s) for s in to_chart_series(grid)],
    }


def export_json(
    grid: PresenceGrid,
    output_path: Path,
    indent: int = 2,
) -> Path:
    """Export a presence grid to a JSON file."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(grid_to_dict(grid), f, indent=indent, ensure_ascii=False)
    return output_path


def export_series_json(
    points: list[PassengerTimePoint],
    output_path: Path,
    indent: int = 2,
) -> Path:
    """Export a single-flight passenger series to a JSON file."""
    data = [asdict(p) for p in points]
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
    return output_path

"""Exporters for presence grids and series."""

from pax_presence.exporters.csv_export import export_csv
from pax_presence.exporters.json_export import export_json, export_series_json
from pax_presence.exporters.markdown_export import export_markdown

__all__ = ["export_csv", "export_json", "export_markdown", "export_series_json"]

"""Mini README: Export utilities for MessMate data.

Exposes the CSV exporter used by the CLI ``export`` command and the web
``/export.csv`` route.
"""

from .csv_exporter import CsvExporter, export_filename, render_csv

__all__ = ["CsvExporter", "export_filename", "render_csv"]

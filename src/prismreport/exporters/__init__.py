"""Exporters package for file-based report outputs."""

from .base_exporter import BaseExporter
from .csv_exporter import CSVExporter
from .json_exporter import JSONExporter
from .xlsx_exporter import XLSXExporter

EXPORTERS = {
    "xlsx": XLSXExporter,
    "csv": CSVExporter,
    "json": JSONExporter,
}

__all__ = ["BaseExporter", "CSVExporter", "EXPORTERS", "JSONExporter", "XLSXExporter"]

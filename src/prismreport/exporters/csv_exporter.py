import csv
from pathlib import Path
from typing import Any, List

from ..models.metrics import ClusterReportRow
from .base_exporter import BaseExporter
from .formatting import HEADERS, format_row


class CSVExporter(BaseExporter):
    EXTENSION = "csv"

    def write(self, rows: List[ClusterReportRow], out_path: Path) -> None:
        """Write the report as CSV with a header line, even when there are no rows."""
        with open(out_path, "w", encoding="utf-8", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=HEADERS)
            writer.writeheader()
            for row in rows:
                writer.writerow({k: self._sanitize_cell(v) for k, v in format_row(row).items()})

    def _sanitize_cell(self, value: Any) -> Any:
        """
        Sanitize value to prevent CSV formula injection.
        If the value is a string starting with =, +, -, or @, prefix it with a single quote.
        """
        if isinstance(value, str) and value.startswith(("=", "+", "-", "@")):
            return f"'{value}"
        return value

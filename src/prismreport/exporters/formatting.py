# src/prismreport/exporters/formatting.py
"""
Presentation of report rows: column order, header labels with units and
display rounding. Only exporters and reporters use this module; the numeric
model stays unrounded.
"""

from typing import Any, Dict, List, NamedTuple, Optional

from ..models.metrics import ClusterReportRow


class Column(NamedTuple):
    header: str
    field: str
    decimals: Optional[int] = None
    number_format: Optional[str] = None


COLUMNS: List[Column] = [
    Column("Cluster UUID", "unique_id"),
    Column("Cluster IP", "external_address"),
    Column("Cluster Name", "name"),
    Column("IOPS", "iops", 0, "#,##0"),
    Column("Latency (ms)", "latency_ms", 2, "0.00"),
    Column("CPU Usage (%)", "cpu_percent", 1, "0.0"),
    Column("Memory Usage (%)", "memory_percent", 1, "0.0"),
    Column("Storage Usage (%)", "storage_percent", 1, "0.0"),
    Column("RF2 Usable Storage (%)", "rf2_storage_percent", 0, "0"),
]

HEADERS: List[str] = [column.header for column in COLUMNS]


def display_value(column: Column, value: Any) -> Any:
    if column.decimals is None or value is None:
        return value
    if column.decimals == 0:
        return int(round(value))
    return round(value, column.decimals)


def format_row(row: ClusterReportRow) -> Dict[str, Any]:
    """Return the row keyed by header, in report column order, rounded for display."""
    return {column.header: display_value(column, getattr(row, column.field)) for column in COLUMNS}


def format_cells(row: ClusterReportRow) -> List[Any]:
    return [display_value(column, getattr(row, column.field)) for column in COLUMNS]

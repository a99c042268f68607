# src/prismreport/reporters/console_reporter.py
"""
A reporter that displays the report rows in a formatted table in the console.
"""

import logging
from typing import List

from rich.console import Console
from rich.table import Table

from ..exporters.formatting import COLUMNS, format_cells
from ..models.metrics import ClusterReportRow
from ..models.run import RunFailure
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


class ConsoleReporter(BaseReporter):
    """
    Renders cluster utilization rows to the console using the 'rich' library.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def report(self, data: List[ClusterReportRow]):
        if not data:
            self.console.print("No clusters to report.", style="yellow")
            return

        table = Table(
            title="Prism Cluster Utilization Report",
            header_style="bold magenta",
            show_lines=True,
        )
        for column in COLUMNS:
            if column.decimals is None:
                table.add_column(column.header, style="cyan")
            else:
                table.add_column(column.header, style="green", justify="right")

        for item in data:
            table.add_row(*[str(value) for value in format_cells(item)])

        self.console.print(table)

    def report_failure(self, failure: RunFailure):
        self.console.print("Report run failed; no report was written.", style="bold red")
        self.console.print(failure.describe(), style="red")

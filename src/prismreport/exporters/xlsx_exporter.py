from pathlib import Path
from typing import List

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..models.metrics import ClusterReportRow
from .base_exporter import BaseExporter
from .formatting import COLUMNS, HEADERS, format_cells

SHEET_TITLE = "Cluster Utilization"


class XLSXExporter(BaseExporter):
    """Writes the report as a single-sheet Excel workbook with a filterable header."""

    EXTENSION = "xlsx"

    def write(self, rows: List[ClusterReportRow], out_path: Path) -> None:
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        ws.append(HEADERS)
        for cell in ws[1]:
            cell.font = Font(bold=True)

        for row in rows:
            ws.append(format_cells(row))
            for idx, column in enumerate(COLUMNS, 1):
                if column.number_format:
                    ws.cell(row=ws.max_row, column=idx).number_format = column.number_format

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = f"A1:{get_column_letter(len(HEADERS))}{ws.max_row}"
        self.fix_column_widths(ws)

        wb.save(out_path)

    @staticmethod
    def fix_column_widths(ws: Worksheet) -> None:
        for column_cells in ws.columns:
            header_width = len(str(column_cells[0].value))
            data_width = max((len(str(cell.value)) for cell in column_cells[1:]), default=0)
            if header_width >= data_width:
                # room for the filter button
                width = header_width + (4 if header_width < 5 else 3)
            else:
                width = data_width * 1.2
            ws.column_dimensions[column_cells[0].column_letter].width = width

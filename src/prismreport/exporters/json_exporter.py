import json
from pathlib import Path
from typing import List

from ..models.metrics import ClusterReportRow
from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    """Writes unrounded rows with their model field names, for machine consumption."""

    EXTENSION = "json"

    def write(self, rows: List[ClusterReportRow], out_path: Path) -> None:
        content = json.dumps([row.model_dump(mode="json") for row in rows], ensure_ascii=False, indent=2)
        out_path.write_text(content, encoding="utf-8")

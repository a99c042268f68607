from __future__ import annotations

import os
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List

from ..core.config import config
from ..core.exceptions import ExportError
from ..models.metrics import ClusterReportRow


class BaseExporter(ABC):
    """Abstract base class for file exporters.

    Subclasses should provide an EXTENSION and implement `write`.
    """

    FILENAME_PREFIX: str = "prism-report"
    EXTENSION: str = ""

    def default_filename(self, now: datetime | None = None) -> str:
        """Timestamped file name, e.g. prism-report-20261018-142501.xlsx."""
        now = now or datetime.now()
        return f"{self.FILENAME_PREFIX}-{now:%Y%m%d-%H%M%S}.{self.EXTENSION}"

    def resolve_path(self, path: str | os.PathLike | None = None) -> Path:
        if path:
            return Path(path)
        return Path(config.OUTPUT_DIR) / self.default_filename()

    def export(self, rows: List[ClusterReportRow], path: str | os.PathLike | None = None) -> str:
        """Export the rows to disk. Return the written path.

        Raises:
            ExportError: If the file cannot be written.
        """
        out_path = self.resolve_path(path)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            self.write(list(rows or []), out_path)
        except OSError as e:
            raise ExportError(f"Failed to write report to {out_path}: {e}") from e
        return str(out_path)

    @abstractmethod
    def write(self, rows: List[ClusterReportRow], out_path: Path) -> None:
        raise NotImplementedError()

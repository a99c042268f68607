# src/prismreport/models/cli.py
"""
Data models for prismreport CLI command options using Typer.
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

OUTPUT_FORMATS = ["xlsx", "csv", "json"]


class OutputOptions:
    """Dependency-injectable model for output/export options."""

    def __init__(
        self,
        output_format: Annotated[
            str,
            typer.Option(
                "--output",
                help="Output format (xlsx/csv/json).",
                case_sensitive=False,
            ),
        ] = "xlsx",
        output_path: Annotated[
            Optional[Path],
            typer.Option(
                "--output-path",
                help="Output file path. Default: '<OUTPUT_DIR>/prism-report-<timestamp>.<format>'",
                exists=False,
                dir_okay=False,
                writable=True,
            ),
        ] = None,
    ):
        self.output_format = output_format
        self.output_path = output_path
        self._validate()

    def _validate(self):
        """Validates the output format."""
        if not self.output_format or self.output_format.lower() not in OUTPUT_FORMATS:
            raise typer.BadParameter(
                f"Invalid output format '{self.output_format}'. Must be one of: {', '.join(OUTPUT_FORMATS)}."
            )

    @property
    def format(self) -> str:
        """Returns the validated, lower-cased format."""
        return self.output_format.lower()

# src/prismreport/cli/report.py
"""
Implements the `report` command for the prismreport CLI.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.factory import get_coordinator, get_exporter
from ..models.cli import OutputOptions
from ..models.cluster import TargetInstance
from ..reporters.console_reporter import ConsoleReporter
from ..utils.http_client import get_http_client
from ..utils.targets import build_targets, read_targets_file

logger = logging.getLogger(__name__)

app = typer.Typer(help="Poll Prism Central and export a cluster utilization report.", add_completion=False)


def resolve_targets(targets_file: Optional[Path], target: Optional[List[str]]) -> List[TargetInstance]:
    """
    Combine --target options with the targets file.

    The file is read when given explicitly, or when no --target was passed.
    """
    addresses = list(target or [])
    if targets_file is not None or not addresses:
        path = targets_file or Path(config.TARGETS_FILE)
        try:
            addresses.extend(read_targets_file(path, config.TARGET_COLUMN))
        except FileNotFoundError:
            logger.error(f"Targets file not found: {path}")
            raise typer.Exit(code=1)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read targets file {path}: {e}")
            raise typer.Exit(code=1)

    targets = build_targets(addresses)
    if not targets:
        logger.error("No Prism Central addresses to poll.")
        raise typer.Exit(code=1)
    return targets


def resolve_credentials(username: Optional[str]) -> tuple:
    """Use configured credentials where present and prompt for the rest."""
    username = username or config.PRISM_USERNAME or typer.prompt("Prism username")
    password = config.PRISM_PASSWORD or typer.prompt(f"Password for {username}", hide_input=True)
    return username, password


@app.callback(invoke_without_command=True)
def report(
    ctx: typer.Context,
    targets_file: Annotated[
        Optional[Path],
        typer.Option(
            "--targets",
            help="CSV file listing Prism Central addresses. Default: TARGETS_FILE or './targets.csv'",
            dir_okay=False,
        ),
    ] = None,
    target: Annotated[
        Optional[List[str]],
        typer.Option("--target", help="Prism Central address to poll. May be repeated."),
    ] = None,
    username: Annotated[Optional[str], typer.Option("--username", "-u", help="Prism username.")] = None,
    output_format: Annotated[
        str,
        typer.Option("--output", help="Output format (xlsx/csv/json).", case_sensitive=False),
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
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Do not print the report table.")] = False,
):
    """
    Poll every Prism Central, build one row per cluster and export the report.

    Nothing is written unless every request for every instance succeeds.
    """
    if ctx.invoked_subcommand is not None:
        return

    output = OutputOptions(output_format=output_format, output_path=output_path)
    targets = resolve_targets(targets_file, target)
    username, password = resolve_credentials(username)
    exporter = get_exporter(output.format)

    logger.info("Polling %d Prism Central instance(s)...", len(targets))
    with get_http_client(username, password) as client:
        coordinator = get_coordinator(client)
        result = coordinator.run(targets, exporter=exporter, output_path=output.output_path)

    console_reporter = ConsoleReporter()
    if not result.succeeded:
        console_reporter.report_failure(result.failure)
        raise typer.Exit(code=1)

    if not quiet:
        console_reporter.report(data=result.rows)
    print(f"Report exported to: {result.output_path}", file=sys.stderr)

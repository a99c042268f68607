# src/prismreport/cli/main.py
"""
Entry point of the prismreport CLI: logging setup, version reporting and
registration of the `report` sub-app.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from . import report

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# --- Setup Logger ---
logging.basicConfig(level=config.LOG_LEVEL.upper(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="prismreport",
    help="Point-in-time utilization report across a fleet of Prism-managed clusters.",
    add_completion=False,
)


def _version_text() -> str:
    from .. import __version__

    return f"prismreport version: {__version__}"


def version_callback(value: bool):
    if value:
        typer.echo(_version_text())
        raise typer.Exit()


def configure_logging(level: Optional[str]) -> None:
    """Re-apply the root logging setup when --log-level overrides LOG_LEVEL."""
    if not level:
        return
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level '{level}'.", param_hint="--log-level")
    logging.basicConfig(level=numeric, format=LOG_FORMAT, force=True)
    logger.debug("Log level set to %s", level.upper())


@app.command()
def version():
    """
    Show the version of prismreport.
    """
    typer.echo(_version_text())


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
):
    """
    Poll Prism Central instances and report per-cluster utilization.
    """
    configure_logging(log_level)


app.add_typer(report.app, name="report")


if __name__ == "__main__":
    app()

# src/prismreport/cli/__init__.py
"""
prismreport CLI Package

This package exposes the top-level Typer `app` for the console entrypoint
and tests.
"""

import logging

from ..core.processor import RunCoordinator
from ..reporters.console_reporter import ConsoleReporter
from .main import app

logger = logging.getLogger(__name__)

__all__ = ["app", "ConsoleReporter", "RunCoordinator"]

# src/prismreport/core/factory.py
"""
Factory functions to instantiate the run coordinator and its collaborators.
"""

import logging

import httpx

from ..collectors.cluster_collector import ClusterInventoryCollector
from ..collectors.metric_collector import GroupedMetricCollector
from ..collectors.storage_collector import StoragePoolCollector
from ..exporters import EXPORTERS, BaseExporter
from .assembler import ReportAssembler
from .calculator import RF2StorageCalculator
from .config import Config
from .config import config as global_config
from .processor import RunCoordinator

logger = logging.getLogger(__name__)


def get_coordinator(client: httpx.Client, settings: Config = None) -> RunCoordinator:
    """
    Build a RunCoordinator whose collectors all share `client`.
    """
    settings = settings or global_config
    return RunCoordinator(
        inventory_collector=ClusterInventoryCollector(client, settings),
        metric_collector=GroupedMetricCollector(client, settings),
        storage_calculator=RF2StorageCalculator(StoragePoolCollector(client, settings)),
        assembler=ReportAssembler(),
        settings=settings,
    )


def get_exporter(output_format: str) -> BaseExporter:
    try:
        return EXPORTERS[output_format.lower()]()
    except KeyError:
        raise ValueError(
            f"Invalid output format '{output_format}'. Must be one of: {', '.join(EXPORTERS)}."
        ) from None

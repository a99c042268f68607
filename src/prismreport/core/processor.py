# src/prismreport/core/processor.py
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from ..collectors.cluster_collector import ClusterInventoryCollector
from ..collectors.metric_collector import REPORT_METRICS, GroupedMetricCollector
from ..exporters.base_exporter import BaseExporter
from ..models.cluster import TargetInstance
from ..models.metrics import ClusterReportRow, MetricSeries
from ..models.run import RunFailure, RunResult, RunState
from .assembler import ReportAssembler
from .calculator import RF2StorageCalculator
from .config import Config
from .config import config as global_config
from .decoder import decode_series
from .exceptions import PrismReportError

logger = logging.getLogger(__name__)


class ReportBuilder:
    """
    Owns the rows and per-instance states of a single run.

    A new builder is created for every run and passed through each stage, so
    nothing accumulates between runs.
    """

    def __init__(self, targets: Sequence[TargetInstance]):
        self._rows: List[ClusterReportRow] = []
        self.states: Dict[str, RunState] = {t.address: RunState.PENDING for t in targets}
        self.address: Optional[str] = None
        self.stage: str = "startup"

    def enter(self, address: Optional[str], stage: str, state: Optional[RunState] = None) -> None:
        self.address = address
        self.stage = stage
        if address is not None and state is not None:
            self.states[address] = state

    def add_rows(self, rows: Sequence[ClusterReportRow]) -> None:
        self._rows.extend(rows)

    def discard(self) -> None:
        self._rows.clear()

    @property
    def rows(self) -> List[ClusterReportRow]:
        return list(self._rows)


class RunCoordinator:
    """Sequences collection, calculation and assembly across all target instances."""

    def __init__(
        self,
        inventory_collector: ClusterInventoryCollector,
        metric_collector: GroupedMetricCollector,
        storage_calculator: RF2StorageCalculator,
        assembler: ReportAssembler = None,
        settings: Config = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.inventory_collector = inventory_collector
        self.metric_collector = metric_collector
        self.storage_calculator = storage_calculator
        self.assembler = assembler or ReportAssembler()
        self.settings = settings or global_config
        self.sleep = sleep

    def run(
        self,
        targets: Sequence[TargetInstance],
        exporter: BaseExporter = None,
        output_path: str = None,
    ) -> RunResult:
        """
        Execute the pipeline against every target, one at a time.

        The first error anywhere fails the whole run: accumulated rows are
        discarded and the exporter is never called. On success the complete
        row sequence is handed to the exporter exactly once.
        """
        logger.info("Starting report run for %d Prism Central instance(s)...", len(targets))
        builder = ReportBuilder(targets)

        try:
            for index, target in enumerate(targets):
                if index:
                    self.sleep(self.settings.INSTANCE_PACING_SECONDS)
                builder = self.process_instance(target, builder)

            rows = builder.rows
            written = None
            if exporter is not None:
                builder.enter(None, "export")
                written = exporter.export(rows, output_path)
                logger.info("Exported %d row(s) to %s", len(rows), written)

        except PrismReportError as e:
            failure = RunFailure(
                address=builder.address,
                stage=builder.stage,
                error_type=type(e).__name__,
                message=str(e),
            )
            if builder.address is not None:
                builder.states[builder.address] = RunState.FAILED
            builder.discard()
            logger.error("Report run failed: %s", failure.describe())
            return RunResult(state=RunState.FAILED, failure=failure)

        logger.info("Report run finished with %d row(s).", len(rows))
        return RunResult(state=RunState.DONE, rows=rows, output_path=written)

    def process_instance(self, target: TargetInstance, builder: ReportBuilder) -> ReportBuilder:
        """Collect, calculate and assemble the rows of one Prism Central instance."""
        address = target.address

        builder.enter(address, "inventory", RunState.FETCHING)
        directory = self.inventory_collector.collect(address)

        series: Dict[str, MetricSeries] = {}
        for metric in REPORT_METRICS:
            attribute = metric.value
            builder.enter(address, f"metrics:{attribute}")
            raw = self.metric_collector.fetch(address, attribute)
            series[attribute] = decode_series(attribute, raw)

        builder.enter(address, "assembly", RunState.ASSEMBLING)
        names = self.assembler.cluster_names(directory, series)

        storage: Dict[str, int] = {}
        for index, name in enumerate(names):
            if index:
                self.sleep(self.settings.CLUSTER_PACING_SECONDS)
            builder.enter(address, f"storage:{name}")
            identity = directory.lookup(name)
            storage[name] = self.storage_calculator.calculate(identity.external_address).percentage

        builder.enter(address, "assembly")
        rows = self.assembler.assemble(directory, series, storage)
        builder.add_rows(rows)

        builder.enter(address, "done", RunState.DONE)
        logger.info("Prism Central %s: %d cluster row(s) assembled", address, len(rows))
        return builder

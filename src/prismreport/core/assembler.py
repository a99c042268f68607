# src/prismreport/core/assembler.py
"""
Joins cluster identities, decoded metric series and RF2 storage figures into
report rows.

Series are joined explicitly on cluster name rather than by position, so a
series returned in a different order, or missing a cluster, can never shift
one cluster's values onto another.
"""

import logging
from typing import Dict, List, Mapping

from ..collectors.metric_collector import REPORT_METRICS
from ..models.metrics import ClusterReportRow, MetricAttribute, MetricSeries
from .decoder import to_number
from .directory import ClusterDirectory
from .exceptions import DirectoryLookupError, MalformedSeriesError

logger = logging.getLogger(__name__)

PPM_PER_PERCENT = 10_000
USECS_PER_MSEC = 1_000


class ReportAssembler:
    """Produces one ClusterReportRow per cluster of a target instance."""

    required_attributes = [attribute.value for attribute in REPORT_METRICS]

    def cluster_names(self, directory: ClusterDirectory, series: Mapping[str, MetricSeries]) -> List[str]:
        """
        Validate the join between the series and the directory and return the
        reportable cluster names in ascending order.

        Raises:
            MalformedSeriesError: If a metric is missing, a series repeats a
                cluster, or the series do not all name the same clusters.
            DirectoryLookupError: If a series names a cluster absent from the inventory.
        """
        mappings = self._series_mappings(series)

        reference_attribute = self.required_attributes[0]
        expected = set(mappings[reference_attribute])
        for attribute, mapping in mappings.items():
            names = set(mapping)
            if names != expected:
                missing = sorted(expected - names)
                extra = sorted(names - expected)
                raise MalformedSeriesError(
                    f"Series '{attribute}' does not match '{reference_attribute}': "
                    f"missing {missing or 'none'}, unexpected {extra or 'none'}"
                )

        for name in expected:
            directory.lookup(name)

        unreported = [name for name in directory.names if name not in expected]
        if unreported:
            logger.debug("Clusters in inventory without metrics: %s", ", ".join(unreported))

        return sorted(expected)

    def assemble(
        self,
        directory: ClusterDirectory,
        series: Mapping[str, MetricSeries],
        storage: Mapping[str, int],
    ) -> List[ClusterReportRow]:
        """
        Build the report rows of one target instance, in ascending cluster-name order.

        `storage` maps cluster name to its RF2 usable storage percentage.
        """
        names = self.cluster_names(directory, series)
        mappings = self._series_mappings(series)

        rows = []
        for name in names:
            identity = directory.lookup(name)
            if name not in storage:
                raise DirectoryLookupError(f"No RF2 storage figure for cluster '{name}'")

            def metric(attribute: MetricAttribute) -> float:
                return to_number(mappings[attribute.value][name], f"{attribute.value} of cluster '{name}'")

            rows.append(
                ClusterReportRow(
                    unique_id=identity.unique_id,
                    external_address=identity.external_address,
                    name=name,
                    iops=metric(MetricAttribute.IOPS),
                    latency_ms=metric(MetricAttribute.LATENCY) / USECS_PER_MSEC,
                    cpu_percent=metric(MetricAttribute.CPU) / PPM_PER_PERCENT,
                    memory_percent=metric(MetricAttribute.MEMORY) / PPM_PER_PERCENT,
                    storage_percent=metric(MetricAttribute.STORAGE),
                    rf2_storage_percent=storage[name],
                )
            )

        logger.debug("Assembled %d row(s)", len(rows))
        return rows

    def _series_mappings(self, series: Mapping[str, MetricSeries]) -> Dict[str, Dict[str, object]]:
        missing = [attribute for attribute in self.required_attributes if attribute not in series]
        if missing:
            raise MalformedSeriesError(f"Missing metric series: {', '.join(missing)}")
        return {attribute: series[attribute].as_mapping() for attribute in self.required_attributes}

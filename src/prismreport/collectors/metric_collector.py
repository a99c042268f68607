# src/prismreport/collectors/metric_collector.py

"""
GroupedMetricCollector issues Prism Central grouped-metrics queries, one per
metric attribute, grouped and sorted by cluster name.
This data is the input for the ReportAssembler.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.exceptions import MalformedSeriesError
from ..models.metrics import MetricAttribute
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

GROUPS_PATH = "/api/nutanix/v3/groups"

GROUPING_ATTRIBUTE = "cluster_name"
SORT_ORDER = "ASCENDING"
DEFAULT_OPERATION = "AVG"

# Fetched in this order, one query each.
REPORT_METRICS: List[MetricAttribute] = list(MetricAttribute)


class GroupedMetricCollector(BaseCollector):
    """
    Collects per-cluster metric series from the Prism Central groups API.
    """

    def build_query(self, attribute: str, operation: Optional[str] = DEFAULT_OPERATION) -> Dict[str, Any]:
        """
        Build the grouped-metrics request body for one attribute.

        The grouping key always comes first and carries no operation. Every
        query shares the same sort key and order so series can be compared.
        """
        metric = {"attribute": attribute}
        if operation:
            metric["operation"] = operation
        return {
            "entity_type": "cluster",
            "downsampling_interval": self.settings.DOWNSAMPLING_INTERVAL,
            "group_member_attributes": [{"attribute": GROUPING_ATTRIBUTE}, metric],
            "group_member_sort_attribute": GROUPING_ATTRIBUTE,
            "group_member_sort_order": SORT_ORDER,
        }

    def fetch(self, address: str, attribute: str, operation: Optional[str] = DEFAULT_OPERATION) -> List[Any]:
        """
        Run one grouped-metrics query and return the flat interleaved value
        array ("name, value, name, value, ...") in document order, values unconverted.
        """
        url = self._url(address, GROUPS_PATH)
        logger.info("Querying %s for '%s'", address, attribute)
        data = self._request("POST", url, json=self.build_query(attribute, operation))
        values = self._extract_values(data, attribute)
        logger.debug("'%s' on %s returned %d value(s)", attribute, address, len(values))
        return values

    def collect(self, address: str) -> Dict[str, List[Any]]:
        """
        Fetch every report metric from the Prism Central at `address`.

        Returns a mapping of attribute name to its raw value array. Queries are
        issued one at a time; each result is independent of the others.
        """
        results: Dict[str, List[Any]] = {}
        for attribute in REPORT_METRICS:
            results[attribute.value] = self.fetch(address, attribute.value)
        return results

    @staticmethod
    def _extract_values(data: Any, attribute: str) -> List[Any]:
        """
        Walk group_results -> entity_results and emit, for every entity, the
        grouping key followed by the metric, each selected by its datum name.

        A missing metric sample is kept as None so the array stays aligned;
        an entity without a cluster name cannot be joined and is rejected.
        """
        if not isinstance(data, dict) or not isinstance(data.get("group_results"), list):
            raise MalformedSeriesError(f"Grouped-metrics response for '{attribute}' has no group_results")

        values: List[Any] = []
        try:
            for group in data["group_results"]:
                for entity in group.get("entity_results") or []:
                    samples = {datum.get("name"): datum.get("values") for datum in entity.get("data") or []}
                    name = _first_sample(samples.get(GROUPING_ATTRIBUTE))
                    if name is None:
                        raise MalformedSeriesError(
                            f"Entity {entity.get('entity_id')!r} in '{attribute}' results has no {GROUPING_ATTRIBUTE}"
                        )
                    values.extend([name, _first_sample(samples.get(attribute))])
        except (AttributeError, KeyError, TypeError) as e:
            raise MalformedSeriesError(f"Unexpected grouped-metrics structure for '{attribute}': {e}") from e
        return values


def _first_sample(samples: Optional[List[Any]]) -> Any:
    """values[0].values[0] of one datum, or None when absent."""
    if not samples:
        return None
    leaf = samples[0].get("values")
    return leaf[0] if leaf else None

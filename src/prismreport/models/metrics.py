# src/prismreport/models/metrics.py
"""
This module defines the Pydantic data models for the metrics fetched from
Prism and for the report rows derived from them. The report row is purely
numeric; unit labels and display rounding are applied by the exporters.
"""

from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import MalformedSeriesError


class MetricAttribute(str, Enum):
    """Grouped-metrics attributes fetched for every cluster."""

    CPU = "hypervisor_cpu_usage_ppm"
    MEMORY = "hypervisor_memory_usage_ppm"
    STORAGE = "storage_usage_percent"
    LATENCY = "controller_avg_io_latency_usecs"
    IOPS = "controller_num_iops"


class MetricSeries(BaseModel):
    """
    The decoded result of one grouped-metrics query: (cluster name, raw value)
    pairs in the order the endpoint returned them.
    """

    attribute: str = Field(..., description="Metric attribute the series was queried for.")
    pairs: List[Tuple[str, Any]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pairs)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.pairs]

    def as_mapping(self) -> Dict[str, Any]:
        """Return the series keyed by cluster name.

        Raises MalformedSeriesError if a cluster name appears more than once.
        """
        mapping: Dict[str, Any] = {}
        for name, value in self.pairs:
            if name in mapping:
                raise MalformedSeriesError(f"Series '{self.attribute}' contains cluster '{name}' more than once")
            mapping[name] = value
        return mapping


class StoragePoolSample(BaseModel):
    """
    Raw capacity and usage of one storage pool, as reported by Prism Element.
    Figures include replication overhead.
    """

    name: str = Field("", description="Storage pool name.")
    capacity_bytes: float = Field(..., description="Raw pool capacity in bytes.")
    used_bytes: float = Field(..., description="Raw pool usage in bytes.")


class StorageUtilization(BaseModel):
    """
    RF2-adjusted usable storage of one cluster.
    """

    model_config = ConfigDict(frozen=True)

    total_tib: float = Field(..., description="Usable capacity in TiB after RF2 and the usable margin.")
    used_tib: float = Field(..., description="Usage in TiB after RF2.")
    percentage: int = Field(..., description="Usage as a whole percentage of usable capacity.")


class ClusterReportRow(BaseModel):
    """
    One line of the utilization report. Immutable once assembled.
    """

    model_config = ConfigDict(frozen=True)

    unique_id: str = Field(..., description="Cluster UUID.")
    external_address: str = Field(..., description="Cluster external IP address.")
    name: str = Field(..., description="Cluster name.")
    iops: float = Field(..., description="Controller IOPS.")
    latency_ms: float = Field(..., description="Average controller I/O latency in milliseconds.")
    cpu_percent: float = Field(..., description="Hypervisor CPU usage in percent.")
    memory_percent: float = Field(..., description="Hypervisor memory usage in percent.")
    storage_percent: float = Field(..., description="Storage usage in percent.")
    rf2_storage_percent: int = Field(..., description="RF2-adjusted usable storage usage in percent.")

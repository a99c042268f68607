# src/prismreport/core/calculator.py
"""
RF2 usable storage calculation.

Prism reports storage pool capacity and usage in raw bytes, i.e. including
the second copy kept by replication factor 2. The usable figure is half of
the raw one, and only 80% of the usable capacity is considered safe to fill
(headroom for rebuilding after a node failure).
"""

import logging
import math
from typing import Iterable

from ..collectors.storage_collector import StoragePoolCollector
from ..models.metrics import StoragePoolSample, StorageUtilization
from .exceptions import StorageCapacityError

logger = logging.getLogger(__name__)

BYTES_PER_TIB = 1099511627776
REPLICATION_FACTOR = 2
USABLE_CAPACITY_MARGIN = 0.80


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_rf2_utilization(samples: Iterable[StoragePoolSample]) -> StorageUtilization:
    """
    Sum the pools of one cluster and derive its RF2-adjusted usage.

        total = (sum(capacity) / 2) / TiB * 0.80
        used  = (sum(used) / 2) / TiB
        percentage = round(used / total * 100)

    Raises:
        StorageCapacityError: If the usable capacity is zero or the result is not finite.
    """
    samples = list(samples)
    raw_capacity = sum(s.capacity_bytes for s in samples)
    raw_used = sum(s.used_bytes for s in samples)

    total_tib = (raw_capacity / REPLICATION_FACTOR) / BYTES_PER_TIB * USABLE_CAPACITY_MARGIN
    used_tib = (raw_used / REPLICATION_FACTOR) / BYTES_PER_TIB

    if total_tib <= 0:
        raise StorageCapacityError(
            f"Usable storage capacity is {total_tib} TiB across {len(samples)} pool(s); cannot compute a percentage"
        )

    ratio = used_tib / total_tib * 100
    if not math.isfinite(ratio):
        raise StorageCapacityError(f"Storage usage ratio is not finite ({ratio})")

    return StorageUtilization(total_tib=total_tib, used_tib=used_tib, percentage=_round_half_up(ratio))


class RF2StorageCalculator:
    """Fetches a cluster's storage pools and computes its usable storage percentage."""

    def __init__(self, storage_collector: StoragePoolCollector):
        self.storage_collector = storage_collector

    def calculate(self, address: str) -> StorageUtilization:
        """
        Compute the RF2 usable storage utilization of the cluster managed at `address`.

        Raises:
            StorageQueryError: If the storage pool endpoint cannot be queried.
            ValueFormatError: If a pool reports non-numeric figures.
            StorageCapacityError: If the cluster has no usable capacity.
        """
        samples = self.storage_collector.collect(address)
        utilization = compute_rf2_utilization(samples)
        logger.info(
            "Cluster %s: %.2f TiB used of %.2f TiB usable (%d%%)",
            address,
            utilization.used_tib,
            utilization.total_tib,
            utilization.percentage,
        )
        return utilization

from .cluster_collector import ClusterInventoryCollector
from .metric_collector import GroupedMetricCollector
from .storage_collector import StoragePoolCollector

__all__ = [
    "ClusterInventoryCollector",
    "GroupedMetricCollector",
    "StoragePoolCollector",
]

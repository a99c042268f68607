# src/prismreport/collectors/storage_collector.py

import logging
from typing import List

from pydantic import ValidationError

from ..core.decoder import to_number
from ..core.exceptions import StorageQueryError
from ..models.metrics import StoragePoolSample
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

STORAGE_POOLS_PATH = "/PrismGateway/services/rest/v1/storage_pools"
USAGE_BYTES_KEY = "storage.usage_bytes"


class StoragePoolCollector(BaseCollector):
    """Reads raw storage pool capacity and usage from a cluster's Prism Element."""

    error_class = StorageQueryError

    def collect(self, address: str) -> List[StoragePoolSample]:
        """
        Fetch every storage pool of the cluster managed at `address`.

        Raises:
            StorageQueryError: If the endpoint fails or the response is unusable.
            ValueFormatError: If a pool reports non-numeric figures.
        """
        url = self._url(address, STORAGE_POOLS_PATH)
        logger.debug("Fetching storage pools from %s", address)
        data = self._request("GET", url)

        if not isinstance(data, dict) or not isinstance(data.get("entities"), list):
            raise StorageQueryError(f"Unexpected storage pool response from {address}")

        samples = []
        try:
            for entity in data["entities"]:
                name = entity.get("name") or ""
                usage_stats = entity.get("usageStats") or {}
                samples.append(
                    StoragePoolSample(
                        name=name,
                        capacity_bytes=to_number(entity.get("capacity"), f"capacity of pool '{name}'"),
                        used_bytes=to_number(usage_stats.get(USAGE_BYTES_KEY), f"usage of pool '{name}'"),
                    )
                )
        except (AttributeError, TypeError, ValidationError) as e:
            raise StorageQueryError(f"Unexpected storage pool entity from {address}: {e}") from e

        logger.debug("Cluster %s has %d storage pool(s)", address, len(samples))
        return samples

# src/prismreport/collectors/cluster_collector.py

import logging

from pydantic import ValidationError

from ..core.directory import ClusterDirectory
from ..core.exceptions import TransportError
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

CLUSTERS_LIST_PATH = "/api/nutanix/v3/clusters/list"


class ClusterInventoryCollector(BaseCollector):
    """Resolves the clusters registered with a Prism Central instance."""

    def collect(self, address: str) -> ClusterDirectory:
        """
        Query the cluster inventory of the Prism Central at `address` and
        build a ClusterDirectory from it.

        Raises:
            TransportError: If the request fails or an entity has an unexpected shape.
            DirectoryLookupError: If two clusters share a name.
        """
        url = self._url(address, CLUSTERS_LIST_PATH)
        body = {"kind": "cluster", "length": self.settings.INVENTORY_PAGE_SIZE}

        logger.info("Fetching cluster inventory from %s", address)
        data = self._request("POST", url, json=body)

        if not isinstance(data, dict):
            raise TransportError(f"Unexpected cluster inventory response from {address}")

        entities = data.get("entities") or []
        if not isinstance(entities, list):
            raise TransportError(f"Unexpected cluster inventory response from {address}")
        metadata = data.get("metadata")
        total = metadata.get("total_matches") if isinstance(metadata, dict) else None
        if isinstance(total, int) and total > len(entities):
            logger.warning(
                "Prism Central %s reports %d clusters but returned %d; raise INVENTORY_PAGE_SIZE.",
                address,
                total,
                len(entities),
            )

        try:
            directory = ClusterDirectory.from_inventory(entities)
        except (AttributeError, TypeError, ValidationError) as e:
            raise TransportError(f"Unexpected cluster inventory entity from {address}: {e}") from e
        logger.info("Prism Central %s manages %d reportable cluster(s)", address, len(directory))
        return directory

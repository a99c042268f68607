# src/prismreport/core/directory.py
"""
Name-keyed lookup of the clusters registered with one Prism Central instance.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List

from ..models.cluster import ClusterIdentity
from .exceptions import DirectoryLookupError

logger = logging.getLogger(__name__)


class ClusterDirectory:
    """Maps cluster names to their external address and UUID."""

    def __init__(self, identities: Iterable[ClusterIdentity] = ()):
        self._entries: Dict[str, ClusterIdentity] = {}
        for identity in identities:
            self.add(identity)

    @classmethod
    def from_inventory(cls, entities: Iterable[Dict[str, Any]]) -> "ClusterDirectory":
        """
        Build a directory from the entities of a `clusters/list` response.

        Entities lacking a name, external IP or UUID are skipped. Prism Central
        registers itself as a cluster without an external IP, for example.
        """
        directory = cls()
        skipped = 0
        for entity in entities or []:
            status = entity.get("status") or {}
            name = status.get("name")
            external_ip = ((status.get("resources") or {}).get("network") or {}).get("external_ip")
            uuid = (entity.get("metadata") or {}).get("uuid")

            if not all((name, external_ip, uuid)):
                logger.debug("Skipping inventory entity without name/IP/UUID: %s", name or uuid)
                skipped += 1
                continue

            directory.add(ClusterIdentity(name=name, external_address=external_ip, unique_id=uuid))

        if skipped:
            logger.info("Skipped %d inventory entit(y/ies) that are not reportable clusters.", skipped)
        return directory

    def add(self, identity: ClusterIdentity) -> None:
        # Cluster names are the join key and must be unique.
        if identity.name in self._entries:
            raise DirectoryLookupError(f"Cluster name '{identity.name}' is ambiguous in the cluster inventory")
        self._entries[identity.name] = identity

    def lookup(self, name: str) -> ClusterIdentity:
        """
        Return the identity registered under `name`.

        Raises:
            DirectoryLookupError: If no cluster with that name is in the inventory.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise DirectoryLookupError(f"Cluster '{name}' is not present in the cluster inventory") from None

    @property
    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ClusterIdentity]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

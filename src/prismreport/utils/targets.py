import csv
import logging
from pathlib import Path
from typing import Iterable, List

from ..models.cluster import TargetInstance

logger = logging.getLogger(__name__)


def read_targets_file(path: Path, column: str) -> List[str]:
    """
    Read target addresses from the `column` of a CSV file with a header row.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the header has no such column.
    """
    with open(path, "r", encoding="utf-8-sig", newline="") as fh:
        reader = csv.DictReader(fh)
        if not reader.fieldnames or column not in [f.strip() for f in reader.fieldnames]:
            raise ValueError(f"Column '{column}' not found in {path}. Found: {reader.fieldnames}")
        # tolerate stray whitespace around header names
        key = next(f for f in reader.fieldnames if f.strip() == column)
        addresses = [(row.get(key) or "") for row in reader]

    logger.debug("Read %d address(es) from %s", len(addresses), path)
    return addresses


def build_targets(addresses: Iterable[str]) -> List[TargetInstance]:
    """Drop blank and repeated addresses, keeping the first occurrence order."""
    targets: List[TargetInstance] = []
    seen = set()
    for address in addresses:
        address = (address or "").strip()
        if not address or address in seen:
            continue
        seen.add(address)
        targets.append(TargetInstance(address=address))
    return targets

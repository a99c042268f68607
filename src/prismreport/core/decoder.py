# src/prismreport/core/decoder.py
"""
Decoding of grouped-metrics results.

Prism Central returns grouped metrics as a flat sequence alternating the
grouping key and the metric value: ["alpha", "453000", "beta", "120000"].
These helpers turn that sequence into ordered (name, value) pairs and convert
raw values to numbers.
"""

import logging
import math
from typing import Any, List, Sequence, Tuple

from ..models.metrics import MetricSeries
from .exceptions import MalformedSeriesError, ValueFormatError

logger = logging.getLogger(__name__)


def decode_value_pairs(values: Sequence[Any]) -> List[Tuple[str, Any]]:
    """
    Decode a flat "name, value, name, value, ..." sequence into ordered pairs.

    Values are returned untouched; numeric conversion is left to the caller.

    Raises:
        MalformedSeriesError: If the sequence is not a list/tuple or its length is odd.
    """
    if not isinstance(values, (list, tuple)):
        raise MalformedSeriesError(f"Expected a flat value array, got {type(values).__name__}")
    if len(values) % 2:
        raise MalformedSeriesError(f"Interleaved value array has odd length {len(values)}")

    return [(str(values[i]), values[i + 1]) for i in range(0, len(values), 2)]


def decode_series(attribute: str, values: Sequence[Any]) -> MetricSeries:
    """Decode one grouped-metrics result into a MetricSeries."""
    pairs = decode_value_pairs(values)
    logger.debug("Decoded %d pair(s) for attribute '%s'", len(pairs), attribute)
    return MetricSeries(attribute=attribute, pairs=pairs)


def to_number(value: Any, field: str = "value") -> float:
    """
    Convert a raw metric value to a float.

    Prism reports most figures as strings. Booleans, empty strings, NaN and
    infinities are rejected.

    Raises:
        ValueFormatError: If the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise ValueFormatError(f"Non-numeric {field}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueFormatError(f"Non-numeric {field}: {value!r}") from e
    if not math.isfinite(number):
        raise ValueFormatError(f"Non-finite {field}: {value!r}")
    return number

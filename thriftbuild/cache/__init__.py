"""Up-to-date detection for generated libraries.

- Timestamp encoding (ticks since 1601-01-01 UTC)
- Marker persistence
- The staleness oracle itself
"""

from .marker_store import DEFAULT_MARKER_NAME
from .marker_store import MarkerStore
from .oracle import ComparisonMode
from .oracle import compare_marks
from .oracle import decide
from .timestamps import artifact_ticks
from .timestamps import file_ticks
from .timestamps import latest_source_ticks
from .timestamps import to_ticks

__all__ = [
    "ComparisonMode",
    "DEFAULT_MARKER_NAME",
    "MarkerStore",
    "artifact_ticks",
    "compare_marks",
    "decide",
    "file_ticks",
    "latest_source_ticks",
    "to_ticks",
]

"""Chunk-bucketed spatial index for airfields.

Maps integer chunk coordinates to the airfields whose flatten-zone bounds
overlap that chunk. An airfield appears under every chunk its bounds touch.
The index is a coarse pre-filter; callers re-check exact intersection.
"""

import math
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from aerodrome.airfields.constants import DEFAULT_CHUNK_SIZE
from aerodrome.airfields.geometry import Bounds, ChunkKey
from aerodrome.core.logging_system import get_logger

if TYPE_CHECKING:
    from aerodrome.airfields.airfield import Airfield

logger = get_logger(__name__)


def _is_finite(bounds: Bounds) -> bool:
    values = (bounds.min_x, bounds.max_x, bounds.min_z, bounds.max_z)
    return all(math.isfinite(value) for value in values)


class ChunkIndex:
    """Spatial hash from chunk key to overlapping airfields.

    Attributes:
        chunk_size: Edge length of a chunk in world units.
    """

    def __init__(self, chunk_size: float = DEFAULT_CHUNK_SIZE) -> None:
        """Initialize an empty index.

        Args:
            chunk_size: Edge length of a chunk in world units.
        """
        self.chunk_size = chunk_size
        self._buckets: dict[ChunkKey, set["Airfield"]] = {}

    def chunk_keys_for(self, bounds: Bounds) -> Iterator[ChunkKey]:
        """Iterate over every chunk key overlapped by ``bounds``."""
        low, high = bounds.chunk_range(self.chunk_size)
        for chunk_x in range(low.chunk_x, high.chunk_x + 1):
            for chunk_z in range(low.chunk_z, high.chunk_z + 1):
                yield ChunkKey(chunk_x, chunk_z)

    def rebuild(self, airfields: Iterable["Airfield"]) -> None:
        """Discard all buckets and index ``airfields`` from scratch."""
        self._buckets.clear()
        for airfield in airfields:
            self.insert(airfield)

    def insert(self, airfield: "Airfield") -> None:
        """Add an airfield under every chunk its bounds overlap."""
        bounds = airfield.get_bounds()
        if not _is_finite(bounds):
            # Degenerate geometry cannot be bucketed
            logger.warning("Airfield %s has non-finite bounds, not indexed", airfield.id)
            return

        for key in self.chunk_keys_for(bounds):
            self._buckets.setdefault(key, set()).add(airfield)

    def remove(self, airfield: "Airfield") -> None:
        """Remove an airfield from every bucket it was indexed under."""
        bounds = airfield.get_bounds()
        if not _is_finite(bounds):
            return

        for key in self.chunk_keys_for(bounds):
            bucket = self._buckets.get(key)
            if bucket is None:
                continue
            bucket.discard(airfield)
            if not bucket:
                del self._buckets[key]

    def candidates(self, bounds: Bounds) -> set["Airfield"]:
        """Union of the buckets overlapped by ``bounds``."""
        result: set["Airfield"] = set()
        if not _is_finite(bounds):
            # Unbounded or NaN edges have no chunk range; every bucket is a candidate
            for bucket in self._buckets.values():
                result.update(bucket)
            return result

        low, high = bounds.chunk_range(self.chunk_size)
        span = (high.chunk_x - low.chunk_x + 1) * (high.chunk_z - low.chunk_z + 1)

        if span > len(self._buckets):
            # Query covers more chunks than are populated: scan buckets instead
            for key, bucket in self._buckets.items():
                in_x = low.chunk_x <= key.chunk_x <= high.chunk_x
                if in_x and low.chunk_z <= key.chunk_z <= high.chunk_z:
                    result.update(bucket)
            return result

        for key in self.chunk_keys_for(bounds):
            bucket = self._buckets.get(key)
            if bucket:
                result.update(bucket)
        return result

    def get_bucket(self, key: ChunkKey) -> frozenset["Airfield"]:
        """Airfields indexed under a single chunk key."""
        return frozenset(self._buckets.get(key, ()))

    def clear(self) -> None:
        self._buckets.clear()

    @property
    def chunk_count(self) -> int:
        """Number of non-empty chunk buckets."""
        return len(self._buckets)

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

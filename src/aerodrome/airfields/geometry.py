"""Planar geometry primitives shared by airfields and the chunk index.

World coordinates use the horizontal (x, z) plane with x pointing east and
z pointing north. Runway-local coordinates use (along, across) with the
origin at the runway center.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple


class WorldPoint(NamedTuple):
    """Point on the world plane."""

    x: float
    z: float

    def distance_to(self, x: float, z: float) -> float:
        """Euclidean distance to world (x, z)."""
        return math.hypot(x - self.x, z - self.z)

    def distance_squared_to(self, x: float, z: float) -> float:
        """Squared Euclidean distance to world (x, z)."""
        dx = x - self.x
        dz = z - self.z
        return dx * dx + dz * dz


class RunwayLocalPoint(NamedTuple):
    """Point in runway-local coordinates.

    Attributes:
        along: Distance along the runway centerline from the center.
        across: Distance perpendicular to the centerline.
    """

    along: float
    across: float


class ChunkKey(NamedTuple):
    """Integer chunk coordinates on the world grid."""

    chunk_x: int
    chunk_z: int

    @classmethod
    def containing(cls, x: float, z: float, chunk_size: float) -> "ChunkKey":
        """Get the key of the chunk containing world (x, z)."""
        return cls(math.floor(x / chunk_size), math.floor(z / chunk_size))


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box on the world plane.

    Attributes:
        min_x: Western edge.
        max_x: Eastern edge.
        min_z: Southern edge.
        max_z: Northern edge.
    """

    min_x: float
    max_x: float
    min_z: float
    max_z: float

    @classmethod
    def from_extent(cls, min_x: float, min_z: float, max_x: float, max_z: float) -> "Bounds":
        """Build bounds from the [minX, minZ, maxX, maxZ] order used by chunk streamers."""
        return cls(min_x=min_x, max_x=max_x, min_z=min_z, max_z=max_z)

    @classmethod
    def from_points(cls, points: list[WorldPoint]) -> "Bounds":
        """Smallest box containing every point."""
        xs = [p.x for p in points]
        zs = [p.z for p in points]
        return cls(min_x=min(xs), max_x=max(xs), min_z=min(zs), max_z=max(zs))

    @classmethod
    def for_chunk(cls, chunk_x: int, chunk_z: int, chunk_size: float) -> "Bounds":
        """World-space box covered by a chunk."""
        return cls(
            min_x=chunk_x * chunk_size,
            max_x=(chunk_x + 1) * chunk_size,
            min_z=chunk_z * chunk_size,
            max_z=(chunk_z + 1) * chunk_size,
        )

    def contains(self, x: float, z: float) -> bool:
        """Inclusive point membership."""
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z

    def intersects(self, other: "Bounds") -> bool:
        """Inclusive box overlap; boxes sharing only an edge intersect."""
        return not (
            self.max_x < other.min_x
            or self.min_x > other.max_x
            or self.max_z < other.min_z
            or self.min_z > other.max_z
        )

    def chunk_range(self, chunk_size: float) -> tuple[ChunkKey, ChunkKey]:
        """Lowest and highest chunk keys overlapped by this box."""
        return (
            ChunkKey.containing(self.min_x, self.min_z, chunk_size),
            ChunkKey.containing(self.max_x, self.max_z, chunk_size),
        )


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Cubic Hermite interpolation between two edges.

    Returns 0 at or below edge0 and 1 at or above edge1, with zero slope
    at both edges.
    """
    t = max(0.0, min(1.0, (x - edge0) / (edge1 - edge0)))
    return t * t * (3 - 2 * t)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a (t=0) to b (t=1)."""
    return a + (b - a) * t

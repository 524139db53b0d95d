"""Terrain provider interface consumed by airfield placement.

The airfield core never generates terrain. It only asks a provider for the
normalized elevation and the zone classification at world coordinates.
Providers must be pure functions of (x, z) for a given world seed.

Typical usage:
    class IslandTerrain:
        def get_elevation(self, x: float, z: float) -> float: ...
        def classify_zone(self, x: float, z: float) -> ZoneClassification: ...
        def is_land_zone(self, zone: TerrainZone) -> bool: ...

    registry = AirfieldRegistry(world_seed=42, terrain=IslandTerrain())
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class TerrainZone(Enum):
    """Terrain zone classification, ordered from deep water to high ground."""

    DEEP_OCEAN = "deep_ocean"
    SHALLOW_OCEAN = "shallow_ocean"
    COASTLINE = "coastline"
    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAINS = "mountains"


WATER_ZONES = frozenset({TerrainZone.DEEP_OCEAN, TerrainZone.SHALLOW_OCEAN})


@dataclass(frozen=True)
class ZoneClassification:
    """Zone lookup result.

    Attributes:
        zone: Terrain zone at the sampled point.
        value: Raw classifier value the zone was derived from, if any.
    """

    zone: TerrainZone
    value: float | None = None


def is_land_zone(zone: TerrainZone) -> bool:
    """Check whether a zone is dry land."""
    return zone not in WATER_ZONES


def classify_elevation(value: float) -> TerrainZone:
    """Map a normalized noise value in [-1, 1] to a terrain zone.

    Args:
        value: Normalized terrain value.

    Returns:
        Zone band containing the value.
    """
    if value < -0.3:
        return TerrainZone.DEEP_OCEAN
    if value < 0.0:
        return TerrainZone.SHALLOW_OCEAN
    if value < 0.2:
        return TerrainZone.COASTLINE
    if value < 0.5:
        return TerrainZone.PLAINS
    if value < 0.7:
        return TerrainZone.FOREST
    return TerrainZone.MOUNTAINS


@runtime_checkable
class TerrainProvider(Protocol):
    """Read-only terrain sampling used for airfield suitability checks."""

    def get_elevation(self, x: float, z: float) -> float:
        """Return normalized elevation at world (x, z)."""
        ...

    def classify_zone(self, x: float, z: float) -> ZoneClassification:
        """Return the zone classification at world (x, z)."""
        ...

    def is_land_zone(self, zone: TerrainZone) -> bool:
        """Return True if the zone can host an airfield."""
        ...

"""Shared terrain fakes and random streams for airfield tests."""

import math

import pytest

from aerodrome.terrain.provider import (
    TerrainZone,
    ZoneClassification,
    classify_elevation,
    is_land_zone,
)


class FlatTerrain:
    """Terrain with the same elevation and zone everywhere."""

    def __init__(self, elevation: float = 0.2, zone: TerrainZone = TerrainZone.PLAINS) -> None:
        self.elevation = elevation
        self.zone = zone
        self.elevation_queries = 0

    def get_elevation(self, x: float, z: float) -> float:
        self.elevation_queries += 1
        return self.elevation

    def classify_zone(self, x: float, z: float) -> ZoneClassification:
        return ZoneClassification(self.zone, self.elevation)

    def is_land_zone(self, zone: TerrainZone) -> bool:
        return is_land_zone(zone)


class RollingTerrain:
    """Smooth analytic terrain with seas, plains and hills."""

    def get_elevation(self, x: float, z: float) -> float:
        return 0.1 + 0.2 * math.sin(x / 23000.0) + 0.15 * math.cos(z / 31000.0)

    def classify_zone(self, x: float, z: float) -> ZoneClassification:
        elevation = self.get_elevation(x, z)
        return ZoneClassification(classify_elevation(elevation), elevation)

    def is_land_zone(self, zone: TerrainZone) -> bool:
        return is_land_zone(zone)


class ConstantRandom:
    """Random stream that always returns the same value and records its seed."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.seeds: list[int] = []
        self.draws = 0

    def factory(self, seed: int) -> "ConstantRandom":
        self.seeds.append(seed)
        return self

    def __call__(self) -> float:
        self.draws += 1
        return self.value


@pytest.fixture
def flat_terrain() -> FlatTerrain:
    """Flat plains at a suitable elevation."""
    return FlatTerrain()


@pytest.fixture
def rolling_terrain() -> RollingTerrain:
    """Varied terrain for determinism and spacing checks."""
    return RollingTerrain()


@pytest.fixture
def constant_random() -> ConstantRandom:
    """Random stream fixed at 0.5."""
    return ConstantRandom()

"""Terrain sampling interfaces used by the airfield core."""

from aerodrome.terrain.provider import (
    WATER_ZONES,
    TerrainProvider,
    TerrainZone,
    ZoneClassification,
    classify_elevation,
    is_land_zone,
)

__all__ = [
    "WATER_ZONES",
    "TerrainProvider",
    "TerrainZone",
    "ZoneClassification",
    "classify_elevation",
    "is_land_zone",
]

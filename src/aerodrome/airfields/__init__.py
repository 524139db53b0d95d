"""Procedural airfields, runway flatten zones and their spatial index.

Typical usage:
    from aerodrome.airfields import AirfieldRegistry

    registry = AirfieldRegistry(world_seed=42, terrain=terrain)
    registry.generate_airfields()

    elevation, modified = registry.get_modified_elevation(x, z, natural)
"""

from aerodrome.airfields.airfield import (
    Airfield,
    AirfieldConfig,
    compute_runway_number,
    opposite_runway_number,
)
from aerodrome.airfields.chunk_index import ChunkIndex
from aerodrome.airfields.constants import AIRFIELD_TEMPLATES, AirfieldTemplate
from aerodrome.airfields.flatten_zone import (
    ElevationSample,
    FlattenZone,
    FlattenZoneSnapshot,
    apply_flatten_zones,
)
from aerodrome.airfields.geometry import (
    Bounds,
    ChunkKey,
    RunwayLocalPoint,
    WorldPoint,
    lerp,
    smoothstep,
)
from aerodrome.airfields.registry import (
    AirfieldRegistry,
    NearestAirfield,
    RegistryState,
    SiteSuitability,
)

__all__ = [
    "AIRFIELD_TEMPLATES",
    "Airfield",
    "AirfieldConfig",
    "AirfieldRegistry",
    "AirfieldTemplate",
    "Bounds",
    "ChunkIndex",
    "ChunkKey",
    "ElevationSample",
    "FlattenZone",
    "FlattenZoneSnapshot",
    "NearestAirfield",
    "RegistryState",
    "RunwayLocalPoint",
    "SiteSuitability",
    "WorldPoint",
    "apply_flatten_zones",
    "compute_runway_number",
    "lerp",
    "opposite_runway_number",
    "smoothstep",
]

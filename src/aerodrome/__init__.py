"""Aerodrome: procedural airfields for deterministic streamed terrain.

Places airfields on a seeded world, flattens the terrain under their
runways with a smoothly blended apron, and indexes them by terrain chunk.

Typical usage:
    from aerodrome import AirfieldRegistry

    registry = AirfieldRegistry(world_seed=42, terrain=terrain)
    registry.generate_airfields()
    registry.ensure_starter_airfield(spawn_x, spawn_z)
"""

from aerodrome.airfields import Airfield, AirfieldConfig, AirfieldRegistry, Bounds, WorldPoint
from aerodrome.settings import AirfieldSettings
from aerodrome.version import __version__

__all__ = [
    "Airfield",
    "AirfieldConfig",
    "AirfieldRegistry",
    "AirfieldSettings",
    "Bounds",
    "WorldPoint",
    "__version__",
]

"""Procedural generation and lookup of airfields.

Airfields are placed deterministically from the world seed:
- the same seed gives the same airfields in the same order on every run
- airfields only land on suitable terrain (dry land, moderate elevation, flat)
- airfields keep a minimum spacing from each other

The registry is an explicit object owned by the world session and passed
to whichever subsystem needs it (terrain streaming, rendering, navigation).

Typical usage:
    from aerodrome.airfields import AirfieldRegistry

    registry = AirfieldRegistry(world_seed=42, terrain=terrain)
    registry.generate_airfields()
    registry.ensure_starter_airfield(spawn_x, spawn_z)

    for airfield in registry.get_airfields_in_chunk(chunk_x, chunk_z):
        ...
"""

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from aerodrome.airfields.airfield import Airfield, AirfieldConfig, round_half_up
from aerodrome.airfields.chunk_index import ChunkIndex
from aerodrome.airfields.constants import (
    AIRFIELD_SUFFIXES,
    AIRFIELD_TEMPLATES,
    DEFAULT_CHUNK_SIZE,
    PHONETIC_ALPHABET,
    STARTER_ELEVATION,
    STARTER_HEADING,
    STARTER_MAX_DISTANCE,
    STARTER_OFFSET,
)
from aerodrome.airfields.flatten_zone import ElevationSample, apply_flatten_zones
from aerodrome.airfields.geometry import Bounds, WorldPoint
from aerodrome.core.logging_system import get_logger
from aerodrome.core.seeded_random import RandomStream, create_seeded_random
from aerodrome.settings.airfield_settings import AirfieldSettings
from aerodrome.terrain.provider import TerrainProvider

logger = get_logger(__name__)

BoundsLike = Bounds | Sequence[float]


class RegistryState(Enum):
    """Lifecycle of a registry."""

    EMPTY = "empty"
    GENERATING = "generating"
    POPULATED = "populated"


class NearestAirfield(NamedTuple):
    """Nearest airfield query result."""

    airfield: Airfield
    distance: float


@dataclass
class SiteSuitability:
    """Result of a terrain suitability check.

    Attributes:
        suitable: Whether the site can host an airfield.
        elevation: Normalized elevation at the site center.
        heading: Runway heading chosen for the site (degrees).
        reason: Why the site was rejected, empty when suitable.
    """

    suitable: bool
    elevation: float = 0.0
    heading: float = 0.0
    reason: str = ""


def _coerce_bounds(bounds: BoundsLike) -> Bounds:
    """Accept Bounds or a [min_x, min_z, max_x, max_z] sequence."""
    if isinstance(bounds, Bounds):
        return bounds
    min_x, min_z, max_x, max_z = bounds
    return Bounds.from_extent(min_x, min_z, max_x, max_z)


class AirfieldRegistry:
    """Generates, stores and spatially indexes the airfields of one world.

    Generation is meant to run once per world session. Calling
    ``generate_airfields`` again keeps the existing airfields, so the
    spacing check rejects candidates near them; call ``clear`` first for
    a fresh run.

    Read queries are safe to share between threads once generation has
    finished; ``add_airfield`` and ``remove_airfield`` must not run
    concurrently with readers.

    Attributes:
        world_seed: World seed the airfields are derived from.
        terrain: Terrain provider used for suitability checks.
        settings: Placement, runway and radio settings.
        state: Current lifecycle state.
    """

    def __init__(
        self,
        world_seed: int,
        terrain: TerrainProvider | None = None,
        settings: AirfieldSettings | None = None,
        chunk_size: float = DEFAULT_CHUNK_SIZE,
        rng_factory: Callable[[int], RandomStream] = create_seeded_random,
    ) -> None:
        """Initialize an empty registry.

        Args:
            world_seed: World seed for deterministic generation.
            terrain: Terrain provider. Only required by ``generate_airfields``.
            settings: Generation settings. Defaults to built-in values.
            chunk_size: Chunk size of the spatial index in world units.
            rng_factory: Builds the random stream from a seed.
        """
        self.world_seed = world_seed
        self.terrain = terrain
        self.settings = settings if settings is not None else AirfieldSettings()
        self.state = RegistryState.EMPTY
        self._rng_factory = rng_factory

        self._airfields: list[Airfield] = []
        self._airfield_by_id: dict[str, Airfield] = {}
        self._sequence: dict[Airfield, int] = {}
        self._next_sequence = 0
        self._chunk_index = ChunkIndex(chunk_size)

    @property
    def chunk_size(self) -> float:
        """Chunk size of the spatial index."""
        return self._chunk_index.chunk_size

    @property
    def chunk_index(self) -> ChunkIndex:
        return self._chunk_index

    def generate_airfields(self) -> list[Airfield]:
        """Generate all procedural airfields for the world.

        Scans a square grid of candidate cells around the origin, jitters
        each candidate, and keeps those that pass the terrain suitability
        and spacing checks. Random draws per cell happen in a fixed order:
        jitter x, jitter z, heading (suitable sites only), then name
        suffix, runway length and ILS presence (accepted sites only).

        Returns:
            Airfields created by this call, in generation order.

        Raises:
            ValueError: If the registry has no terrain provider.
        """
        if self.terrain is None:
            raise ValueError("A terrain provider is required to generate airfields")

        if self.state is not RegistryState.EMPTY:
            logger.warning(
                "Generating airfields into a non-empty registry (%d existing)", len(self._airfields)
            )

        placement = self.settings.placement
        rng = self._rng_factory(self.world_seed + placement.seed_offset)
        grid_size = placement.grid_size
        search_radius = placement.search_radius

        self.state = RegistryState.GENERATING
        created: list[Airfield] = []
        airfield_index = 0

        for gx in range(-search_radius, search_radius + 1):
            for gz in range(-search_radius, search_radius + 1):
                # Jitter spans half a grid cell around the cell center
                candidate_x = gx * grid_size + (rng() - 0.5) * grid_size * 0.5
                candidate_z = gz * grid_size + (rng() - 0.5) * grid_size * 0.5

                suitability = self.check_suitability(candidate_x, candidate_z, rng)
                if not suitability.suitable:
                    logger.debug(
                        "Rejected cell (%d, %d): %s", gx, gz, suitability.reason
                    )
                    continue

                if not self.check_spacing(candidate_x, candidate_z):
                    logger.debug("Rejected cell (%d, %d): too close to another airfield", gx, gz)
                    continue

                config = self._create_airfield_config(
                    candidate_x,
                    candidate_z,
                    suitability.elevation,
                    suitability.heading,
                    airfield_index,
                    rng,
                )
                created.append(self._insert(Airfield(config)))
                airfield_index += 1

        self.rebuild_chunk_index()
        self.state = RegistryState.POPULATED

        logger.info(
            "Generated %d airfields from %d candidate cells (seed %d)",
            len(created),
            (2 * search_radius + 1) ** 2,
            self.world_seed,
        )
        return created

    def check_suitability(self, x: float, z: float, rng: RandomStream) -> SiteSuitability:
        """Check whether a location can host an airfield.

        Checks, in order: the zone is land, the elevation is within the
        configured band, and the elevation spread across the runway
        footprint stays under the maximum slope. A heading is drawn from
        ``rng`` only for suitable sites.

        Args:
            x: World X coordinate.
            z: World Z coordinate.
            rng: Random stream used to pick the runway heading.

        Returns:
            Suitability with the site elevation and heading.
        """
        terrain = self.terrain
        if terrain is None:
            raise ValueError("A terrain provider is required to check suitability")
        placement = self.settings.placement

        zone = terrain.classify_zone(x, z).zone
        if not terrain.is_land_zone(zone):
            return SiteSuitability(False, reason=f"not land ({zone.value})")

        elevation = terrain.get_elevation(x, z)
        if elevation < placement.min_elevation or elevation > placement.max_elevation:
            return SiteSuitability(False, elevation=elevation, reason=f"elevation {elevation:.3f}")

        half_length = self.settings.runway.length / 2
        samples = [
            terrain.get_elevation(x - half_length, z),
            terrain.get_elevation(x + half_length, z),
            terrain.get_elevation(x, z - half_length),
            terrain.get_elevation(x, z + half_length),
            elevation,
        ]
        slope = max(samples) - min(samples)
        if slope > placement.max_slope:
            return SiteSuitability(False, elevation=elevation, reason=f"slope {slope:.3f}")

        # 0, 10, 20, ... 350; heading is not derived from terrain
        heading = math.floor(rng() * 36) * 10

        return SiteSuitability(True, elevation=elevation, heading=float(heading))

    def check_spacing(self, x: float, z: float) -> bool:
        """Check the minimum spacing from every existing airfield.

        Returns:
            True if no airfield is closer than the minimum spacing.
        """
        min_spacing = self.settings.placement.min_spacing
        min_spacing_sq = min_spacing * min_spacing

        for airfield in self._airfields:
            if airfield.position.distance_squared_to(x, z) < min_spacing_sq:
                return False
        return True

    def _create_airfield_config(
        self,
        x: float,
        z: float,
        elevation: float,
        heading: float,
        index: int,
        rng: RandomStream,
    ) -> AirfieldConfig:
        """Build the configuration of a procedural airfield."""
        runway = self.settings.runway
        radio = self.settings.radio

        name = self.generate_name(index, rng)

        # 80% to 120% of the default length, in 100 ft steps
        length_variation = 0.8 + rng() * 0.4
        runway_length = round_half_up(runway.length * length_variation / 100) * 100
        runway_length = min(max(runway_length, runway.min_length), runway.max_length)

        has_ils = rng() > radio.ils_threshold
        ils_frequency = radio.ils_frequency(index) if has_ils else None

        return AirfieldConfig(
            id=f"airfield_{index}",
            name=name,
            position=WorldPoint(x, z),
            heading=heading,
            elevation=elevation,
            runway_length=float(runway_length),
            runway_width=runway.width,
            tacan_channel=radio.tacan_channel(index),
            ils_frequency=ils_frequency,
            apron_radius=runway.apron_radius,
        )

    @staticmethod
    def generate_name(index: int, rng: RandomStream) -> str:
        """Procedural name: cyclic phonetic word plus a random suffix."""
        phonetic = PHONETIC_ALPHABET[index % len(PHONETIC_ALPHABET)]
        suffix = AIRFIELD_SUFFIXES[math.floor(rng() * len(AIRFIELD_SUFFIXES))]
        return f"{phonetic} {suffix}"

    def _insert(self, airfield: Airfield) -> Airfield:
        """Store an airfield without touching the chunk index."""
        if airfield.id in self._airfield_by_id:
            logger.warning("Duplicate airfield id %s, lookup now points to the newest", airfield.id)

        self._airfields.append(airfield)
        self._airfield_by_id[airfield.id] = airfield
        self._sequence[airfield] = self._next_sequence
        self._next_sequence += 1
        return airfield

    def rebuild_chunk_index(self) -> None:
        """Rebuild the spatial index from the current airfield set."""
        self._chunk_index.rebuild(self._airfields)
        logger.debug(
            "Chunk index rebuilt: %d airfields in %d chunks",
            len(self._airfields),
            self._chunk_index.chunk_count,
        )

    def get_airfields_in_bounds(self, bounds: BoundsLike) -> list[Airfield]:
        """Get airfields whose flatten zone overlaps an area.

        Args:
            bounds: Query box, either ``Bounds`` or
                ``[min_x, min_z, max_x, max_z]``.

        Returns:
            Overlapping airfields in registry order, without duplicates.
        """
        box = _coerce_bounds(bounds)
        # The index is a coarse pre-filter; confirm against each airfield
        matches = [
            airfield
            for airfield in self._chunk_index.candidates(box)
            if airfield.intersects_bounds(box)
        ]
        matches.sort(key=self._sequence.__getitem__)
        return matches

    def get_airfields_in_chunk(
        self, chunk_x: int, chunk_z: int, chunk_size: float | None = None
    ) -> list[Airfield]:
        """Get airfields overlapping a terrain chunk.

        Args:
            chunk_x: Chunk X coordinate.
            chunk_z: Chunk Z coordinate.
            chunk_size: Chunk edge length. Defaults to the index chunk size.

        Returns:
            Overlapping airfields in registry order.
        """
        size = self.chunk_size if chunk_size is None else chunk_size
        return self.get_airfields_in_bounds(Bounds.for_chunk(chunk_x, chunk_z, size))

    def get_modified_elevation(
        self, x: float, z: float, natural_elevation: float
    ) -> ElevationSample:
        """Apply every airfield flatten zone covering a world point.

        Args:
            x: World X coordinate.
            z: World Z coordinate.
            natural_elevation: Terrain elevation before flattening.

        Returns:
            Elevation sample from the first airfield that modifies the point.
        """
        airfields = self.get_airfields_in_bounds(Bounds(x, x, z, z))
        return apply_flatten_zones(
            (airfield.flatten_zone for airfield in airfields), x, z, natural_elevation
        )

    def get_airfield_by_id(self, airfield_id: str) -> Airfield | None:
        """Get an airfield by ID, or None if absent."""
        return self._airfield_by_id.get(airfield_id)

    def get_nearest_airfield(self, x: float, z: float) -> NearestAirfield | None:
        """Find the airfield nearest to a world position.

        Returns:
            Nearest airfield and its distance, or None if the registry is empty.
        """
        if not self._airfields:
            return None

        nearest = self._airfields[0]
        nearest_dist_sq = math.inf

        for airfield in self._airfields:
            dist_sq = airfield.position.distance_squared_to(x, z)
            if dist_sq < nearest_dist_sq:
                nearest_dist_sq = dist_sq
                nearest = airfield

        return NearestAirfield(nearest, math.sqrt(nearest_dist_sq))

    def get_all_airfields(self) -> list[Airfield]:
        """Get a copy of all airfields in generation order."""
        return list(self._airfields)

    def get_count(self) -> int:
        return len(self._airfields)

    def add_airfield(self, config: AirfieldConfig | dict[str, Any]) -> Airfield:
        """Add a manually specified airfield.

        The chunk index is rebuilt from scratch.

        Args:
            config: Airfield configuration or its plain dict form.

        Returns:
            The new airfield.
        """
        if isinstance(config, dict):
            config = AirfieldConfig.from_dict(config)

        airfield = self._insert(Airfield(config))
        self.rebuild_chunk_index()
        if self.state is RegistryState.EMPTY:
            self.state = RegistryState.POPULATED
        return airfield

    def add_template_airfield(
        self,
        template_name: str,
        position: WorldPoint | tuple[float, float],
        heading: float,
        elevation: float,
    ) -> Airfield:
        """Add a fixed airfield from a named template.

        Args:
            template_name: Key of ``AIRFIELD_TEMPLATES`` (e.g., "forward").
            position: Runway center.
            heading: Runway heading in degrees.
            elevation: Field elevation (normalized).

        Returns:
            The new airfield.

        Raises:
            KeyError: If the template does not exist.
        """
        template = AIRFIELD_TEMPLATES.get(template_name)
        if template is None:
            raise KeyError(f"Unknown airfield template: {template_name}")

        return self.add_airfield(
            AirfieldConfig(
                id=template.id,
                name=template.name,
                position=position,
                heading=heading,
                elevation=elevation,
                runway_length=template.runway_length,
                runway_width=template.runway_width,
                tacan_channel=template.tacan_channel,
                ils_frequency=template.ils_frequency,
                apron_radius=self.settings.runway.apron_radius,
            )
        )

    def ensure_starter_airfield(
        self,
        near_x: float = 0.0,
        near_z: float = 0.0,
        max_distance: float = STARTER_MAX_DISTANCE,
    ) -> Airfield | None:
        """Ensure an airfield exists near a reference point.

        Adds the home-base template offset from the point when the nearest
        airfield is at least ``max_distance`` away or none exists.

        Args:
            near_x: Reference X coordinate (e.g., spawn point).
            near_z: Reference Z coordinate.
            max_distance: Distance considered "near".

        Returns:
            The added airfield, or None if one was already near.
        """
        nearest = self.get_nearest_airfield(near_x, near_z)
        if nearest is not None and nearest.distance < max_distance:
            return None

        logger.info("Adding starter airfield near (%.0f, %.0f)", near_x, near_z)
        return self.add_template_airfield(
            "homebase",
            WorldPoint(near_x + STARTER_OFFSET, near_z + STARTER_OFFSET),
            heading=STARTER_HEADING,
            elevation=STARTER_ELEVATION,
        )

    def remove_airfield(self, airfield_id: str) -> Airfield | None:
        """Remove an airfield and update the chunk index incrementally.

        Returns:
            The removed airfield, or None if no airfield has that ID.
        """
        airfield = self._airfield_by_id.pop(airfield_id, None)
        if airfield is None:
            return None

        self._airfields.remove(airfield)
        self._sequence.pop(airfield, None)
        self._chunk_index.remove(airfield)

        # An older airfield may share the id; the lookup falls back to the newest left
        for other in reversed(self._airfields):
            if other.id == airfield_id:
                self._airfield_by_id[airfield_id] = other
                break

        if not self._airfields:
            self.state = RegistryState.EMPTY
        return airfield

    def clear(self) -> None:
        """Remove every airfield and return to the empty state."""
        self._airfields.clear()
        self._airfield_by_id.clear()
        self._sequence.clear()
        self._chunk_index.clear()
        self.state = RegistryState.EMPTY

    def serialize(self) -> dict[str, Any]:
        """Snapshot the world seed and airfield configurations for saving."""
        return {
            "world_seed": self.world_seed,
            "airfields": [airfield.serialize() for airfield in self._airfields],
        }

    @classmethod
    def from_serialized(
        cls,
        data: dict[str, Any],
        terrain: TerrainProvider | None = None,
        settings: AirfieldSettings | None = None,
        chunk_size: float = DEFAULT_CHUNK_SIZE,
    ) -> "AirfieldRegistry":
        """Restore a registry saved with ``serialize``.

        Airfields are restored as saved; nothing is regenerated.
        """
        registry = cls(data["world_seed"], terrain, settings=settings, chunk_size=chunk_size)
        for airfield_data in data.get("airfields", []):
            registry._insert(Airfield.deserialize(airfield_data))

        registry.rebuild_chunk_index()
        if registry._airfields:
            registry.state = RegistryState.POPULATED
        return registry

    def __len__(self) -> int:
        return len(self._airfields)

    def __iter__(self) -> Iterator[Airfield]:
        return iter(list(self._airfields))

    def __contains__(self, airfield_id: object) -> bool:
        return airfield_id in self._airfield_by_id

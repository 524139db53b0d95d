"""Airfield records with runway geometry.

An airfield is a single runway installation: position, heading, runway
dimensions, navaids, and the flatten zone that shapes the terrain under
it. Thresholds and runway numbers are derived once at construction.

Typical usage:
    from aerodrome.airfields import Airfield, AirfieldConfig, WorldPoint

    airfield = Airfield(
        AirfieldConfig(
            id="homebase",
            name="Alpha Field",
            position=WorldPoint(0.0, 0.0),
            heading=90.0,
            elevation=0.1,
            runway_length=10000.0,
            runway_width=150.0,
        )
    )
    print(airfield.get_runway_designator())  # "09"
"""

import math
from dataclasses import dataclass
from typing import Any

from aerodrome.airfields.flatten_zone import DEFAULT_APRON_RADIUS, FlattenZone
from aerodrome.airfields.geometry import Bounds, RunwayLocalPoint, WorldPoint


@dataclass(frozen=True)
class AirfieldConfig:
    """Input configuration of an airfield.

    Values are not validated: zero or negative lengths give degenerate
    (zero-area) geometry rather than an error.

    Attributes:
        id: Unique identifier.
        name: Display name.
        position: World position of the runway center.
        heading: Runway heading in degrees (0-360, 0=north, clockwise).
        elevation: Field elevation (normalized terrain units).
        runway_length: Runway length in feet.
        runway_width: Runway width in feet.
        tacan_channel: TACAN channel, if the field has one.
        ils_frequency: ILS frequency in MHz, if the field has one.
        apron_radius: Terrain blend band width in feet.
    """

    id: str
    name: str
    position: WorldPoint
    heading: float
    elevation: float
    runway_length: float
    runway_width: float
    tacan_channel: int | None = None
    ils_frequency: float | None = None
    apron_radius: float = DEFAULT_APRON_RADIUS

    def __post_init__(self) -> None:
        # Accept (x, z) tuples and {"x", "z"} mappings for position
        position = self.position
        if isinstance(position, dict):
            position = WorldPoint(position["x"], position["z"])
        elif not isinstance(position, WorldPoint):
            position = WorldPoint(position[0], position[1])
        object.__setattr__(self, "position", position)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain persistence shape."""
        return {
            "id": self.id,
            "name": self.name,
            "position": {"x": self.position.x, "z": self.position.z},
            "heading": self.heading,
            "elevation": self.elevation,
            "runway_length": self.runway_length,
            "runway_width": self.runway_width,
            "tacan_channel": self.tacan_channel,
            "ils_frequency": self.ils_frequency,
            "apron_radius": self.apron_radius,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AirfieldConfig":
        """Build a config from the plain persistence shape.

        A missing or null ``apron_radius`` falls back to the default.
        """
        apron_radius = data.get("apron_radius")
        return cls(
            id=data["id"],
            name=data["name"],
            position=data["position"],
            heading=data["heading"],
            elevation=data["elevation"],
            runway_length=data["runway_length"],
            runway_width=data["runway_width"],
            tacan_channel=data.get("tacan_channel"),
            ils_frequency=data.get("ils_frequency"),
            apron_radius=DEFAULT_APRON_RADIUS if apron_radius is None else apron_radius,
        )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def compute_runway_number(heading: float) -> int:
    """Runway number (1-36) for a heading; north maps to 36.

    Non-finite headings map to 36 so degenerate airfields still get a number.
    """
    if not math.isfinite(heading):
        return 36
    return round_half_up(heading / 10) % 36 or 36


def opposite_runway_number(runway_number: int) -> int:
    """Number of the reciprocal runway end (1-36)."""
    return (runway_number + 18 - 1) % 36 + 1


class Airfield:
    """A single airfield with its runway and flatten zone.

    Attributes:
        id: Unique identifier.
        name: Display name.
        position: Runway center.
        heading: Runway heading in degrees.
        elevation: Field elevation (normalized).
        runway_length: Runway length in feet.
        runway_width: Runway width in feet.
        tacan_channel: TACAN channel or None.
        ils_frequency: ILS frequency or None.
        apron_radius: Terrain blend band width.
        flatten_zone: Terrain flattening zone.
        threshold: Primary runway end (approach end for ``heading``).
        opposite_threshold: Reciprocal runway end.
        runway_number: Primary runway number (1-36).
        opposite_runway_number: Reciprocal runway number (1-36).
    """

    def __init__(self, config: AirfieldConfig) -> None:
        """Initialize the airfield from its configuration.

        Args:
            config: Airfield configuration.
        """
        self.id = config.id
        self.name = config.name
        self.position = config.position
        self.heading = config.heading
        self.elevation = config.elevation
        self.runway_length = config.runway_length
        self.runway_width = config.runway_width
        self.tacan_channel = config.tacan_channel
        self.ils_frequency = config.ils_frequency
        self.apron_radius = config.apron_radius

        self.recompute_geometry()

    def recompute_geometry(self) -> None:
        """Rebuild the flatten zone, thresholds and runway numbers."""
        self.flatten_zone = FlattenZone(
            center=self.position,
            heading=self.heading,
            runway_length=self.runway_length,
            runway_width=self.runway_width,
            target_elevation=self.elevation,
            apron_radius=self.apron_radius,
        )
        self._compute_runway_endpoints()

    def _compute_runway_endpoints(self) -> None:
        # Ends of the flattened rectangle, so markings sit on the flat ground
        half_length = self.runway_length / 2
        self.threshold = self.flatten_zone.runway_to_world(-half_length, 0.0)
        self.opposite_threshold = self.flatten_zone.runway_to_world(half_length, 0.0)

        self.runway_number = compute_runway_number(self.heading)
        self.opposite_runway_number = opposite_runway_number(self.runway_number)

    @property
    def config(self) -> AirfieldConfig:
        """Configuration this airfield was built from."""
        return AirfieldConfig(
            id=self.id,
            name=self.name,
            position=self.position,
            heading=self.heading,
            elevation=self.elevation,
            runway_length=self.runway_length,
            runway_width=self.runway_width,
            tacan_channel=self.tacan_channel,
            ils_frequency=self.ils_frequency,
            apron_radius=self.apron_radius,
        )

    def get_bounds(self) -> Bounds:
        """Axis-aligned box around the runway and apron."""
        return self.flatten_zone.bounds

    def intersects_bounds(self, bounds: Bounds) -> bool:
        """Check if the flatten zone box overlaps ``bounds`` (edges inclusive)."""
        return self.flatten_zone.bounds.intersects(bounds)

    def to_runway_local(self, world_x: float, world_z: float) -> RunwayLocalPoint:
        """Transform world coordinates to runway-local coordinates."""
        return self.flatten_zone.to_runway_local(world_x, world_z)

    def runway_to_world(self, along: float, across: float) -> WorldPoint:
        """Transform runway-local coordinates to world coordinates."""
        return self.flatten_zone.runway_to_world(along, across)

    def contains_point(self, world_x: float, world_z: float) -> bool:
        """Check whether a world point is on the runway surface."""
        local = self.to_runway_local(world_x, world_z)
        return self.flatten_zone.in_runway(local.along, local.across)

    def get_distance_to_threshold(self, world_x: float, world_z: float) -> float:
        """Distance in feet from a world point to the primary threshold."""
        return self.threshold.distance_to(world_x, world_z)

    @staticmethod
    def format_runway_number(number: int) -> str:
        """Format a runway number with two digits (e.g., "09", "27")."""
        return f"{number:02d}"

    def get_runway_designator(self) -> str:
        """Primary runway designator (e.g., "09")."""
        return self.format_runway_number(self.runway_number)

    def get_opposite_runway_designator(self) -> str:
        """Reciprocal runway designator (e.g., "27")."""
        return self.format_runway_number(self.opposite_runway_number)

    @property
    def runway_designation(self) -> str:
        """Both runway ends (e.g., "09/27")."""
        return f"{self.get_runway_designator()}/{self.get_opposite_runway_designator()}"

    def serialize(self) -> dict[str, Any]:
        """Serialize the configuration fields for storage or transfer.

        Derived fields (thresholds, runway numbers, bounds) are omitted;
        ``deserialize`` recomputes them.
        """
        return self.config.to_dict()

    @classmethod
    def deserialize(cls, data: dict[str, Any]) -> "Airfield":
        """Rebuild an airfield from ``serialize`` output."""
        return cls(AirfieldConfig.from_dict(data))

    def __repr__(self) -> str:
        return (
            f"Airfield(id={self.id!r}, name={self.name!r}, "
            f"position=({self.position.x:.1f}, {self.position.z:.1f}), "
            f"runway={self.runway_designation})"
        )

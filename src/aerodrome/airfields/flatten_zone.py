"""Terrain flattening zone for an airfield runway.

The runway rectangle is flattened to a constant target elevation and
surrounded by an apron in which elevation blends smoothly back to the
natural terrain. This module is the only place where world coordinates and
runway-local coordinates meet.

Typical usage:
    zone = airfield.flatten_zone
    elevation, modified = zone.get_modified_elevation(x, z, natural)
"""

import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any, NamedTuple

from aerodrome.airfields.geometry import Bounds, RunwayLocalPoint, WorldPoint, lerp, smoothstep

DEFAULT_APRON_RADIUS = 500.0


class ElevationSample(NamedTuple):
    """Result of an elevation override query.

    Attributes:
        elevation: Elevation to use at the sampled point.
        modified: True if the flatten zone changed the natural elevation.
    """

    elevation: float
    modified: bool


@dataclass(frozen=True)
class FlattenZoneSnapshot:
    """Plain record of everything needed to flatten terrain.

    Used to hand flatten zones to terrain meshing workers that have no
    access to the airfield objects.
    """

    center_x: float
    center_z: float
    heading: float
    angle_rad: float
    half_length: float
    half_width: float
    target_elevation: float
    apron_radius: float
    cos_heading: float
    sin_heading: float
    min_x: float
    max_x: float
    min_z: float
    max_z: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FlattenZone:
    """Runway flattening zone with a smoothstep apron.

    The runway-local axes are rotated by ``angle_rad = radians(90 - heading)``,
    not by the raw heading: a heading of 0 runs the runway along +z and a
    heading of 90 runs it along +x. Thresholds, bounds and the elevation
    override all use this one angle.

    Attributes:
        center: Runway center in world coordinates.
        heading: Runway heading in degrees (compass, clockwise from north).
        angle_rad: Runway direction as a counter-clockwise angle from +x.
        cos_heading: cos(-angle), used by the inverse rotation.
        sin_heading: sin(-angle), used by the inverse rotation.
        half_length: Half the runway length.
        half_width: Half the runway width.
        target_elevation: Flattened elevation (normalized units).
        apron_radius: Width of the blend band around the runway.
        bounds: Axis-aligned box around the apron-expanded runway.
    """

    def __init__(
        self,
        center: WorldPoint,
        heading: float,
        runway_length: float,
        runway_width: float,
        target_elevation: float,
        apron_radius: float = DEFAULT_APRON_RADIUS,
    ) -> None:
        """Initialize the zone and compute its bounds.

        Args:
            center: Runway center position.
            heading: Runway heading in degrees.
            runway_length: Runway length in feet.
            runway_width: Runway width in feet.
            target_elevation: Flattened elevation.
            apron_radius: Blend band width in feet.
        """
        self.center = WorldPoint(center[0], center[1])
        self.heading = heading
        # Compass heading to math angle: 0 (north) -> +z, 90 (east) -> +x
        self.angle_rad = math.radians(90.0 - heading)
        self.half_length = runway_length / 2
        self.half_width = runway_width / 2
        self.target_elevation = target_elevation
        self.apron_radius = apron_radius
        self.bounds = Bounds(0.0, 0.0, 0.0, 0.0)
        self._update_rotation()
        self.compute_bounds()

    def _update_rotation(self) -> None:
        # Forward rotation uses +angle, inverse uses -angle
        self._cos_forward = math.cos(self.angle_rad)
        self._sin_forward = math.sin(self.angle_rad)
        self.cos_heading = math.cos(-self.angle_rad)
        self.sin_heading = math.sin(-self.angle_rad)

    def compute_bounds(self) -> Bounds:
        """Recompute the bounding box of the runway plus apron.

        All four corners of the apron-expanded rectangle are rotated into
        world space; a rotated rectangle's box is not the unrotated one.

        Returns:
            The new bounds.
        """
        total_half_length = self.half_length + self.apron_radius
        total_half_width = self.half_width + self.apron_radius

        corners = [
            self.runway_to_world(total_half_length, total_half_width),
            self.runway_to_world(total_half_length, -total_half_width),
            self.runway_to_world(-total_half_length, total_half_width),
            self.runway_to_world(-total_half_length, -total_half_width),
        ]

        self.bounds = Bounds.from_points(corners)
        return self.bounds

    def to_runway_local(self, world_x: float, world_z: float) -> RunwayLocalPoint:
        """Transform world coordinates to runway-local coordinates."""
        dx = world_x - self.center.x
        dz = world_z - self.center.z

        return RunwayLocalPoint(
            along=dx * self.cos_heading - dz * self.sin_heading,
            across=dx * self.sin_heading + dz * self.cos_heading,
        )

    def runway_to_world(self, along: float, across: float) -> WorldPoint:
        """Transform runway-local coordinates to world coordinates."""
        return WorldPoint(
            x=self.center.x + along * self._cos_forward - across * self._sin_forward,
            z=self.center.z + along * self._sin_forward + across * self._cos_forward,
        )

    def in_bounds(self, world_x: float, world_z: float) -> bool:
        """Quick AABB rejection test."""
        return self.bounds.contains(world_x, world_z)

    def in_runway(self, along: float, across: float) -> bool:
        """Check whether a runway-local point lies on the runway rectangle."""
        return abs(along) <= self.half_length and abs(across) <= self.half_width

    def distance_from_runway(self, along: float, across: float) -> float:
        """Distance from a runway-local point to the runway rectangle.

        Returns:
            0 inside or on the rectangle edge, else the Euclidean distance
            to the nearest point of the rectangle.
        """
        dist_along = max(0.0, abs(along) - self.half_length)
        dist_across = max(0.0, abs(across) - self.half_width)
        return math.sqrt(dist_along * dist_along + dist_across * dist_across)

    def get_modified_elevation(
        self, world_x: float, world_z: float, natural_elevation: float
    ) -> ElevationSample:
        """Apply the flattening policy at a world position.

        Args:
            world_x: World X coordinate.
            world_z: World Z coordinate.
            natural_elevation: Terrain elevation before flattening.

        Returns:
            Target elevation on the runway, a smoothstep blend toward the
            natural elevation across the apron, or the natural elevation
            unmodified outside the zone.
        """
        if not self.in_bounds(world_x, world_z):
            return ElevationSample(natural_elevation, False)

        local = self.to_runway_local(world_x, world_z)

        if self.in_runway(local.along, local.across):
            return ElevationSample(self.target_elevation, True)

        dist = self.distance_from_runway(local.along, local.across)
        if dist < self.apron_radius:
            # 0 at the runway edge, 1 at the outer apron edge
            t = smoothstep(0.0, self.apron_radius, dist)
            return ElevationSample(lerp(self.target_elevation, natural_elevation, t), True)

        return ElevationSample(natural_elevation, False)

    def serialize(self) -> FlattenZoneSnapshot:
        """Snapshot the zone for transfer to a terrain worker."""
        return FlattenZoneSnapshot(
            center_x=self.center.x,
            center_z=self.center.z,
            heading=self.heading,
            angle_rad=self.angle_rad,
            half_length=self.half_length,
            half_width=self.half_width,
            target_elevation=self.target_elevation,
            apron_radius=self.apron_radius,
            cos_heading=self.cos_heading,
            sin_heading=self.sin_heading,
            min_x=self.bounds.min_x,
            max_x=self.bounds.max_x,
            min_z=self.bounds.min_z,
            max_z=self.bounds.max_z,
        )

    @classmethod
    def from_snapshot(cls, snapshot: FlattenZoneSnapshot) -> "FlattenZone":
        """Rebuild a zone from a snapshot taken with ``serialize``."""
        return cls(
            center=WorldPoint(snapshot.center_x, snapshot.center_z),
            heading=snapshot.heading,
            runway_length=snapshot.half_length * 2,
            runway_width=snapshot.half_width * 2,
            target_elevation=snapshot.target_elevation,
            apron_radius=snapshot.apron_radius,
        )


def apply_flatten_zones(
    zones: Iterable[FlattenZone], world_x: float, world_z: float, natural_elevation: float
) -> ElevationSample:
    """Apply the first zone that modifies a point.

    Args:
        zones: Flatten zones overlapping the sampled area, in priority order.
        world_x: World X coordinate.
        world_z: World Z coordinate.
        natural_elevation: Terrain elevation before flattening.

    Returns:
        The first modifying zone's sample, or the natural elevation.
    """
    for zone in zones:
        sample = zone.get_modified_elevation(world_x, world_z, natural_elevation)
        if sample.modified:
            return sample
    return ElevationSample(natural_elevation, False)

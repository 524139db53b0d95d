"""Settings for airfield generation."""

from aerodrome.settings.airfield_settings import (
    AirfieldSettings,
    PlacementConstraints,
    RadioAssignment,
    RunwayDefaults,
)

__all__ = [
    "AirfieldSettings",
    "PlacementConstraints",
    "RadioAssignment",
    "RunwayDefaults",
]

"""Airfield generation settings.

Groups the placement constraints, runway defaults and navaid assignment used
by procedural airfield generation, with YAML persistence.

Settings files have three optional sections, ``placement``, ``runway`` and
``radio``, whose keys match the dataclass fields. Missing keys keep their
defaults.

Typical usage:
    from aerodrome.settings import AirfieldSettings

    settings = AirfieldSettings()
    settings.load("world/airfields.yaml")
    registry = AirfieldRegistry(world_seed, terrain, settings=settings)
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from aerodrome.core.logging_system import get_logger
from aerodrome.core.resource_path import get_config_path

logger = get_logger(__name__)

_SECTIONS = ("placement", "runway", "radio")


@dataclass
class RunwayDefaults:
    """Default runway dimensions.

    Attributes:
        length: Typical runway length; procedural runways vary around it.
        min_length: Shortest procedural runway.
        max_length: Longest procedural runway.
        width: Standard runway width.
        apron_radius: Width of the terrain blend band around the runway.
    """

    length: float = 10000.0
    min_length: float = 3300.0
    max_length: float = 12000.0
    width: float = 150.0
    apron_radius: float = 500.0


@dataclass
class PlacementConstraints:
    """Terrain and spacing constraints for procedural placement.

    Attributes:
        min_elevation: Lowest normalized elevation accepted (no water or beaches).
        max_elevation: Highest normalized elevation accepted (no mountains).
        max_slope: Maximum elevation spread across the runway footprint.
        min_spacing: Minimum distance between airfield centers.
        grid_size: Spacing of the candidate grid.
        search_radius: Grid cells searched in each direction from the origin.
        seed_offset: Added to the world seed to derive the placement stream.
    """

    min_elevation: float = 0.05
    max_elevation: float = 0.5
    max_slope: float = 0.1
    min_spacing: float = 30000.0
    grid_size: float = 30000.0
    search_radius: int = 5
    seed_offset: int = 9999


@dataclass
class RadioAssignment:
    """Navaid assignment for procedural airfields.

    Attributes:
        tacan_base_channel: TACAN channel of the first airfield.
        tacan_channel_stride: Channel increment per airfield index.
        ils_base_frequency: ILS frequency (MHz) of the first airfield.
        ils_frequency_step: Frequency increment per airfield index.
        ils_threshold: Draws strictly above this value give an airfield an ILS.
    """

    tacan_base_channel: int = 10
    tacan_channel_stride: int = 5
    ils_base_frequency: float = 108.1
    ils_frequency_step: float = 0.2
    ils_threshold: float = 0.3

    def tacan_channel(self, index: int) -> int:
        """TACAN channel for the airfield at ``index``."""
        return self.tacan_base_channel + index * self.tacan_channel_stride

    def ils_frequency(self, index: int) -> float:
        """ILS frequency for the airfield at ``index``."""
        return self.ils_base_frequency + index * self.ils_frequency_step


def _apply_section(target: Any, values: dict[str, Any], section: str) -> None:
    """Copy known keys of a YAML section onto a settings dataclass."""
    known = {f.name for f in fields(target)}
    for key, value in values.items():
        if key not in known:
            logger.debug("Ignoring unknown %s setting: %s", section, key)
            continue
        current = getattr(target, key)
        # Keep int fields integral (search_radius, channels)
        if isinstance(current, int) and not isinstance(current, bool) and isinstance(value, float):
            value = int(value)
        elif isinstance(current, float) and isinstance(value, int):
            value = float(value)
        setattr(target, key, value)


@dataclass
class AirfieldSettings:
    """Settings for procedural airfield generation.

    Attributes:
        placement: Terrain and spacing constraints.
        runway: Default runway dimensions.
        radio: TACAN and ILS assignment.
    """

    placement: PlacementConstraints = field(default_factory=PlacementConstraints)
    runway: RunwayDefaults = field(default_factory=RunwayDefaults)
    radio: RadioAssignment = field(default_factory=RadioAssignment)

    @classmethod
    def default(cls) -> "AirfieldSettings":
        """Settings from the bundled config/airfields.yaml."""
        settings = cls()
        settings.load(get_config_path("airfields.yaml"))
        return settings

    def load(self, path: Path | str) -> bool:
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML settings file.

        Returns:
            True if loaded successfully, False otherwise (defaults kept).
        """
        settings_path = Path(path)
        if not settings_path.exists():
            logger.info("No airfield settings at %s, using defaults", settings_path)
            return False

        try:
            with open(settings_path, encoding="utf-8") as f:
                data: dict[str, Any] = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load airfield settings from %s: %s", settings_path, e)
            return False

        if not isinstance(data, dict):
            logger.error("Airfield settings in %s must be a mapping", settings_path)
            return False

        sections = {section: data.get(section) or {} for section in _SECTIONS}
        for section, values in sections.items():
            if not isinstance(values, dict):
                logger.error("Section %r in %s must be a mapping", section, settings_path)
                return False

        for section, values in sections.items():
            _apply_section(getattr(self, section), values, section)

        logger.info("Loaded airfield settings from %s", settings_path)
        return True

    def save(self, path: Path | str) -> bool:
        """Save settings to a YAML file.

        Args:
            path: Destination path. Parent directories are created.

        Returns:
            True if saved successfully, False otherwise.
        """
        settings_path = Path(path)
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(settings_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        except OSError as e:
            logger.error("Failed to save airfield settings to %s: %s", settings_path, e)
            return False

        logger.info("Saved airfield settings to %s", settings_path)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {section: asdict(getattr(self, section)) for section in _SECTIONS}

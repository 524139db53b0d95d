"""Airfield templates, naming tables and placement constants.

All distances are in feet (1 world unit = 1 foot); elevations are
normalized terrain units.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AirfieldTemplate:
    """Named fixed airfield used for scenarios and the starter airfield."""

    id: str
    name: str
    runway_length: float
    runway_width: float
    tacan_channel: int | None
    ils_frequency: float | None


AIRFIELD_TEMPLATES: dict[str, AirfieldTemplate] = {
    "homebase": AirfieldTemplate(
        id="homebase",
        name="Alpha Field",
        runway_length=10000.0,
        runway_width=150.0,
        tacan_channel=42,
        ils_frequency=109.5,
    ),
    "forward": AirfieldTemplate(
        id="forward",
        name="Bravo Strip",
        runway_length=6000.0,
        runway_width=100.0,
        tacan_channel=56,
        ils_frequency=None,
    ),
    "captured": AirfieldTemplate(
        id="captured",
        name="Charlie Base",
        runway_length=8000.0,
        runway_width=150.0,
        tacan_channel=71,
        ils_frequency=110.3,
    ),
}

# Starter airfield placement relative to the requested point
STARTER_OFFSET = 15000.0  # ~2.5 nm along each axis
STARTER_HEADING = 270.0
STARTER_ELEVATION = 0.1
STARTER_MAX_DISTANCE = 50000.0

# Chunk size used by terrain streaming
DEFAULT_CHUNK_SIZE = 2000.0

# Phonetic alphabet for procedural naming
PHONETIC_ALPHABET = [
    "Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot",
    "Golf", "Hotel", "India", "Juliet", "Kilo", "Lima",
    "Mike", "November", "Oscar", "Papa", "Quebec", "Romeo",
    "Sierra", "Tango", "Uniform", "Victor", "Whiskey",
    "X-ray", "Yankee", "Zulu",
]  # fmt: skip

# Suffix words for airfield names
AIRFIELD_SUFFIXES = ["Field", "AFB", "Strip", "Base", "Airfield", "International"]

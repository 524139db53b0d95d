"""Locate configuration files bundled with the package."""

from pathlib import Path

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def get_config_path(relative_path: str) -> Path:
    """Get the path of a bundled configuration file.

    Args:
        relative_path: Path relative to the config directory
            (e.g., "airfields.yaml").

    Returns:
        Absolute path inside the package config directory.
    """
    return CONFIG_DIR / relative_path

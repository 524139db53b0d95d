"""Logging setup for Aerodrome.

Loggers are plain ``logging`` loggers named after their module. Hosts that
want file handlers or custom formats call ``initialize_logging`` once with a
YAML file in ``logging.config.dictConfig`` format.

Typical usage:
    from aerodrome.core.logging_system import get_logger, initialize_logging

    initialize_logging()  # bundled config/logging.yaml
    logger = get_logger(__name__)
"""

import logging
import logging.config
from pathlib import Path
from typing import Any

import yaml

from aerodrome.core.resource_path import get_config_path

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def initialize_logging(config_path: str | Path | None = None, level: int = logging.INFO) -> bool:
    """Configure logging from a YAML dictConfig file.

    Falls back to ``logging.basicConfig`` when the file is missing or
    cannot be applied.

    Args:
        config_path: Path to the YAML file. Defaults to the bundled
            config/logging.yaml.
        level: Level used for the basicConfig fallback.

    Returns:
        True if the YAML configuration was applied.
    """
    path = Path(config_path) if config_path is not None else get_config_path("logging.yaml")

    if not path.is_file():
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
        logging.getLogger(__name__).info("No logging config at %s, using defaults", path)
        return False

    try:
        with open(path, encoding="utf-8") as f:
            config: dict[str, Any] = yaml.safe_load(f) or {}
        config.setdefault("version", 1)
        logging.config.dictConfig(config)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
        logging.getLogger(__name__).error("Failed to apply logging config %s: %s", path, e)
        return False

    logging.getLogger(__name__).debug("Logging configured from %s", path)
    return True

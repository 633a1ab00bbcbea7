from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "mechfight"
APP_AUTHOR = "mechfight"


def _dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)


def default_loadout_dir() -> Path:
    """Per-user directory where saved loadouts live."""
    path = Path(_dirs().user_data_dir) / "loadouts"
    logger.debug("Default loadout dir: %s", path)
    return path


def default_config_path() -> Path:
    """Per-user config file consulted when no --config is given."""
    return Path(_dirs().user_config_dir) / "config.yaml"

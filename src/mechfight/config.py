from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .paths import default_loadout_dir

logger = logging.getLogger(__name__)

END_OF_ROUND = "end_of_round"
FIRST_STRIKE = "first_strike"
RESOLUTIONS = (END_OF_ROUND, FIRST_STRIKE)


@dataclass
class BattleConfig:
    """
    Battle configuration with sensible defaults.

    Keys (all optional in YAML):
      - variance: float spread for the attack/defense randomness (default 0.10)
      - max_rounds: round ceiling before a StalemateError, or null for none
      - resolution: "end_of_round" (draws possible) or "first_strike"
      - drain_upgrade_armour: let damage past base armour wear down upgrade
        armour boosts (default false: only base armour takes damage)
      - seed: integer seed for reproducible battles, or null
      - loadout_dir: directory holding user loadouts
      - log_file: optional path of a log file
    """

    variance: float = 0.10
    max_rounds: Optional[int] = 10_000
    resolution: str = END_OF_ROUND
    drain_upgrade_armour: bool = False
    seed: Optional[int] = None
    loadout_dir: Optional[Path] = None
    log_file: Optional[Path] = None

    def __post_init__(self) -> None:
        try:
            self.variance = float(self.variance)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"variance must be a number, got {self.variance!r}") from exc
        if not (0.0 <= self.variance <= 0.75):
            raise ConfigError("variance must be between 0.0 and 0.75")
        if self.max_rounds is not None:
            self.max_rounds = int(self.max_rounds)
            if self.max_rounds <= 0:
                raise ConfigError("max_rounds must be positive or null")
        if self.resolution not in RESOLUTIONS:
            raise ConfigError(f"resolution must be one of {', '.join(RESOLUTIONS)}")
        if not isinstance(self.drain_upgrade_armour, bool):
            raise ConfigError("drain_upgrade_armour must be true or false")
        if self.seed is not None:
            self.seed = int(self.seed)
        if self.loadout_dir is not None:
            self.loadout_dir = Path(self.loadout_dir).expanduser()
        if self.log_file is not None:
            self.log_file = Path(self.log_file).expanduser()

    def resolved_loadout_dir(self) -> Path:
        return self.loadout_dir or default_loadout_dir()

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "BattleConfig":
        battle = dict(data.get("battle", {}))
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(battle) - known)
        if unknown:
            logger.warning("Ignoring unknown battle config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in battle.items() if k in known})

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "BattleConfig":
        """Load configuration from packaged defaults and an optional user file.

        If user_path is provided and exists, its values overlay the defaults.
        """
        try:
            with resources.files("mechfight.resources").joinpath("default_config.yaml").open(
                "r", encoding="utf-8"
            ) as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default config not found; falling back to dataclass defaults.")
            default_data = {}

        user_data: dict = {}
        if user_path is not None:
            user_path = Path(user_path)
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user config from %s", user_path)
            else:
                logger.warning("User config file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        config = cls._from_dict(merged)
        logger.debug("Config merged: %s", config)
        return config

    def save(self, path: Path) -> None:
        data = dataclasses.asdict(self)
        for key in ("loadout_dir", "log_file"):
            if data[key] is not None:
                data[key] = str(data[key])
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump({"battle": data}, f, sort_keys=False)
        logger.info("Saved config to %s", path)

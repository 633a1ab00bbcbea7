"""
mechfight core package.

This package provides headless battle logic for equipped mechs including:
- Weapon, SystemUpgrade and Mech models with live derived stats
- Pre-battle strategies (aggressive, defensive, balanced)
- BattleSimulator resolving rounds with +/-10% variance and draw detection
- Loadout records and a YAML/JSON loadout repository

The command-line front end lives in ``mechfight.cli``.
"""
from .combat import (
    AggressiveStrategy,
    BalancedStrategy,
    BattleResult,
    BattleSimulator,
    DefensiveStrategy,
    get_strategy,
)
from .config import BattleConfig
from .errors import (
    ConfigError,
    LoadoutError,
    MechFightError,
    PreconditionError,
    StalemateError,
    UnknownStrategyError,
)
from .loadouts import LoadoutRepository, MechRecord
from .models import Mech, SystemUpgrade, Weapon

__all__ = [
    "Mech",
    "Weapon",
    "SystemUpgrade",
    "BattleSimulator",
    "BattleResult",
    "AggressiveStrategy",
    "DefensiveStrategy",
    "BalancedStrategy",
    "get_strategy",
    "BattleConfig",
    "LoadoutRepository",
    "MechRecord",
    "MechFightError",
    "PreconditionError",
    "StalemateError",
    "UnknownStrategyError",
    "LoadoutError",
    "ConfigError",
]

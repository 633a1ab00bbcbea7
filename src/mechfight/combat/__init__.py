"""
Combat package for mechfight.

Contains:
- Variance rolls applying +/-10% randomness to attack and defense.
- Pre-battle strategies adjusting both mechs once.
- The battle simulator running rounds until a winner or a draw.
- Battle logging to track attacks, defeats and outcomes.
"""

from .engine import AttackResult, BattleResult, BattleSimulator
from .log import BattleEvent, BattleLog
from .strategies import (
    STRATEGIES,
    AggressiveStrategy,
    BalancedStrategy,
    BattleStrategy,
    DefensiveStrategy,
    get_strategy,
)
from .variance import VarianceRoll, VarianceRoller

__all__ = [
    "AttackResult",
    "BattleResult",
    "BattleSimulator",
    "BattleEvent",
    "BattleLog",
    "BattleStrategy",
    "AggressiveStrategy",
    "DefensiveStrategy",
    "BalancedStrategy",
    "STRATEGIES",
    "get_strategy",
    "VarianceRoll",
    "VarianceRoller",
]

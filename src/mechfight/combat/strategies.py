from __future__ import annotations

import logging
from typing import Dict, Protocol, Type, runtime_checkable

from ..errors import UnknownStrategyError
from ..models import Mech

logger = logging.getLogger(__name__)


@runtime_checkable
class BattleStrategy(Protocol):
    """A one-time pre-battle adjustment applied to both mechs."""

    name: str

    def execute(self, player: Mech, opponent: Mech) -> None:
        ...


class AggressiveStrategy:
    """Raise own attack and wear down the opponent's armour."""

    name = "aggressive"

    def execute(self, player: Mech, opponent: Mech) -> None:
        logger.info("Using Aggressive Strategy...")
        player.adjust_stats(attack_delta=10, defense_delta=0)
        opponent.adjust_stats(attack_delta=0, defense_delta=-5)


class DefensiveStrategy:
    """Raise own defense and blunt the opponent's weapons."""

    name = "defensive"

    def execute(self, player: Mech, opponent: Mech) -> None:
        logger.info("Using Defensive Strategy...")
        player.adjust_stats(attack_delta=0, defense_delta=10)
        opponent.adjust_stats(attack_delta=-5, defense_delta=0)


class BalancedStrategy:
    """Moderate boost to own attack and defense; opponent untouched."""

    name = "balanced"

    def execute(self, player: Mech, opponent: Mech) -> None:
        logger.info("Using Balanced Strategy...")
        player.adjust_stats(attack_delta=5, defense_delta=5)


STRATEGIES: Dict[str, Type[BattleStrategy]] = {
    AggressiveStrategy.name: AggressiveStrategy,
    DefensiveStrategy.name: DefensiveStrategy,
    BalancedStrategy.name: BalancedStrategy,
}


def get_strategy(name: str) -> BattleStrategy:
    """Instantiate a registered strategy by (case-insensitive) name."""
    key = (name or "").strip().lower()
    try:
        return STRATEGIES[key]()
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown strategy {name!r}; choose one of: {', '.join(sorted(STRATEGIES))}"
        ) from None

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..config import FIRST_STRIKE, BattleConfig
from ..errors import PreconditionError, StalemateError
from ..models import Mech
from .log import BattleLog
from .strategies import BattleStrategy
from .variance import VarianceRoller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackResult:
    """Result of one mech attacking another."""

    attacker: str
    defender: str
    attack: int
    defense: int
    damage: int
    armour_before: int
    armour_after: int
    defeated: bool


@dataclass(frozen=True)
class BattleResult:
    """Outcome of a battle: a winner, or a draw when both mechs fall together."""

    winner: Optional[Mech]
    rounds: int
    is_draw: bool = False

    def __post_init__(self) -> None:
        if self.rounds < 1:
            raise ValueError("rounds must be >= 1")
        if self.is_draw != (self.winner is None):
            raise ValueError("a draw has no winner and a non-draw needs one")

    @classmethod
    def victory(cls, winner: Mech, rounds: int) -> "BattleResult":
        return cls(winner=winner, rounds=rounds, is_draw=False)

    @classmethod
    def draw(cls, rounds: int) -> "BattleResult":
        return cls(winner=None, rounds=rounds, is_draw=True)


class BattleSimulator:
    """Resolve a full battle between two mechs, round by round.

    Each round the first mech attacks the second, then the second answers.
    With the default end-of-round resolution both attacks always land and the
    round is judged afterwards, so two mechs falling in the same round is a
    draw. The first-strike resolution ends the battle as soon as a defender
    falls, which hands the first mech the tie.

    Randomness comes from ``roller`` when one is given (its spread and rng win
    over ``config.variance`` and ``config.seed``), otherwise from a roller built
    on ``rng`` or on a generator seeded with ``config.seed``.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[BattleConfig] = None,
        log: Optional[BattleLog] = None,
        roller: Optional[VarianceRoller] = None,
    ) -> None:
        if rng is not None and roller is not None:
            raise ValueError("pass either rng or roller, not both; a roller carries its own rng")
        self.config = config or BattleConfig()
        if roller is not None:
            self.roller = roller
            self.rng = roller.rng
        else:
            self.rng = rng or random.Random(self.config.seed)
            self.roller = VarianceRoller(spread=self.config.variance, rng=self.rng)
        self.log = log or BattleLog()

    def simulate(self, player: Mech, opponent: Mech, strategy: BattleStrategy) -> BattleResult:
        """Run a battle to completion.

        Raises:
            PreconditionError: either mech lacks positive energy or armour.
            StalemateError: no result within ``config.max_rounds`` rounds.
        """
        self.validate(player, opponent)

        self.log.add("start", f"Battle started between {player.name} and {opponent.name}.")
        strategy.execute(player, opponent)
        self.log.add(
            "strategy",
            f"Pre-battle adjustments applied using strategy: {type(strategy).__name__}.",
            strategy=getattr(strategy, "name", type(strategy).__name__),
        )

        max_rounds = self.config.max_rounds
        round_no = 1
        while True:
            if max_rounds is not None and round_no > max_rounds:
                logger.error("Battle exceeded %d rounds without a result.", max_rounds)
                raise StalemateError(max_rounds)
            logger.debug("Starting round %d.", round_no)
            result = self._process_round(player, opponent, round_no)
            if result is not None:
                return result
            round_no += 1

    def validate(self, player: Mech, opponent: Mech) -> None:
        if player is None or opponent is None:
            raise ValueError("both mechs must be provided")
        for mech in (player, opponent):
            if mech.total_energy <= 0 or mech.total_armour <= 0:
                logger.error(
                    "Invalid mech stats for %s (energy=%d, armour=%d): both mechs must have positive Energy and Armour.",
                    mech.name,
                    mech.total_energy,
                    mech.total_armour,
                )
                raise PreconditionError(
                    "Mecha must have positive Energy and Armour to participate in a battle."
                )

    def attack(self, attacker: Mech, defender: Mech, round_no: int = 0) -> AttackResult:
        """Resolve one attack and apply the damage to the defender's armour."""
        attack = self.roller.apply(attacker.available_attack)
        defense = self.roller.apply(defender.defense)
        damage = max(0, attack - defense)

        before = defender.total_armour
        defender.adjust_stats(0, -damage, drain_upgrades=self.config.drain_upgrade_armour)
        after = defender.total_armour

        self.log.add(
            "attack",
            f"{attacker.name} attacks {defender.name} for {damage} damage (armour {before}->{after}).",
            round=round_no,
            attacker=attacker.name,
            defender=defender.name,
            attack=attack,
            defense=defense,
            damage=damage,
        )
        defeated = defender.defeated
        if defeated:
            self.log.add(
                "defeat",
                f"{defender.name} was defeated by {attacker.name}.",
                round=round_no,
                attacker=attacker.name,
                defender=defender.name,
            )
        return AttackResult(
            attacker=attacker.name,
            defender=defender.name,
            attack=attack,
            defense=defense,
            damage=damage,
            armour_before=before,
            armour_after=after,
            defeated=defeated,
        )

    def _process_round(self, player: Mech, opponent: Mech, round_no: int) -> Optional[BattleResult]:
        first_strike = self.config.resolution == FIRST_STRIKE

        self.attack(player, opponent, round_no)
        if first_strike and opponent.defeated:
            return self._victory(player, round_no)

        self.attack(opponent, player, round_no)
        if first_strike and player.defeated:
            return self._victory(opponent, round_no)

        player_down, opponent_down = player.defeated, opponent.defeated
        if player_down and opponent_down:
            self.log.add("draw", f"Battle ended in a draw after {round_no} rounds.", round=round_no)
            return BattleResult.draw(round_no)
        if opponent_down:
            return self._victory(player, round_no)
        if player_down:
            return self._victory(opponent, round_no)
        return None

    def _victory(self, winner: Mech, round_no: int) -> BattleResult:
        self.log.add(
            "victory",
            f"Battle ended after {round_no} rounds. Winner: {winner.name} (Pilot: {winner.pilot}).",
            round=round_no,
            winner=winner.name,
        )
        return BattleResult.victory(winner, round_no)

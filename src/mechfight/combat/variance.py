from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MAX_SPREAD = 0.75


@dataclass(frozen=True)
class VarianceRoll:
    """Details of one variance draw.

    Attributes:
        value: The input value.
        draw: The raw uniform draw in [0, 1).
        multiplier: The factor applied to ``value``.
        final: ``int(value * multiplier)``.
    """

    value: int
    draw: float
    multiplier: float
    final: int


class VarianceRoller:
    """Apply combat randomness to attack and defense values.

    The formula is:
      multiplier = (1 - spread) + draw * 2 * spread,  draw ~ Uniform[0, 1)
      result = int(value * multiplier)

    A spread of 0.10 gives the +/-10% range [0.9, 1.1). Every call takes a fresh
    draw from the wrapped generator. Spread 0 returns values unchanged without
    touching the generator.
    """

    def __init__(self, spread: float = 0.10, rng: Optional[random.Random] = None) -> None:
        if not (0.0 <= spread <= MAX_SPREAD):
            raise ValueError(f"spread must be between 0.0 and {MAX_SPREAD}")
        self.spread = float(spread)
        self.rng = rng or random.Random()

    def apply(self, value: int) -> int:
        return self.roll(value).final

    def roll(self, value: int) -> VarianceRoll:
        try:
            value_i = int(value)
        except Exception as exc:
            raise ValueError("value must be an integer or castable to int") from exc
        if value_i < 0:
            logger.warning("Negative value %s passed to variance; clamping to zero.", value_i)
            value_i = 0

        if self.spread == 0.0:
            return VarianceRoll(value=value_i, draw=0.5, multiplier=1.0, final=value_i)

        draw = self.rng.random()
        multiplier = (1.0 - self.spread) + draw * (2 * self.spread)
        final = int(value_i * multiplier)
        return VarianceRoll(value=value_i, draw=draw, multiplier=multiplier, final=final)

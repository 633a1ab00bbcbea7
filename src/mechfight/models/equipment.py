from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Weapon:
    """A weapon mounted on a mech.

    Attributes:
        name: Display name (non-empty).
        attack_power: Attack contribution (>= 0). Damage to attack capacity
            lowers this value in place, never below zero.
        energy_cost: Energy the mech must have available for the weapon to
            fire (>= 0).
    """

    name: str
    attack_power: int
    energy_cost: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Weapon.name must be a non-empty string")
        try:
            self.attack_power = int(self.attack_power)
            self.energy_cost = int(self.energy_cost)
        except Exception as exc:
            raise ValueError("Weapon numeric fields must be integers") from exc
        if self.attack_power < 0:
            raise ValueError("attack_power must be >= 0")
        if self.energy_cost < 0:
            raise ValueError("energy_cost must be >= 0")

    def reduce_attack(self, amount: int) -> int:
        """Lower attack power by ``amount``, flooring at zero. Returns the actual reduction."""
        before = self.attack_power
        self.attack_power = max(0, self.attack_power - int(amount))
        return before - self.attack_power

    def __str__(self) -> str:
        return f"{self.name} (+{self.attack_power} ATK, {self.energy_cost} EN)"


@dataclass
class SystemUpgrade:
    """A system upgrade granting flat bonuses. Boosts may be negative."""

    name: str
    defense_boost: int = 0
    mobility_boost: int = 0
    armour_boost: int = 0
    energy_boost: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("SystemUpgrade.name must be a non-empty string")
        try:
            self.defense_boost = int(self.defense_boost)
            self.mobility_boost = int(self.mobility_boost)
            self.armour_boost = int(self.armour_boost)
            self.energy_boost = int(self.energy_boost)
        except Exception as exc:
            raise ValueError("SystemUpgrade boosts must be integers") from exc

    def __str__(self) -> str:
        return (
            f"{self.name} (DEF {self.defense_boost:+d}, MOB {self.mobility_boost:+d}, "
            f"ARM {self.armour_boost:+d}, EN {self.energy_boost:+d})"
        )

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional, Sequence

from .equipment import SystemUpgrade, Weapon

logger = logging.getLogger(__name__)

DEFAULT_ENERGY = 100
DEFAULT_ARMOUR = 500

BUFF_WEAPON_NAME = "Buffed Weapon"
BUFF_UPGRADE_NAME = "Temp Shield"


class Mech:
    """A combatant built from base stats plus mounted equipment.

    Base energy and armour are clamped to zero on every assignment. Every other
    stat is derived from the equipment lists on access, so changes to weapons or
    upgrades show up immediately.
    """

    def __init__(
        self,
        name: str,
        pilot: Optional[str] = None,
        energy: int = DEFAULT_ENERGY,
        armour: int = DEFAULT_ARMOUR,
        weapons: Optional[Iterable[Weapon]] = None,
        system_upgrades: Optional[Iterable[SystemUpgrade]] = None,
    ) -> None:
        if not name:
            raise ValueError("Mech.name must be a non-empty string")
        self.name = name
        self.pilot = pilot
        self._energy = 0
        self._armour = 0
        self.energy = energy
        self.armour = armour
        self._weapons: List[Weapon] = []
        self._system_upgrades: List[SystemUpgrade] = []
        for weapon in weapons or ():
            self.add_weapon(weapon)
        for upgrade in system_upgrades or ():
            self.add_system_upgrade(upgrade)

    # Base stats

    @property
    def energy(self) -> int:
        return self._energy

    @energy.setter
    def energy(self, value: int) -> None:
        self._energy = max(0, int(value))

    @property
    def armour(self) -> int:
        return self._armour

    @armour.setter
    def armour(self, value: int) -> None:
        self._armour = max(0, int(value))

    # Equipment

    @property
    def weapons(self) -> Sequence[Weapon]:
        return tuple(self._weapons)

    @property
    def system_upgrades(self) -> Sequence[SystemUpgrade]:
        return tuple(self._system_upgrades)

    def add_weapon(self, weapon: Weapon) -> None:
        if weapon is None:
            raise ValueError("weapon must be provided")
        self._weapons.append(weapon)

    def add_system_upgrade(self, upgrade: SystemUpgrade) -> None:
        if upgrade is None:
            raise ValueError("upgrade must be provided")
        self._system_upgrades.append(upgrade)

    # Derived stats

    @property
    def attack(self) -> int:
        return sum(w.attack_power for w in self._weapons)

    @property
    def defense(self) -> int:
        return sum(u.defense_boost for u in self._system_upgrades)

    @property
    def mobility(self) -> int:
        return sum(u.mobility_boost for u in self._system_upgrades)

    @property
    def total_armour(self) -> int:
        return max(0, self._armour + sum(u.armour_boost for u in self._system_upgrades))

    @property
    def total_energy(self) -> int:
        return max(0, self._energy + sum(u.energy_boost for u in self._system_upgrades))

    @property
    def available_attack(self) -> int:
        """Attack from weapons whose energy cost fits within current total energy.

        Each weapon is checked on its own against the full energy pool; firing
        does not consume energy.
        """
        energy = self.total_energy
        return sum(w.attack_power for w in self._weapons if w.energy_cost <= energy)

    @property
    def defeated(self) -> bool:
        return self.total_armour <= 0 or self.total_energy <= 0

    # Mutation

    def adjust_stats(self, attack_delta: int, defense_delta: int, drain_upgrades: bool = False) -> None:
        """Apply a buff or damage to attack and defense.

        Negative ``attack_delta`` lowers the attack power of every weapon by its
        magnitude (floor 0 per weapon); positive mounts a synthetic weapon with
        that power and no energy cost. Negative ``defense_delta`` lowers base
        armour only (floor 0); upgrade armour boosts are left alone unless
        ``drain_upgrades`` is set, in which case whatever base armour cannot
        absorb is taken from them in list order (floor 0 each). Positive
        ``defense_delta`` mounts a synthetic upgrade with that defense boost.
        Zero deltas leave the mech untouched.
        """
        self._adjust_attack(int(attack_delta))
        self._adjust_defense(int(defense_delta), drain_upgrades)

    def _adjust_attack(self, delta: int) -> None:
        if delta < 0:
            damage = abs(delta)
            for weapon in self._weapons:
                weapon.reduce_attack(damage)
            logger.debug("%s weapons lose %d attack power", self.name, damage)
        elif delta > 0:
            self.add_weapon(Weapon(name=BUFF_WEAPON_NAME, attack_power=delta, energy_cost=0))
            logger.debug("%s gains %d attack", self.name, delta)

    def _adjust_defense(self, delta: int, drain_upgrades: bool = False) -> None:
        if delta < 0:
            damage = abs(delta)
            before = self.total_armour
            overflow = max(0, damage - self._armour) if drain_upgrades else 0
            self.armour = self._armour - damage
            # Only non-zero when draining: damage past base armour eats upgrade plating, first upgrade first.
            for upgrade in self._system_upgrades:
                if overflow <= 0:
                    break
                if upgrade.armour_boost > 0:
                    taken = min(upgrade.armour_boost, overflow)
                    upgrade.armour_boost -= taken
                    overflow -= taken
            logger.debug("%s armour %d -> %d", self.name, before, self.total_armour)
        elif delta > 0:
            self.add_system_upgrade(SystemUpgrade(name=BUFF_UPGRADE_NAME, defense_boost=delta))
            logger.debug("%s gains %d defense", self.name, delta)

    # Factories

    @classmethod
    def create_default(cls, pilot: str) -> "Mech":
        """Bare mech with default base stats and no equipment."""
        if not pilot or not pilot.strip():
            raise ValueError("Pilot name cannot be empty.")
        return cls(name="Default", pilot=pilot)

    @classmethod
    def mirror_of(cls, mech: "Mech") -> "Mech":
        """Independent copy of ``mech``'s loadout to fight against it."""
        return cls(
            name=f"{mech.name} (Enemy)",
            pilot="Mirror Pilot",
            energy=mech.energy,
            armour=mech.armour,
            weapons=[copy.copy(w) for w in mech.weapons],
            system_upgrades=[copy.copy(u) for u in mech.system_upgrades],
        )

    def describe(self) -> str:
        """Multi-line stat sheet for display."""
        lines = [
            f"Gundam: {self.name} | Pilot: {self.pilot or 'Unassigned'}",
            f"Energy: {self.total_energy} | Armour: {self.total_armour}",
            f"Attack: {self.attack} | Defense: {self.defense} | Mobility: {self.mobility}",
            "Weapons:",
        ]
        lines.extend(f"- {w}" for w in self._weapons)
        lines.append("System Upgrades:")
        lines.extend(f"- {u}" for u in self._system_upgrades)
        return "\n".join(lines)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"Mech(name={self.name!r}, pilot={self.pilot!r}, "
            f"armour={self.total_armour}, energy={self.total_energy})"
        )

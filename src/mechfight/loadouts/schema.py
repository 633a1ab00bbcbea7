from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from ..models import DEFAULT_ARMOUR, DEFAULT_ENERGY, Mech, SystemUpgrade, Weapon

# Keys are accepted in snake_case or in the PascalCase used by older saved
# files; anything else (e.g. derived stats written alongside) is ignored.
_RECORD_CONFIG = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="ignore")


def _placeholder(value: Any, placeholder: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return placeholder
    return value


def _zero_if_none(value: Any) -> Any:
    return 0 if value is None else value


class WeaponRecord(BaseModel):
    model_config = _RECORD_CONFIG

    name: str = Field("Unnamed Weapon", description="Weapon name")
    attack_power: int = Field(0, ge=0, description="Attack contribution")
    energy_cost: int = Field(0, ge=0, description="Energy needed to fire")

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return _placeholder(v, "Unnamed Weapon")

    @field_validator("attack_power", "energy_cost", mode="before")
    @classmethod
    def default_numbers(cls, v: Any) -> Any:
        return _zero_if_none(v)

    def to_weapon(self) -> Weapon:
        return Weapon(name=self.name, attack_power=self.attack_power, energy_cost=self.energy_cost)


class SystemUpgradeRecord(BaseModel):
    model_config = _RECORD_CONFIG

    name: str = Field("Unnamed Upgrade", description="Upgrade name")
    defense_boost: int = 0
    mobility_boost: int = 0
    armour_boost: int = 0
    energy_boost: int = 0

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return _placeholder(v, "Unnamed Upgrade")

    @field_validator("defense_boost", "mobility_boost", "armour_boost", "energy_boost", mode="before")
    @classmethod
    def default_numbers(cls, v: Any) -> Any:
        return _zero_if_none(v)

    def to_upgrade(self) -> SystemUpgrade:
        return SystemUpgrade(
            name=self.name,
            defense_boost=self.defense_boost,
            mobility_boost=self.mobility_boost,
            armour_boost=self.armour_boost,
            energy_boost=self.energy_boost,
        )


class MechRecord(BaseModel):
    """Serialized loadout of one mech."""

    model_config = _RECORD_CONFIG

    name: str = Field("Unnamed Mech", description="Mech name")
    pilot: Optional[str] = Field(default=None, description="Optional pilot name")
    energy: int = Field(DEFAULT_ENERGY, description="Base energy")
    armour: int = Field(DEFAULT_ARMOUR, description="Base armour")
    weapons: List[WeaponRecord] = Field(default_factory=list)
    system_upgrades: List[SystemUpgradeRecord] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return _placeholder(v, "Unnamed Mech")

    @field_validator("weapons", "system_upgrades", mode="before")
    @classmethod
    def default_lists(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("energy", mode="before")
    @classmethod
    def default_energy(cls, v: Any) -> Any:
        return DEFAULT_ENERGY if v is None else v

    @field_validator("armour", mode="before")
    @classmethod
    def default_armour(cls, v: Any) -> Any:
        return DEFAULT_ARMOUR if v is None else v

    def to_mech(self) -> Mech:
        return Mech(
            name=self.name,
            pilot=self.pilot,
            energy=self.energy,
            armour=self.armour,
            weapons=[w.to_weapon() for w in self.weapons],
            system_upgrades=[u.to_upgrade() for u in self.system_upgrades],
        )

    @classmethod
    def from_mech(cls, mech: Mech) -> "MechRecord":
        return cls(
            name=mech.name,
            pilot=mech.pilot,
            energy=mech.energy,
            armour=mech.armour,
            weapons=[
                WeaponRecord(name=w.name, attack_power=w.attack_power, energy_cost=w.energy_cost)
                for w in mech.weapons
            ],
            system_upgrades=[
                SystemUpgradeRecord(
                    name=u.name,
                    defense_boost=u.defense_boost,
                    mobility_boost=u.mobility_boost,
                    armour_boost=u.armour_boost,
                    energy_boost=u.energy_boost,
                )
                for u in mech.system_upgrades
            ],
        )

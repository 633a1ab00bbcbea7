"""
Mech and equipment models.

Contains:
- Weapon and SystemUpgrade equipment records.
- Mech, which derives its combat stats from base values and equipment.
"""

from .equipment import SystemUpgrade, Weapon
from .mech import DEFAULT_ARMOUR, DEFAULT_ENERGY, Mech

__all__ = [
    "Weapon",
    "SystemUpgrade",
    "Mech",
    "DEFAULT_ENERGY",
    "DEFAULT_ARMOUR",
]

"""Loadout records and the file repository that stores them."""

from .repository import LoadoutEntry, LoadoutRepository, display_name, safe_filename
from .schema import MechRecord, SystemUpgradeRecord, WeaponRecord

__all__ = [
    "LoadoutEntry",
    "LoadoutRepository",
    "display_name",
    "safe_filename",
    "MechRecord",
    "WeaponRecord",
    "SystemUpgradeRecord",
]

class MechFightError(Exception):
    """Base error for mechfight domain exceptions."""


class PreconditionError(MechFightError, ValueError):
    """Raised when a mech enters battle without positive energy and armour."""


class StalemateError(MechFightError):
    """Raised when a battle runs past the configured round ceiling."""

    def __init__(self, rounds: int) -> None:
        super().__init__(f"No winner after {rounds} rounds; battle aborted as a stalemate.")
        self.rounds = rounds


class UnknownStrategyError(MechFightError, ValueError):
    """Raised when a strategy name is not registered."""


class LoadoutError(MechFightError):
    """Raised when a loadout file cannot be read, parsed or validated."""


class ConfigError(MechFightError, ValueError):
    """Raised when battle configuration values are out of range."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# Events forwarded to the standard logger at INFO; everything else goes to DEBUG.
_INFO_EVENTS = frozenset({"start", "strategy", "defeat", "draw", "victory"})


@dataclass(frozen=True)
class BattleEvent:
    """A log event emitted during a battle.

    Common event types: "start", "strategy", "attack", "defeat", "draw", "victory".
    """

    type: str
    message: str
    round: int = 0
    data: Optional[Dict[str, Any]] = None


class BattleLog:
    """In-memory record of notable battle events."""

    def __init__(self) -> None:
        self._events: List[BattleEvent] = []

    def add(self, event_type: str, message: str, round: int = 0, **data: Any) -> None:
        ev = BattleEvent(type=event_type, message=message, round=round, data=data or None)
        self._events.append(ev)
        if event_type in _INFO_EVENTS:
            logger.info(message)
        else:
            logger.debug(message)

    def events(self, event_type: Optional[str] = None) -> List[BattleEvent]:
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.type == event_type]

    def clear(self) -> None:
        self._events.clear()

"""
Game event logging.

The engine records everything that happens in a game as typed events.
Events are mirrored to the standard `logging` machinery at DEBUG level.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    TURN_END = "turn_end"

    MOVE = "move"
    BACK_TO_START = "back_to_start"
    NO_FIELD = "no_field"
    SKIPPED = "skipped"

    CARD_DRAW = "card_draw"
    CHOICE = "choice"
    CARROT_EXCHANGE = "carrot_exchange"

    EATS_SALAD = "eats_salad"
    SALAD_CONSUMED = "salad_consumed"
    NO_SALAD = "no_salad"

    SUSPENDED = "suspended"
    UNSUSPENDED = "unsuspended"

    ALREADY_FIRST_RANK = "already_first_rank"
    ALREADY_LAST_RANK = "already_last_rank"

    REACHED_END = "reached_end"
    GAME_END = "game_end"
    RANKED = "ranked"

    ERROR = "error"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        data: Dict[str, Any] = {"event_type": self.event_type.value}
        if self.player is not None:
            data["player"] = self.player
        data.update(self.details)
        return data

    def __repr__(self) -> str:
        player_str = self.player if self.player is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player: Optional[str] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player, details)
        self.events.append(event)
        logger.debug("%r", event)

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        """Get all events of one type, in order."""
        return [e for e in self.events if e.event_type == event_type]

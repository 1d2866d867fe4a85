"""
Structured engine events and the session event log.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    SESSION_START = "session_start"
    PLAYER_JOINED = "player_joined"
    TURN_START = "turn_start"

    DICE_ROLL = "dice_roll"
    MOVE = "move"
    WRAP_BONUS = "wrap_bonus"
    LAND = "land"

    ACTION_ROLL = "action_roll"
    TILE_EFFECT = "tile_effect"
    HEALTH_CHANGE = "health_change"
    GOLD_CHANGE = "gold_change"

    TURN_END = "turn_end"
    SESSION_END = "session_end"


@dataclass
class GameEvent:
    """A logged event in the session."""

    event_type: EventType
    player_number: Optional[int] = None
    turn_number: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_number}" if self.player_number is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the session event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(
        self,
        event_type: EventType,
        player_number: Optional[int] = None,
        turn_number: Optional[int] = None,
        **details: Any,
    ) -> GameEvent:
        """Log a game event and return it."""
        event = GameEvent(event_type, player_number, turn_number, details)
        self.events.append(event)
        return event

    def extend(self, events: List[GameEvent]) -> None:
        self.events.extend(events)

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_events_since(self, index: int) -> List[GameEvent]:
        """Get events logged at or after ``index``."""
        return self.events[max(0, index):]

    def recent(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        if count <= 0:
            return []
        return self.events[-count:]

    def __len__(self) -> int:
        return len(self.events)

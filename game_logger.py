"""
JSONL logger for Shadow Realm session events.

Writes every mapped engine event, one JSON object per line.
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from events.mapper import map_events
from realm.session import GameSession


class GameLogger:
    """Logger that writes session events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None, session_id: Optional[str] = None, log_dir: Optional[str] = None):
        """
        Initialize session logger.

        Args:
            log_file: Path to log file. If None, generates a timestamped filename.
            session_id: Session ID recorded on each line and used in the filename
            log_dir: Directory for generated filenames
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            suffix = f"_{session_id}" if session_id else ""
            log_file = f"realm_session_{timestamp}{suffix}.jsonl"
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
                log_file = os.path.join(log_dir, log_file)

        self.log_file = log_file
        self.session_id = session_id
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index from the session EventLog

        # Create/clear log file
        with open(self.log_file, "w"):
            pass

    def log_event(self, event_type: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Log a session event to the JSONL file.

        Args:
            event_type: Type of event (e.g., "dice_roll", "tile_effect")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "session_id": self.session_id,
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1
        return event

    def flush_engine_events(self, session: GameSession) -> int:
        """Flush new engine events to JSONL through the event mapper.

        Returns the number of events written.
        """
        events = session.event_log.events
        if self._engine_last_idx >= len(events):
            return 0

        new_events = events[self._engine_last_idx:]
        mapped = map_events(session.board, new_events, start_index=self._engine_last_idx)

        for m in mapped:
            if "turn_number" not in m:
                m["turn_number"] = session.current_turn

            number = m.get("player_number")
            if number in session.players:
                m["player_name"] = session.players[number].name

            if m.get("event_type") == "session_end":
                m["final_standings"] = [
                    {
                        "player_number": p.player_number,
                        "player_name": p.name,
                        "gold": p.gold,
                        "health": p.health,
                    }
                    for p in session.standings()
                ]

            etype = m.pop("event_type")
            self.log_event(etype, **m)

        self._engine_last_idx = len(events)
        return len(mapped)

    def read_events(self) -> List[Dict[str, Any]]:
        """Read back every logged line."""
        with open(self.log_file) as f:
            return [json.loads(line) for line in f if line.strip()]

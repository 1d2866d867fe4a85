"""
Public snapshot serialization of GameSession.

Produces a UI-friendly view of the current session: the aggregate consumed
by presentation and storage collaborators.
"""

from __future__ import annotations

from typing import Any, Dict, List

from realm.exceptions import TileNotFoundError
from realm.player import CharacterStats
from realm.session import GameSession


def serialize_player(session: GameSession, number: int) -> Dict[str, Any]:
    pstate = session.players[number]
    try:
        tile_name = session.board.tile_at(pstate.position).name
    except TileNotFoundError:
        tile_name = None
    stats = pstate.stats.to_dict()
    return {
        "player_number": number,
        "name": pstate.name,
        "character_class": pstate.character_class.value if pstate.character_class else None,
        "avatar": pstate.avatar,
        "is_ai": pstate.is_ai,
        "position": pstate.position,
        "tile_name": tile_name,
        "health": pstate.health,
        "gold": pstate.gold,
        "stats": stats,
        "modifiers": {k: CharacterStats.modifier(v) for k, v in stats.items()},
        "primary_stats": list(pstate.character_class.primary_stats) if pstate.character_class else [],
        "is_defeated": pstate.is_defeated,
        "inventory": list(pstate.inventory),
        "properties": sorted(pstate.properties),
    }


def serialize_snapshot(session: GameSession) -> Dict[str, Any]:
    """Serialize a GameSession into a public, stable JSON dict.

    The snapshot includes:
    - session id, status, current_turn, current_player and phase
    - players with public info (position, health, gold, character)
    - the rolls of the active turn, if any
    - winner once the session has ended
    """
    players: List[Dict[str, Any]] = [
        serialize_player(session, number) for number in sorted(session.players)
    ]

    return {
        "session_id": session.session_id,
        "name": session.name,
        "status": session.status.value,
        "board_size": session.board.size,
        "current_turn": session.current_turn,
        "current_player": session.current_player,
        "phase": session.phase.value,
        "last_movement": list(session.last_movement) if session.last_movement else None,
        "last_action_roll": session.last_action_roll,
        "winner": session.winner,
        "players": players,
        "event_count": len(session.event_log),
    }

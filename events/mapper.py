"""
Mapping from internal EventLog objects to canonical public JSON events.

The engine emits GameEvent objects where:
- event_type is eventlog.EventType
- player_number and turn_number are optional
- details is a flat dict of event-specific values

This module produces stable, UI/JSONL-friendly dicts with consistent
event_type strings and payload keys.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from realm.board import Board
from realm.eventlog import EventType, GameEvent
from realm.exceptions import TileNotFoundError


def _tile_name(board: Board, position: Optional[int]) -> Optional[str]:
    if position is None:
        return None
    try:
        return board.tile_at(position).name
    except TileNotFoundError:
        return None


def map_event(board: Board, event: GameEvent) -> Dict[str, Any]:
    """
    Map a single GameEvent to a canonical JSON dict.

    Args:
        board: Board instance (for resolving tile names)
        event: internal event object

    Returns:
        dict with keys: event_type (str), player_number and turn_number
        (when known), and event-specific fields
    """
    etype = event.event_type
    d = event.details or {}

    base: Dict[str, Any] = {"event_type": etype.value}
    if event.player_number is not None:
        base["player_number"] = event.player_number
    if event.turn_number is not None:
        base["turn_number"] = event.turn_number

    if etype == EventType.DICE_ROLL:
        dice = list(d.get("dice", []))
        base.update(dice=dice, total=d.get("total", sum(dice)))
        return base

    if etype == EventType.MOVE:
        to_pos = d.get("to")
        base.update(
            from_position=d.get("from"),
            to_position=to_pos,
            spaces=d.get("spaces"),
            tile_name=_tile_name(board, to_pos),
        )
        return base

    if etype == EventType.WRAP_BONUS:
        base.update(amount=d.get("amount"), gold_after=d.get("new_balance"))
        return base

    if etype == EventType.LAND:
        position = d.get("position")
        base.update(
            position=position,
            tile_name=_tile_name(board, position),
            tile_type=d.get("tile_type"),
        )
        return base

    if etype == EventType.ACTION_ROLL:
        base.update(roll=d.get("roll"))
        return base

    if etype == EventType.TILE_EFFECT:
        position = d.get("position")
        base.update(
            position=position,
            tile_name=_tile_name(board, position),
            tile_type=d.get("tile_type"),
            roll=d.get("roll"),
            health_delta=d.get("health_delta", 0),
            gold_delta=d.get("gold_delta", 0),
        )
        return base

    if etype == EventType.HEALTH_CHANGE:
        base.update(amount=d.get("amount"), health_after=d.get("new_health"))
        return base

    if etype == EventType.GOLD_CHANGE:
        base.update(amount=d.get("amount"), gold_after=d.get("new_balance"))
        return base

    if etype == EventType.TURN_END:
        base.update(next_player=d.get("next_player"), skipped_action=d.get("skipped_action", False))
        return base

    if etype == EventType.TURN_START:
        return base

    if etype == EventType.PLAYER_JOINED:
        base.update(
            name=d.get("name"),
            character_class=d.get("character_class"),
            is_ai=d.get("is_ai", False),
        )
        return base

    if etype == EventType.SESSION_START:
        players = d.get("players") or []
        base.update(
            player_names=players,
            num_players=len(players),
            board_size=d.get("board_size"),
            seed=d.get("seed"),
        )
        return base

    if etype == EventType.SESSION_END:
        base.update(reason=d.get("reason"), winner=event.player_number)
        return base

    # Default: echo raw fields
    base.update(d)
    return base


def map_events(board: Board, events: Iterable[GameEvent], *, start_index: int = 0) -> List[Dict[str, Any]]:
    """Map a sequence of GameEvent objects.

    Args:
        board: Board instance
        events: iterable of GameEvent
        start_index: sequence number of the first event in the session log
    """
    mapped: List[Dict[str, Any]] = []
    for idx, ev in enumerate(events):
        mev = map_event(board, ev)
        mev["seq"] = start_index + idx
        mapped.append(mev)
    return mapped

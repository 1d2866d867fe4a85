"""
Turn engine: movement, action and end-of-turn resolution.

Every operation validates and computes the full outcome before touching the
session, so a raised error always leaves the session unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional, Tuple

from realm.dice import DiceRoller
from realm.effects import TileEffectResolver
from realm.eventlog import EventType, GameEvent
from realm.exceptions import (
    InvalidPhaseError,
    NotYourTurnError,
    SessionNotActiveError,
    TileNotFoundError,
)
from realm.player import PlayerState
from realm.session import GameSession, SessionStatus, TurnPhase
from realm.tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MovementResult:
    """Outcome of a movement roll."""

    player_number: int
    dice: Tuple[int, ...]
    total: int
    old_position: int
    new_position: int
    wrap_bonus: int
    resulting_gold: int
    events: List[GameEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_number": self.player_number,
            "dice": list(self.dice),
            "total": self.total,
            "old_position": self.old_position,
            "new_position": self.new_position,
            "wrap_bonus": self.wrap_bonus,
            "resulting_gold": self.resulting_gold,
        }


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an action roll on the current tile."""

    player_number: int
    roll: int
    tile: Tile
    health_delta: int
    gold_delta: int
    resulting_health: int
    resulting_gold: int
    events: List[GameEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_number": self.player_number,
            "roll": self.roll,
            "tile": self.tile.to_dict(),
            "health_delta": self.health_delta,
            "gold_delta": self.gold_delta,
            "resulting_health": self.resulting_health,
            "resulting_gold": self.resulting_gold,
        }


@dataclass(frozen=True)
class EndTurnResult:
    """Who plays next and on which turn."""

    player_number: int
    next_player: int
    next_turn_number: int
    skipped_action: bool = False
    events: List[GameEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_number": self.player_number,
            "next_player": self.next_player,
            "next_turn_number": self.next_turn_number,
            "skipped_action": self.skipped_action,
        }


class TurnEngine:
    """
    Drives the two-phase turn protocol over a GameSession.

    The engine keeps no per-session state; the same instance can serve any
    number of sessions as long as calls for one session are serialized.
    """

    def __init__(self, dice: Optional[DiceRoller] = None, resolver: Optional[TileEffectResolver] = None):
        self.dice = dice or DiceRoller()
        self.resolver = resolver

    def current_phase(self, session: GameSession) -> TurnPhase:
        """Read-only query of the active turn's phase."""
        if session.status != SessionStatus.ACTIVE:
            raise SessionNotActiveError(f"Session {session.session_id} is {session.status.value}")
        return session.phase

    def roll_movement(self, session: GameSession, player_number: int) -> MovementResult:
        """
        Roll the movement dice and move the active player.

        Passing or landing on the wrap point (pre-roll position + total >= size)
        grants the configured wrap bonus once.
        """
        player = self._require_turn(session, player_number, (TurnPhase.AWAITING_MOVEMENT,))
        config = session.config

        dice = self.dice.roll_movement(config.movement_dice, config.movement_sides)
        total = sum(dice)
        size = session.board.size
        old_position = player.position
        new_position = (old_position + total) % size
        wrap_bonus = config.wrap_bonus if old_position + total >= size else 0
        resulting_gold = clamp_gold(player.gold + wrap_bonus)

        turn = session.current_turn
        events = [
            GameEvent(
                EventType.DICE_ROLL,
                player_number,
                turn,
                {"dice": list(dice), "total": total},
            ),
            GameEvent(
                EventType.MOVE,
                player_number,
                turn,
                {"from": old_position, "to": new_position, "spaces": total},
            ),
        ]
        if wrap_bonus:
            events.append(
                GameEvent(
                    EventType.WRAP_BONUS,
                    player_number,
                    turn,
                    {"amount": wrap_bonus, "new_balance": resulting_gold},
                )
            )
        events.append(
            GameEvent(
                EventType.LAND,
                player_number,
                turn,
                {"position": new_position, "tile_type": self._tile_type_name(session, new_position)},
            )
        )

        player.position = new_position
        player.gold = resulting_gold
        session.last_movement = dice
        session.phase = TurnPhase.AWAITING_ACTION
        session.event_log.extend(events)

        logger.debug(
            "Session %s: P%s rolled %s, %s -> %s (bonus %s)",
            session.session_id, player_number, dice, old_position, new_position, wrap_bonus,
        )
        return MovementResult(
            player_number=player_number,
            dice=dice,
            total=total,
            old_position=old_position,
            new_position=new_position,
            wrap_bonus=wrap_bonus,
            resulting_gold=resulting_gold,
            events=events,
        )

    def roll_action(self, session: GameSession, player_number: int) -> ActionResult:
        """
        Roll the action die and apply the effect of the tile under the player.

        Raises:
            TileNotFoundError: the board has no tile at the player's position
        """
        player = self._require_turn(session, player_number, (TurnPhase.AWAITING_ACTION,))
        config = session.config

        tile = session.board.tile_at(player.position)
        roll = self.dice.roll_action(config.action_sides)
        effect = self._resolver_for(session).resolve(tile.tile_type, roll)

        resulting_health = clamp_health(player.health + effect.health_delta, config.max_health)
        resulting_gold = clamp_gold(player.gold + effect.gold_delta)

        turn = session.current_turn
        events = [
            GameEvent(EventType.ACTION_ROLL, player_number, turn, {"roll": roll}),
            GameEvent(
                EventType.TILE_EFFECT,
                player_number,
                turn,
                {
                    "position": tile.position,
                    "tile_type": tile.tile_type.value,
                    "roll": roll,
                    "health_delta": effect.health_delta,
                    "gold_delta": effect.gold_delta,
                },
            ),
        ]
        if effect.health_delta:
            events.append(
                GameEvent(
                    EventType.HEALTH_CHANGE,
                    player_number,
                    turn,
                    {"amount": effect.health_delta, "new_health": resulting_health},
                )
            )
        if effect.gold_delta:
            events.append(
                GameEvent(
                    EventType.GOLD_CHANGE,
                    player_number,
                    turn,
                    {"amount": effect.gold_delta, "new_balance": resulting_gold},
                )
            )

        player.health = resulting_health
        player.gold = resulting_gold
        session.last_action_roll = roll
        session.phase = TurnPhase.TURN_COMPLETE
        session.event_log.extend(events)

        logger.debug(
            "Session %s: P%s action %s on %s -> health %+d gold %+d",
            session.session_id, player_number, roll, tile.tile_type.value,
            effect.health_delta, effect.gold_delta,
        )
        return ActionResult(
            player_number=player_number,
            roll=roll,
            tile=tile,
            health_delta=effect.health_delta,
            gold_delta=effect.gold_delta,
            resulting_health=resulting_health,
            resulting_gold=resulting_gold,
            events=events,
        )

    def end_turn(self, session: GameSession, player_number: int) -> EndTurnResult:
        """
        End the active player's turn and advance to the next player.

        Allowed once movement has been rolled; ending from the action phase
        passes on the action roll.
        """
        self._require_turn(
            session,
            player_number,
            (TurnPhase.AWAITING_ACTION, TurnPhase.TURN_COMPLETE),
        )
        skipped_action = session.phase == TurnPhase.AWAITING_ACTION

        next_player = (session.current_player % len(session.players)) + 1
        next_turn = session.current_turn + 1 if next_player == 1 else session.current_turn

        events = [
            GameEvent(
                EventType.TURN_END,
                player_number,
                session.current_turn,
                {"next_player": next_player, "skipped_action": skipped_action},
            ),
            GameEvent(EventType.TURN_START, next_player, next_turn, {}),
        ]

        session.current_player = next_player
        session.current_turn = next_turn
        session.phase = TurnPhase.AWAITING_MOVEMENT
        session.last_movement = None
        session.last_action_roll = None
        session.event_log.extend(events)

        logger.debug(
            "Session %s: P%s ended turn, next P%s on turn %s",
            session.session_id, player_number, next_player, next_turn,
        )
        return EndTurnResult(
            player_number=player_number,
            next_player=next_player,
            next_turn_number=next_turn,
            skipped_action=skipped_action,
            events=events,
        )

    # ---- Helpers ----

    def _require_turn(
        self,
        session: GameSession,
        player_number: int,
        phases: Collection[TurnPhase],
    ) -> PlayerState:
        if session.status != SessionStatus.ACTIVE:
            raise SessionNotActiveError(f"Session {session.session_id} is {session.status.value}")
        if player_number != session.current_player or player_number not in session.players:
            raise NotYourTurnError(
                f"Player {player_number} cannot act; it is player {session.current_player}'s turn"
            )
        if session.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise InvalidPhaseError(
                f"Turn is in phase {session.phase.value}; expected one of: {allowed}"
            )
        return session.players[player_number]

    def _resolver_for(self, session: GameSession) -> TileEffectResolver:
        return self.resolver or TileEffectResolver(session.config.effects)

    @staticmethod
    def _tile_type_name(session: GameSession, position: int) -> Optional[str]:
        try:
            return session.board.tile_at(position).tile_type.value
        except TileNotFoundError:
            return None


def clamp_health(value: int, max_health: int = 100) -> int:
    """Clamp health to [0, max_health]."""
    return max(0, min(max_health, value))


def clamp_gold(value: int) -> int:
    """Gold never drops below zero."""
    return max(0, value)

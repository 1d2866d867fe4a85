"""
SessionService builds sessions and characters from request data.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from realm.board import create_standard_board
from realm.dice import DiceRoller
from realm.engine import TurnEngine
from realm.exceptions import ValidationError
from realm.player import CharacterClass, CharacterStats, Player, PlayerState, roll_character_stats
from realm.session import GameSession
from settings import EngineSettings, get_engine_settings

logger = logging.getLogger(__name__)

AI_NAMES = ["Alaric", "Brynn", "Corvin", "Dagna", "Elowen", "Fenwick", "Greta", "Hollis"]


class SessionService:
    """Use-case service for creating sessions and joining players."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or get_engine_settings()

    def create_session(
        self,
        *,
        name: str = "",
        seed: Optional[int] = None,
        board_size: Optional[int] = None,
        max_players: Optional[int] = None,
        session_id: Optional[str] = None,
    ) -> tuple[GameSession, TurnEngine]:
        """Create a waiting session and the engine that will drive it."""
        try:
            config = self.settings.to_game_config(
                seed=seed, board_size=board_size, max_players=max_players
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        session = GameSession(
            config,
            board=create_standard_board(config.board_size),
            session_id=session_id,
            name=name,
        )
        engine = TurnEngine(dice=DiceRoller(random.Random(seed)))
        logger.info("Created session %s (board=%d, seed=%s)", session.session_id, config.board_size, seed)
        return session, engine

    def build_player(
        self,
        *,
        name: Optional[str],
        character_class: Optional[str] = None,
        stats: Optional[Dict[str, int]] = None,
        is_ai: bool = False,
        user_id: Optional[str] = None,
        dice: Optional[DiceRoller] = None,
        seat: int = 0,
    ) -> Player:
        """
        Build a character sheet.

        Missing attributes are rolled with 4d6 drop lowest; AI seats without a
        name get one from AI_NAMES.
        """
        name = (name or "").strip()
        if not name:
            if not is_ai:
                raise ValidationError("Please enter a character name")
            name = AI_NAMES[seat % len(AI_NAMES)]

        cls: Optional[CharacterClass] = None
        if character_class:
            try:
                cls = CharacterClass(character_class)
            except ValueError as e:
                raise ValidationError(f"Unknown character class: {character_class}") from e

        if stats:
            character_stats = CharacterStats(**_checked_stats(stats))
        else:
            character_stats = roll_character_stats(dice or DiceRoller())

        return Player(name=name, character_class=cls, stats=character_stats, is_ai=is_ai, user_id=user_id)

    def join(self, session: GameSession, player: Player) -> PlayerState:
        return session.add_player(player)


def _checked_stats(stats: Dict[str, Any]) -> Dict[str, int]:
    allowed = set(CharacterStats().to_dict())
    unknown = set(stats) - allowed
    if unknown:
        raise ValidationError(f"Unknown attributes: {sorted(unknown)}")
    checked: Dict[str, int] = {}
    for key, value in stats.items():
        if not isinstance(value, int) or not 3 <= value <= 18:
            raise ValidationError(f"Attribute {key} must be an integer in [3, 18]")
        checked[key] = value
    return checked

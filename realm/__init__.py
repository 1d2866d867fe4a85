"""
Shadow Realm Engine

Turn, movement and tile-effect resolution for the Shadow Realm board game.
"""

from realm.board import Board, create_standard_board
from realm.config import EffectPolicy, GameConfig
from realm.dice import DiceRoller
from realm.effects import TileEffect, TileEffectResolver
from realm.engine import ActionResult, EndTurnResult, MovementResult, TurnEngine
from realm.player import CharacterClass, CharacterStats, Player, PlayerState
from realm.session import GameSession, SessionStatus, TurnPhase, create_session
from realm.tiles import Tile, TileType

__all__ = [
    "ActionResult",
    "Board",
    "CharacterClass",
    "CharacterStats",
    "DiceRoller",
    "EffectPolicy",
    "EndTurnResult",
    "GameConfig",
    "GameSession",
    "MovementResult",
    "Player",
    "PlayerState",
    "SessionStatus",
    "Tile",
    "TileEffect",
    "TileEffectResolver",
    "TileType",
    "TurnEngine",
    "TurnPhase",
    "create_session",
    "create_standard_board",
]

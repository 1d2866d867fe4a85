"""Cautious agent that avoids fights it cannot afford to lose."""

from typing import List

from realm.agents.base import Agent
from realm.rules import Action, ActionType
from realm.session import GameSession
from realm.tiles import TileType


class CautiousAgent(Agent):
    """
    Deterministic AI that always resolves its tile, except monster tiles
    when its health is at or below ``retreat_health``.
    """

    def __init__(self, player_number: int, name: str, retreat_health: int = 30):
        super().__init__(player_number, name)
        self.retreat_health = retreat_health

    def choose_action(self, session: GameSession, legal_actions: List[Action]) -> Action:
        if not legal_actions:
            raise ValueError(f"No legal actions for player {self.player_number}")

        by_type = {a.action_type: a for a in legal_actions}

        if ActionType.ROLL_MOVEMENT in by_type:
            return by_type[ActionType.ROLL_MOVEMENT]

        if ActionType.ROLL_ACTION in by_type:
            player = session.get_player(self.player_number)
            tile = session.board.tile_at(player.position)
            retreat = tile.tile_type == TileType.MONSTER and player.health <= self.retreat_health
            if not retreat or ActionType.END_TURN not in by_type:
                return by_type[ActionType.ROLL_ACTION]

        return by_type[ActionType.END_TURN]

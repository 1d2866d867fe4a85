"""Random agent that makes random legal moves."""

import random
from typing import List, Optional

from realm.agents.base import Agent
from realm.rules import Action, ActionType
from realm.session import GameSession


class RandomAgent(Agent):
    """
    Simple AI that makes random legal moves.

    Prefers ROLL_ACTION over passing so that most turns resolve their tile.
    """

    def __init__(self, player_number: int, name: str, rng: Optional[random.Random] = None):
        super().__init__(player_number, name)
        self.rng = rng or random.Random()

    def choose_action(self, session: GameSession, legal_actions: List[Action]) -> Action:
        if not legal_actions:
            raise ValueError(f"No legal actions for player {self.player_number}")

        for a in legal_actions:
            if a.action_type == ActionType.ROLL_ACTION and self.rng.random() < 0.8:
                return a

        return self.rng.choice(legal_actions)

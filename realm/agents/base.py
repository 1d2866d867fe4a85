"""Base class for all computer-controlled players."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from realm.rules import Action
    from realm.session import GameSession


class Agent(ABC):
    """
    Abstract base class for AI players.

    All agents must implement the `choose_action` method to select
    an action from the list of legal actions.

    Attributes:
        player_number: The player's seat in the session (1, 2, ...).
        name: The player's display name.
    """

    def __init__(self, player_number: int, name: str):
        """
        Initialize the agent.

        Args:
            player_number: The player's seat in the session.
            name: The player's display name.
        """
        self.player_number = player_number
        self.name = name

    @abstractmethod
    def choose_action(self, session: "GameSession", legal_actions: List["Action"]) -> "Action":
        """
        Choose an action from the list of legal actions.

        Args:
            session: The current session.
            legal_actions: List of legal actions available to the player.

        Returns:
            The chosen action to execute.
        """
        pass

"""
High-level rules API for controlling turn flow.
This module provides the public interface for game actions and legal move detection.
"""

from enum import Enum
from typing import Any, List, Union

from realm.engine import ActionResult, EndTurnResult, MovementResult, TurnEngine
from realm.session import GameSession, SessionStatus, TurnPhase


class ActionType(Enum):
    """Types of actions a player can take."""

    ROLL_MOVEMENT = "roll_movement"
    ROLL_ACTION = "roll_action"
    END_TURN = "end_turn"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.action_type == other.action_type and self.params == other.params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


ActionOutcome = Union[MovementResult, ActionResult, EndTurnResult]

_PHASE_ACTIONS = {
    TurnPhase.AWAITING_MOVEMENT: [ActionType.ROLL_MOVEMENT],
    # Ending the turn straight after moving passes on the action roll
    TurnPhase.AWAITING_ACTION: [ActionType.ROLL_ACTION, ActionType.END_TURN],
    TurnPhase.TURN_COMPLETE: [ActionType.END_TURN],
}


def get_legal_actions(session: GameSession, player_number: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for AI/controllers to determine valid moves.

    Args:
        session: Current session
        player_number: Player to get actions for

    Returns:
        List of legal Action objects (empty when it is not the player's turn)
    """
    if session.status != SessionStatus.ACTIVE:
        return []
    if player_number != session.current_player:
        return []
    return [Action(action_type) for action_type in _PHASE_ACTIONS[session.phase]]


def apply_action(
    engine: TurnEngine,
    session: GameSession,
    action: Action,
    player_number: int,
) -> ActionOutcome:
    """
    Apply an action to the session.

    Engine errors (NotYourTurnError, InvalidPhaseError, ...) propagate to the caller.
    """
    if action.action_type == ActionType.ROLL_MOVEMENT:
        return engine.roll_movement(session, player_number)
    if action.action_type == ActionType.ROLL_ACTION:
        return engine.roll_action(session, player_number)
    if action.action_type == ActionType.END_TURN:
        return engine.end_turn(session, player_number)
    raise ValueError(f"Unsupported action type: {action.action_type}")

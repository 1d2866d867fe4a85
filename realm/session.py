"""
Session aggregate: roster, turn pointer, lifecycle and event log.
"""

import logging
import uuid
from enum import Enum
from typing import Dict, Iterable, List, Optional

from realm.board import Board, create_standard_board
from realm.config import GameConfig
from realm.eventlog import EventLog, EventType
from realm.exceptions import RosterInvalidError, SessionNotActiveError, ValidationError
from realm.player import Player, PlayerState

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Lifecycle of a session."""

    WAITING = "waiting"
    ACTIVE = "active"
    ENDED = "ended"


class TurnPhase(Enum):
    """Sub-state of the active player's turn."""

    AWAITING_MOVEMENT = "awaiting_movement"
    AWAITING_ACTION = "awaiting_action"
    TURN_COMPLETE = "turn_complete"


class GameSession:
    """
    Represents the complete, externally observable state of a session.

    The engine receives a session on every call and mutates it in place;
    nothing here performs I/O.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        board: Optional[Board] = None,
        session_id: Optional[str] = None,
        name: str = "",
    ):
        self.config = config or GameConfig()
        self.board = board or create_standard_board(self.config.board_size)
        if self.board.size != self.config.board_size:
            raise ValidationError(
                f"Board size {self.board.size} does not match configured size {self.config.board_size}"
            )

        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.name = name
        self.event_log = EventLog()

        self.players: Dict[int, PlayerState] = {}
        self.status = SessionStatus.WAITING
        self.current_player = 1
        self.current_turn = 1
        self.phase = TurnPhase.AWAITING_MOVEMENT
        self.winner: Optional[int] = None

        # Last rolls of the active turn, cleared when the turn ends
        self.last_movement: Optional[tuple] = None
        self.last_action_roll: Optional[int] = None

    # ---- Roster ----

    def add_player(self, player: Player) -> PlayerState:
        """
        Register a new character. Player numbers follow join order.

        Raises:
            SessionNotActiveError: session already started or ended
            RosterInvalidError: session is full
        """
        if self.status != SessionStatus.WAITING:
            raise SessionNotActiveError(
                f"Session {self.session_id} is {self.status.value}; players can only join while waiting"
            )
        if len(self.players) >= self.config.max_players:
            raise RosterInvalidError(f"Session is full ({self.config.max_players} players)")

        number = len(self.players) + 1
        state = PlayerState(
            number,
            player.name,
            self.config.starting_health,
            self.config.starting_gold,
            is_ai=player.is_ai,
            character_class=player.character_class,
            stats=player.stats,
            user_id=player.user_id,
        )
        self.players[number] = state
        self.event_log.log(
            EventType.PLAYER_JOINED,
            player_number=number,
            name=player.name,
            character_class=player.character_class.value if player.character_class else None,
            is_ai=player.is_ai,
        )
        logger.info("Player %s (%s) joined session %s", number, player.name, self.session_id)
        return state

    def load_players(self, states: Iterable[PlayerState]) -> None:
        """Replace the roster with previously stored player records.

        Only allowed while the session is waiting, so the turn pointer always
        names an existing player.
        """
        if self.status != SessionStatus.WAITING:
            raise SessionNotActiveError(
                f"Session {self.session_id} is {self.status.value}; the roster can only be loaded while waiting"
            )
        roster: Dict[int, PlayerState] = {}
        for state in states:
            if state.player_number in roster:
                raise RosterInvalidError(f"Duplicate player_number {state.player_number}")
            roster[state.player_number] = state
        self.validate_roster(roster)
        self.players = roster

    def validate_roster(self, roster: Optional[Dict[int, PlayerState]] = None) -> None:
        """Player numbers must be exactly 1..N with N within the configured bounds."""
        roster = self.players if roster is None else roster
        count = len(roster)
        if count < self.config.min_players:
            raise RosterInvalidError(
                f"At least {self.config.min_players} players required, have {count}"
            )
        if count > self.config.max_players:
            raise RosterInvalidError(
                f"At most {self.config.max_players} players allowed, have {count}"
            )
        if sorted(roster) != list(range(1, count + 1)):
            raise RosterInvalidError(
                f"Player numbers must run 1..{count}, got {sorted(roster)}"
            )

    def get_player(self, player_number: int) -> PlayerState:
        player = self.players.get(player_number)
        if player is None:
            raise ValidationError(f"Unknown player number {player_number}")
        return player

    def get_current_player(self) -> PlayerState:
        """Get the active player."""
        return self.players[self.current_player]

    def ordered_players(self) -> List[PlayerState]:
        return [self.players[n] for n in sorted(self.players)]

    def standings(self) -> List[PlayerState]:
        """Players ranked by gold, then health, then join order."""
        return sorted(self.players.values(), key=lambda p: (-p.gold, -p.health, p.player_number))

    # ---- Lifecycle ----

    def start(self) -> None:
        """Move from waiting to active once the roster is valid."""
        if self.status != SessionStatus.WAITING:
            raise SessionNotActiveError(f"Session {self.session_id} is already {self.status.value}")
        self.validate_roster()

        self.status = SessionStatus.ACTIVE
        self.current_player = 1
        self.phase = TurnPhase.AWAITING_MOVEMENT
        self.event_log.log(
            EventType.SESSION_START,
            turn_number=self.current_turn,
            players=[p.name for p in self.ordered_players()],
            board_size=self.board.size,
            seed=self.config.seed,
        )
        self.event_log.log(
            EventType.TURN_START,
            player_number=self.current_player,
            turn_number=self.current_turn,
        )
        logger.info("Session %s started with %d players", self.session_id, len(self.players))

    def end(self, reason: str = "ended") -> Optional[int]:
        """Close the session and record the leader as winner."""
        if self.status == SessionStatus.ENDED:
            raise SessionNotActiveError(f"Session {self.session_id} has already ended")

        if self.players and self.status == SessionStatus.ACTIVE:
            self.winner = self.standings()[0].player_number
        self.status = SessionStatus.ENDED
        self.event_log.log(
            EventType.SESSION_END,
            player_number=self.winner,
            turn_number=self.current_turn,
            reason=reason,
        )
        logger.info("Session %s ended (%s), winner=%s", self.session_id, reason, self.winner)
        return self.winner

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def __repr__(self) -> str:
        return (
            f"GameSession(id={self.session_id}, status={self.status.value}, "
            f"turn={self.current_turn}, player={self.current_player}, phase={self.phase.value})"
        )


def create_session(
    config: GameConfig,
    players: List[Player],
    board: Optional[Board] = None,
    session_id: Optional[str] = None,
    start: bool = True,
) -> GameSession:
    """Create a session, register players in order and optionally start it."""
    session = GameSession(config, board=board, session_id=session_id)
    for player in players:
        session.add_player(player)
    if start:
        session.start()
    return session

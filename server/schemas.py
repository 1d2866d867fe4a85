from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    name: str = Field("", max_length=60)
    seed: Optional[int] = None
    board_size: Optional[int] = Field(default=None, ge=2, le=1000)
    max_players: Optional[int] = Field(default=None, ge=1, le=8)
    max_turns: Optional[int] = Field(default=None, ge=1)
    agent: Optional[str] = Field(default=None, pattern=r"^(cautious|random)$")


class SessionSummary(BaseModel):
    session_id: str
    name: str
    status: str
    players: int
    current_turn: int
    current_player: int


class SessionListResponse(BaseModel):
    sessions: List[SessionSummary]


class JoinRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=30)
    character_class: Optional[str] = Field(
        default=None, pattern=r"^(Fighter|Rogue|Wizard|Ranger|Cleric|Sorcerer)$"
    )
    stats: Optional[Dict[str, int]] = None
    is_ai: bool = False
    user_id: Optional[str] = None


class JoinResponse(BaseModel):
    player_number: int
    snapshot: Dict[str, Any]


class TurnRequest(BaseModel):
    player_number: int = Field(ge=1)
    turn_number: Optional[int] = Field(default=None, ge=1)


class TurnResponse(BaseModel):
    action_type: str
    result: Dict[str, Any]
    events: List[Dict[str, Any]] = Field(default_factory=list)
    snapshot: Dict[str, Any] = Field(default_factory=dict)
    replayed: bool = False


class PhaseResponse(BaseModel):
    session_id: str
    phase: str
    current_player: int
    current_turn: int


class EventsResponse(BaseModel):
    session_id: str
    events: List[Dict[str, Any]]
    from_index: int
    to_index: Optional[int] = None


class EndSessionRequest(BaseModel):
    reason: str = Field("ended", max_length=40)


class ErrorResponse(BaseModel):
    error: str
    detail: str

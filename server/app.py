from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from realm.board import create_standard_board
from realm.exceptions import (
    InvalidPhaseError,
    NotYourTurnError,
    RealmError,
    RosterInvalidError,
    SessionNotActiveError,
    SessionNotFoundError,
    TileNotFoundError,
    ValidationError,
)
from realm.rules import ActionType

from .registry import SessionRegistry
from .schemas import (
    CreateSessionRequest,
    EndSessionRequest,
    ErrorResponse,
    EventsResponse,
    JoinRequest,
    JoinResponse,
    PhaseResponse,
    SessionListResponse,
    SessionSummary,
    TurnRequest,
    TurnResponse,
)

logger = logging.getLogger(__name__)

registry = SessionRegistry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info("Starting Shadow Realm session server")
    yield
    logger.info("Shutting down; closing %d sessions", len(await registry.list_sessions()))
    await registry.close_all()


app = FastAPI(
    title="Shadow Realm Arena Server",
    version="0.1.0",
    lifespan=lifespan,
)


_STATUS_CODES = {
    SessionNotFoundError: 404,
    TileNotFoundError: 404,
    NotYourTurnError: 409,
    InvalidPhaseError: 409,
    SessionNotActiveError: 409,
    RosterInvalidError: 422,
    ValidationError: 422,
}


@app.exception_handler(RealmError)
async def realm_error_handler(request: Request, exc: RealmError) -> JSONResponse:
    status = next((code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 400)
    if isinstance(exc, TileNotFoundError):
        logger.error("Board lookup failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status, content=ErrorResponse(error=exc.code, detail=str(exc)).model_dump())


# ---- Sessions ----


@app.post("/sessions", response_model=SessionSummary)
async def create_session(req: CreateSessionRequest):
    runner = await registry.create_session(
        name=req.name,
        seed=req.seed,
        board_size=req.board_size,
        max_players=req.max_players,
        max_turns=req.max_turns,
        agent=req.agent,
    )
    return _summary(runner)


@app.get("/sessions", response_model=SessionListResponse)
async def list_sessions():
    return SessionListResponse(sessions=[_summary(r) for r in await registry.list_sessions()])


@app.post("/sessions/{session_id}/players", response_model=JoinResponse)
async def join_session(session_id: str, req: JoinRequest):
    runner = await registry.get(session_id)
    player = registry.service.build_player(
        name=req.name,
        character_class=req.character_class,
        stats=req.stats,
        is_ai=req.is_ai,
        user_id=req.user_id,
        dice=runner.engine.dice,
        seat=len(runner.session.players),
    )
    return await runner.join(player)


@app.post("/sessions/{session_id}/start")
async def start_session(session_id: str):
    runner = await registry.get(session_id)
    return await runner.start()


@app.post("/sessions/{session_id}/end")
async def end_session(session_id: str, req: Optional[EndSessionRequest] = None):
    runner = await registry.get(session_id)
    return await runner.end(req.reason if req else "ended")


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not await registry.stop(session_id):
        raise SessionNotFoundError(f"Session {session_id} not found")
    return {"session_id": session_id, "stopped": True}


# ---- Queries ----


@app.get("/sessions/{session_id}/phase", response_model=PhaseResponse)
async def get_phase(session_id: str):
    runner = await registry.get(session_id)
    return await runner.phase()


@app.get("/sessions/{session_id}/snapshot")
async def get_snapshot(session_id: str):
    runner = await registry.get(session_id)
    return await runner.snapshot()


@app.get("/sessions/{session_id}/events", response_model=EventsResponse)
async def get_events(session_id: str, since: int = 0):
    runner = await registry.get(session_id)
    delta = await runner.events_since(since)
    return EventsResponse(session_id=session_id, **delta)


@app.get("/sessions/{session_id}/chat")
async def get_chat(session_id: str, limit: int = 50):
    runner = await registry.get(session_id)
    return {"session_id": session_id, "messages": runner.chat_feed(limit)}


@app.get("/sessions/{session_id}/legal_actions")
async def legal_actions(session_id: str, player_number: int):
    runner = await registry.get(session_id)
    acts = await runner.legal_actions(player_number)
    return {"session_id": session_id, "player_number": player_number, "actions": acts}


# ---- Turn operations ----


@app.post("/sessions/{session_id}/roll_movement", response_model=TurnResponse)
async def roll_movement(session_id: str, req: TurnRequest):
    runner = await registry.get(session_id)
    return await runner.perform(ActionType.ROLL_MOVEMENT, req.player_number, req.turn_number)


@app.post("/sessions/{session_id}/roll_action", response_model=TurnResponse)
async def roll_action(session_id: str, req: TurnRequest):
    runner = await registry.get(session_id)
    return await runner.perform(ActionType.ROLL_ACTION, req.player_number, req.turn_number)


@app.post("/sessions/{session_id}/end_turn", response_model=TurnResponse)
async def end_turn(session_id: str, req: TurnRequest):
    runner = await registry.get(session_id)
    return await runner.perform(ActionType.END_TURN, req.player_number, req.turn_number)


# ---- Board ----


@app.get("/boards/standard")
async def standard_board(size: int = 100):
    if not 2 <= size <= 1000:
        raise ValidationError("Board size must be between 2 and 1000")
    board = create_standard_board(size)
    return {"size": board.size, "tiles": [t.to_dict() for t in board.tiles]}


def _summary(runner) -> SessionSummary:
    session = runner.session
    return SessionSummary(
        session_id=session.session_id,
        name=session.name,
        status=session.status.value,
        players=len(session.players),
        current_turn=session.current_turn,
        current_player=session.current_player,
    )


if __name__ == "__main__":
    # Convenience entrypoint for running directly: python -m server.app
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=True)

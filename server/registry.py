from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from realm.exceptions import SessionNotFoundError
from server.runner import SessionRunner
from services.narrator import LLMNarrator
from services.session_service import SessionService
from settings import ServerSettings, get_server_settings


class SessionRegistry:
    """In-memory registry of running sessions."""

    def __init__(self, service: Optional[SessionService] = None, settings: Optional[ServerSettings] = None):
        self.service = service or SessionService()
        self.settings = settings or get_server_settings()
        self._sessions: Dict[str, SessionRunner] = {}
        self._lock = asyncio.Lock()

    async def create_session(
        self,
        *,
        name: str = "",
        seed: Optional[int] = None,
        board_size: Optional[int] = None,
        max_players: Optional[int] = None,
        max_turns: Optional[int] = None,
        agent: Optional[str] = None,
    ) -> SessionRunner:
        session, engine = self.service.create_session(
            name=name, seed=seed, board_size=board_size, max_players=max_players
        )
        runner = SessionRunner(
            session,
            engine,
            agent_kind=agent or self.settings.default_agent,
            ai_autoplay=self.settings.ai_autoplay,
            narrator=LLMNarrator() if self.settings.narration else None,
            log_dir=self.settings.log_dir,
            max_turns=max_turns,
            chat_history=self.settings.chat_history,
        )
        async with self._lock:
            self._sessions[session.session_id] = runner
        return runner

    async def get(self, session_id: str) -> SessionRunner:
        runner = self._sessions.get(session_id)
        if runner is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return runner

    async def list_sessions(self) -> List[SessionRunner]:
        return list(self._sessions.values())

    async def stop(self, session_id: str) -> bool:
        async with self._lock:
            runner = self._sessions.pop(session_id, None)
        if runner is None:
            return False
        await runner.close()
        return True

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.stop(session_id)

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Set, Tuple

from events.mapper import map_events
from game_logger import GameLogger
from realm.agents import Agent, build_agent
from realm.engine import ActionResult, TurnEngine
from realm.exceptions import InvalidPhaseError, NarrationError, RosterInvalidError
from realm.player import Player
from realm.rules import Action, ActionType, apply_action, get_legal_actions
from realm.session import GameSession, SessionStatus
from services.narrator import ChatMessage, LLMNarrator, build_encounter_prompt, chat_lines
from snapshot import serialize_snapshot

logger = logging.getLogger(__name__)


class SessionRunner:
    """Owns a single GameSession and serializes every mutation on it.

    Responsibilities:
    - Run engine operations one at a time under a per-session lock
    - Answer duplicate submissions from the idempotency cache
    - Play AI seats once a human ends their turn
    - Flush engine events to JSONL and the chat feed
    - Dispatch tile-encounter narration outside the lock
    """

    def __init__(
        self,
        session: GameSession,
        engine: TurnEngine,
        *,
        agent_kind: str = "cautious",
        ai_autoplay: bool = True,
        narrator: Optional[LLMNarrator] = None,
        log_dir: Optional[str] = None,
        max_turns: Optional[int] = None,
        chat_history: int = 200,
    ):
        self.session = session
        self.engine = engine
        self.agent_kind = agent_kind
        self.ai_autoplay = ai_autoplay
        self.narrator = narrator
        self.max_turns = max_turns
        self.logger = GameLogger(session_id=session.session_id, log_dir=log_dir) if log_dir else None

        self.agents: Dict[int, Agent] = {}
        self.chat: Deque[ChatMessage] = deque(maxlen=chat_history)
        self._lock = asyncio.Lock()
        self._idempotency: Dict[Tuple[int, int, str], Dict[str, Any]] = {}
        self._last_event_idx = 0
        self._narration_tasks: Set[asyncio.Task] = set()

    @property
    def session_id(self) -> str:
        return self.session.session_id

    # ---- Lifecycle ----

    async def join(self, player: Player) -> Dict[str, Any]:
        async with self._lock:
            state = self.session.add_player(player)
            self._flush()
            return {"player_number": state.player_number, "snapshot": serialize_snapshot(self.session)}

    async def start(self) -> Dict[str, Any]:
        async with self._lock:
            if (
                self.ai_autoplay
                and self.max_turns is None
                and self.session.players
                and all(p.is_ai for p in self.session.players.values())
            ):
                raise RosterInvalidError("A session with only AI seats needs max_turns")
            self.session.start()
            for state in self.session.ordered_players():
                if state.is_ai:
                    self.agents[state.player_number] = build_agent(self.agent_kind, state.player_number, state.name)
            self._flush()
            self._autoplay()
            return serialize_snapshot(self.session)

    async def end(self, reason: str = "ended") -> Dict[str, Any]:
        async with self._lock:
            self.session.end(reason)
            self._flush()
            return serialize_snapshot(self.session)

    # ---- Queries ----

    async def phase(self) -> Dict[str, Any]:
        phase = self.engine.current_phase(self.session)
        return {
            "session_id": self.session_id,
            "phase": phase.value,
            "current_player": self.session.current_player,
            "current_turn": self.session.current_turn,
        }

    async def snapshot(self) -> Dict[str, Any]:
        return serialize_snapshot(self.session)

    async def events_since(self, since: int = 0) -> Dict[str, Any]:
        evs = self.session.event_log.get_events_since(since)
        start = max(0, since)
        return {
            "events": map_events(self.session.board, evs, start_index=start),
            "from_index": start,
            "to_index": start + len(evs) - 1 if evs else None,
        }

    async def legal_actions(self, player_number: int) -> List[str]:
        return [a.action_type.value for a in get_legal_actions(self.session, player_number)]

    def chat_feed(self, limit: int = 50) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in list(self.chat)[-limit:]]

    # ---- Turn operations ----

    async def perform(
        self,
        action_type: ActionType,
        player_number: int,
        turn_number: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Run one engine operation for a player.

        When the caller supplies ``turn_number`` the response is cached under
        (player, turn, operation) and replayed for duplicate submissions.
        """
        async with self._lock:
            key = None
            if turn_number is not None:
                key = (player_number, turn_number, action_type.value)
                cached = self._idempotency.get(key)
                if cached is not None:
                    logger.info("Session %s: replaying %s for P%s", self.session_id, key, player_number)
                    return {**cached, "replayed": True}
                if turn_number != self.session.current_turn:
                    raise InvalidPhaseError(
                        f"Turn {turn_number} is not the current turn ({self.session.current_turn})"
                    )

            start_idx = len(self.session.event_log)
            outcome = apply_action(self.engine, self.session, Action(action_type), player_number)
            self._check_turn_limit()

            response = {
                "action_type": action_type.value,
                "result": outcome.to_dict(),
                "events": map_events(
                    self.session.board,
                    self.session.event_log.get_events_since(start_idx),
                    start_index=start_idx,
                ),
                "replayed": False,
            }
            self._flush()
            if isinstance(outcome, ActionResult):
                self._schedule_narration(outcome)
            if action_type == ActionType.END_TURN:
                self._autoplay()

            response["snapshot"] = serialize_snapshot(self.session)
            if key is not None:
                self._idempotency[key] = dict(response)
                self._prune_idempotency()
            return response

    # ---- Internals (called with the lock held) ----

    def _autoplay(self) -> None:
        """Play AI seats until a human seat is up or the session ends."""
        if not self.ai_autoplay:
            return
        while self.session.is_active:
            agent = self.agents.get(self.session.current_player)
            if agent is None or not self._play_agent_turn(agent):
                return

    def _play_agent_turn(self, agent: Agent) -> bool:
        """Play one AI turn. Returns False if the agent was left with no legal action."""
        number = agent.player_number
        while self.session.is_active and self.session.current_player == number:
            legal = get_legal_actions(self.session, number)
            if not legal:
                self._flush()
                return False
            action = agent.choose_action(self.session, legal)
            outcome = apply_action(self.engine, self.session, action, number)
            if isinstance(outcome, ActionResult):
                self._schedule_narration(outcome)
            if action.action_type == ActionType.END_TURN:
                self._check_turn_limit()
                break
        self._flush()
        return True

    def _prune_idempotency(self) -> None:
        # The previous turn stays so a duplicate end_turn that closed it still replays.
        oldest = self.session.current_turn - 1
        for key in [k for k in self._idempotency if k[1] < oldest]:
            del self._idempotency[key]

    def _check_turn_limit(self) -> None:
        if (
            self.max_turns is not None
            and self.session.status == SessionStatus.ACTIVE
            and self.session.current_turn > self.max_turns
        ):
            self.session.end("turn_limit")

    def _flush(self) -> None:
        evs = self.session.event_log.events
        if self._last_event_idx < len(evs):
            names = {n: p.name for n, p in self.session.players.items()}
            self.chat.extend(chat_lines(evs[self._last_event_idx:], names))
            self._last_event_idx = len(evs)
        if self.logger is not None:
            self.logger.flush_engine_events(self.session)

    def _schedule_narration(self, outcome: ActionResult) -> None:
        if self.narrator is None:
            return
        player = self.session.players[outcome.player_number]
        prompt = build_encounter_prompt(
            player.name, outcome.tile, outcome.roll, outcome.health_delta, outcome.gold_delta
        )
        task = asyncio.create_task(self._narrate(prompt, outcome))
        self._narration_tasks.add(task)
        task.add_done_callback(self._narration_tasks.discard)

    async def _narrate(self, prompt: str, outcome: ActionResult) -> None:
        try:
            text = await self.narrator.narrate(prompt)
        except NarrationError as e:
            logger.warning("Session %s: narration failed: %s", self.session_id, e)
            return
        self.chat.append(
            ChatMessage(
                "narrator",
                text,
                outcome.player_number,
                {"action": "tile_encounter", "roll": outcome.roll, "tile": outcome.tile.to_dict()},
            )
        )

    async def wait_for_narration(self) -> None:
        """Wait for pending narration tasks (used on shutdown and in tests)."""
        if self._narration_tasks:
            await asyncio.gather(*list(self._narration_tasks), return_exceptions=True)

    async def close(self) -> None:
        for task in list(self._narration_tasks):
            task.cancel()
        await self.wait_for_narration()
        if self.session.status == SessionStatus.ACTIVE:
            self.session.end("stopped")
            self._flush()

"""
Narration of engine events.

Two collaborators live here:
- ``chat_lines`` turns structured engine events into short system/action
  chat messages, deterministically.
- ``LLMNarrator`` asks an OpenAI-compatible model for a one or two sentence
  description of a tile encounter. The engine never depends on its output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from realm.board import START_TILE_NAME
from realm.eventlog import EventType, GameEvent
from realm.exceptions import NarrationError
from realm.tiles import Tile, TileType
from settings import LLMSettings, get_llm_settings

logger = logging.getLogger(__name__)


@dataclass
class ChatMessage:
    """A line for the session chat feed."""

    message_type: str  # "action" | "system" | "narrator"
    content: str
    player_number: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message_type": self.message_type,
            "content": self.content,
            "player_number": self.player_number,
            "metadata": self.metadata,
        }


def _change_text(amount: int) -> str:
    return f"gained {amount}" if amount > 0 else f"lost {abs(amount)}"


def chat_lines(events: Iterable[GameEvent], names: Mapping[int, str]) -> List[ChatMessage]:
    """Describe engine events as chat messages. Events without a line are skipped."""
    messages: List[ChatMessage] = []
    last_dice: List[int] = []

    for event in events:
        number = event.player_number
        name = names.get(number, f"Player {number}") if number is not None else "The realm"
        d = event.details
        etype = event.event_type

        if etype == EventType.DICE_ROLL:
            last_dice = list(d.get("dice", []))
        elif etype == EventType.MOVE:
            dice_text = " + ".join(str(v) for v in last_dice) or str(d.get("spaces"))
            messages.append(
                ChatMessage(
                    "action",
                    f"{name} rolled {dice_text} = {d.get('spaces')} and moved to tile {d.get('to')}",
                    number,
                    {"action": "movement", "dice": last_dice, "total": d.get("spaces"), "new_position": d.get("to")},
                )
            )
        elif etype == EventType.WRAP_BONUS:
            messages.append(
                ChatMessage(
                    "system",
                    f"{name} passed the {START_TILE_NAME} and collected {d.get('amount')} gold!",
                    number,
                )
            )
        elif etype == EventType.ACTION_ROLL:
            messages.append(
                ChatMessage("action", f"{name} rolled {d.get('roll')} on the action die", number, {"action": "action_roll", "roll": d.get("roll")})
            )
        elif etype == EventType.HEALTH_CHANGE:
            messages.append(ChatMessage("system", f"{name} {_change_text(d.get('amount', 0))} health!", number))
        elif etype == EventType.GOLD_CHANGE:
            messages.append(ChatMessage("system", f"{name} {_change_text(d.get('amount', 0))} gold!", number))
        elif etype == EventType.TURN_END:
            messages.append(
                ChatMessage(
                    "system",
                    f"{name} ended their turn. Player {d.get('next_player')}'s turn begins!",
                )
            )
        elif etype == EventType.PLAYER_JOINED:
            messages.append(ChatMessage("system", f"{name} joined the adventure.", number))
        elif etype == EventType.SESSION_START:
            messages.append(ChatMessage("system", "The adventure begins!"))
        elif etype == EventType.SESSION_END:
            if number is not None:
                messages.append(ChatMessage("system", f"The adventure is over. {name} stands victorious!", number))
            else:
                messages.append(ChatMessage("system", "The adventure is over."))

    return messages


_TILE_GUIDANCE = {
    TileType.PROPERTY: "High rolls (15+) might find treasure or get a discount. Low rolls (5-) might face a challenge.",
    TileType.MONSTER: "High rolls mean victory, low rolls mean taking damage.",
    TileType.EVENT: "The roll determines the outcome of the random event.",
    TileType.TREASURE: "Higher rolls find better treasure.",
    TileType.START: "The portal hums with old magic.",
}


def build_encounter_prompt(player_name: str, tile: Tile, roll: int, health_delta: int = 0, gold_delta: int = 0) -> str:
    """Prompt asking for a short narration of a tile encounter."""
    outcome = []
    if health_delta:
        outcome.append(f"{_change_text(health_delta)} health")
    if gold_delta:
        outcome.append(f"{_change_text(gold_delta)} gold")
    outcome_text = " and ".join(outcome) if outcome else "nothing changed"

    return (
        f'{player_name} has landed on "{tile.name}" ({tile.description}) in the {tile.region}.\n'
        f"They rolled a {roll} on a d20 action roll.\n\n"
        f"This is a {tile.tile_type.value} tile. {_TILE_GUIDANCE[tile.tile_type]}\n"
        f"Outcome: {player_name} {outcome_text}.\n\n"
        "Write a short 1-2 sentence narration of what happens. "
        "Keep it exciting and appropriate for a fantasy adventure!"
    )


class LLMNarrator:
    """
    Narration backend using an OpenAI-compatible chat completions API.

    Configuration comes from LLMSettings (LLM_ environment variables).
    """

    def __init__(self, settings: Optional[LLMSettings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or get_llm_settings()
        self._client = client

    async def narrate(self, prompt: str) -> str:
        """Return the model's narration for ``prompt``.

        Raises:
            NarrationError: request failed or the response had no content
        """
        base_url = self.settings.base_url
        if not base_url:
            raise NarrationError(f"No base URL configured for provider {self.settings.provider.value}")
        url = f"{base_url.rstrip('/')}/chat/completions"

        payload = {
            "model": self.settings.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.settings.max_tokens,
            "temperature": 0.8,
        }
        headers: Dict[str, str] = {}
        if self.settings.api_key is not None:
            headers["Authorization"] = f"Bearer {self.settings.api_key.get_secret_value()}"

        client = self._client or httpx.AsyncClient(timeout=self.settings.timeout_seconds)
        try:
            response = await client.post(url, json=payload, headers=headers or None)
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise NarrationError(f"Narration request failed: {e}") from e
        finally:
            if self._client is None:
                await client.aclose()

        choices = result.get("choices") if isinstance(result, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise NarrationError("Invalid narration response format")
        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            content = ""
        content = content.strip()
        if not content:
            raise NarrationError("Narration model returned empty response")

        logger.debug("Narration received (%d chars)", len(content))
        return content

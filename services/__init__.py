"""
Application services: session construction and narration.
"""

from services.narrator import ChatMessage, LLMNarrator, build_encounter_prompt, chat_lines
from services.session_service import SessionService

__all__ = [
    "ChatMessage",
    "LLMNarrator",
    "SessionService",
    "build_encounter_prompt",
    "chat_lines",
]

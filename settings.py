"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- Engine rules (board size, starting resources, effect thresholds)
- LLM providers used for tile-encounter narration
- The session server (event log directory, narration, AI autoplay)
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from realm.config import EffectPolicy, GameConfig


class EngineSettings(BaseSettings):
    """
    Rule constants for new sessions.

    Environment variables (prefix: REALM_), e.g.:
        REALM_BOARD_SIZE      - Tiles in the ring (default: 100)
        REALM_WRAP_BONUS      - Gold for passing the Shadow Portal (default: 200)
        REALM_MONSTER_HIGH    - Action roll that defeats a monster (default: 15)
        REALM_EVENT_LOW       - Action roll at or below which events hurt (default: 6)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="REALM_",
    )

    board_size: int = Field(default=100, ge=2)
    starting_health: int = Field(default=100, ge=0)
    max_health: int = Field(default=100, ge=1)
    starting_gold: int = Field(default=1500, ge=0)
    wrap_bonus: int = Field(default=200, ge=0)
    min_players: int = Field(default=1, ge=1)
    max_players: int = Field(default=4, ge=1)

    monster_high: int = Field(default=15, ge=1, le=20)
    monster_low: int = Field(default=8, ge=0, le=20)
    event_high: int = Field(default=12, ge=1, le=20)
    event_low: int = Field(default=6, ge=0, le=20)

    def to_game_config(self, **overrides) -> GameConfig:
        """Build a GameConfig, letting per-session values win over the environment."""
        effects = EffectPolicy(
            monster_high=self.monster_high,
            monster_low=self.monster_low,
            event_high=self.event_high,
            event_low=self.event_low,
        )
        values = {
            "board_size": self.board_size,
            "starting_health": self.starting_health,
            "max_health": self.max_health,
            "starting_gold": self.starting_gold,
            "wrap_bonus": self.wrap_bonus,
            "min_players": self.min_players,
            "max_players": self.max_players,
            "effects": effects,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**values)


class LLMProvider(str, Enum):
    """Supported LLM backends."""

    OLLAMA = "ollama"
    VLLM = "vllm"
    OPENAI = "openai"
    CUSTOM = "custom"


class LLMSettings(BaseSettings):
    """
    Configuration for the narration model endpoint.

    Environment variables (prefix: LLM_):
        LLM_PROVIDER       - ollama | vllm | openai | custom (default: ollama)
        LLM_BASE_URL       - Base URL for OpenAI-compatible API
        LLM_MODEL          - Model name or identifier
        LLM_API_KEY        - Optional API key for authenticated providers
        LLM_TIMEOUT_SECONDS- Request timeout in seconds (default: 30)
        LLM_MAX_TOKENS     - Max response tokens (default: 100)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="LLM_",
    )

    provider: LLMProvider = Field(
        default=LLMProvider.OLLAMA,
        description="LLM backend to use (ollama | vllm | openai | custom).",
    )
    base_url: Optional[str] = Field(
        default=None,
        validate_default=True,
        description="Base URL for OpenAI-compatible API, e.g. http://localhost:11434/v1.",
    )
    model: str = Field(
        default="gemma3:4b",
        description="Model name or identifier.",
    )
    api_key: Optional[SecretStr] = Field(
        default=None,
        description="API key for providers that require authentication.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds.",
    )
    max_tokens: int = Field(
        default=100,
        gt=0,
        description="Maximum number of tokens to generate.",
    )

    @field_validator("base_url", mode="before")
    @classmethod
    def default_base_url(cls, value: Optional[str], info):
        """
        Provide sensible defaults for base_url depending on the provider.

        - ollama -> http://localhost:11434/v1
        - vllm   -> http://localhost:8000/v1
        - openai/custom -> must be provided explicitly
        """
        if value:
            return value

        provider = info.data.get("provider", LLMProvider.OLLAMA)
        if isinstance(provider, str):
            try:
                provider = LLMProvider(provider)
            except ValueError:
                provider = LLMProvider.OLLAMA

        if provider == LLMProvider.OLLAMA:
            return "http://localhost:11434/v1"
        if provider == LLMProvider.VLLM:
            return "http://localhost:8000/v1"

        return value


class ServerSettings(BaseSettings):
    """
    Configuration for the session server.

    Environment variables (prefix: SERVER_):
        SERVER_LOG_DIR         - Directory for per-session JSONL logs (default: none)
        SERVER_NARRATION       - Ask the LLM to narrate tile encounters (default: false)
        SERVER_AI_AUTOPLAY     - Play AI seats automatically (default: true)
        SERVER_DEFAULT_AGENT   - cautious | random (default: cautious)
        SERVER_CHAT_HISTORY    - Chat lines kept per session (default: 200)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="SERVER_",
    )

    log_dir: Optional[str] = Field(default=None)
    narration: bool = Field(default=False)
    ai_autoplay: bool = Field(default=True)
    default_agent: str = Field(default="cautious", pattern=r"^(cautious|random)$")
    chat_history: int = Field(default=200, ge=1)


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()


@lru_cache
def get_llm_settings() -> LLMSettings:
    """Return cached LLM settings instance."""
    return LLMSettings()


@lru_cache
def get_server_settings() -> ServerSettings:
    """Return cached server settings instance."""
    return ServerSettings()

"""
Game configuration settings.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EffectPolicy:
    """Thresholds and amounts used when resolving tile effects."""

    monster_high: int = 15
    monster_low: int = 8
    monster_base_reward: int = 50
    monster_reward_per_point: int = 5
    monster_damage: int = 15

    treasure_base: int = 25
    treasure_per_point: int = 3

    event_high: int = 12
    event_low: int = 6
    event_reward: int = 30
    event_penalty: int = 20

    def __post_init__(self) -> None:
        if self.monster_low >= self.monster_high:
            raise ValueError("monster_low must be below monster_high")
        if self.event_low >= self.event_high:
            raise ValueError("event_low must be below event_high")


@dataclass
class GameConfig:
    """Configuration for a Shadow Realm session."""

    board_size: int = 100

    starting_health: int = 100
    max_health: int = 100
    starting_gold: int = 1500
    wrap_bonus: int = 200

    movement_dice: int = 2
    movement_sides: int = 6
    action_sides: int = 20

    min_players: int = 1
    max_players: int = 4

    seed: Optional[int] = None

    effects: EffectPolicy = field(default_factory=EffectPolicy)

    def __post_init__(self) -> None:
        if self.board_size < 2:
            raise ValueError("board_size must be at least 2")
        if not 0 <= self.starting_health <= self.max_health:
            raise ValueError("starting_health must be within [0, max_health]")
        if self.starting_gold < 0 or self.wrap_bonus < 0:
            raise ValueError("gold amounts must be non-negative")
        if not 1 <= self.min_players <= self.max_players:
            raise ValueError("min_players must be between 1 and max_players")

"""
Player state, characters and management.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from realm.dice import DiceRoller


class CharacterClass(Enum):
    """Playable character classes."""

    FIGHTER = "Fighter"
    ROGUE = "Rogue"
    WIZARD = "Wizard"
    RANGER = "Ranger"
    CLERIC = "Cleric"
    SORCERER = "Sorcerer"

    @property
    def primary_stats(self) -> Tuple[str, str]:
        return _PRIMARY_STATS[self]

    @property
    def avatar(self) -> str:
        return _AVATARS[self]


_PRIMARY_STATS = {
    CharacterClass.FIGHTER: ("strength", "constitution"),
    CharacterClass.ROGUE: ("dexterity", "intelligence"),
    CharacterClass.WIZARD: ("intelligence", "wisdom"),
    CharacterClass.RANGER: ("dexterity", "wisdom"),
    CharacterClass.CLERIC: ("wisdom", "charisma"),
    CharacterClass.SORCERER: ("charisma", "constitution"),
}

_AVATARS = {
    CharacterClass.FIGHTER: "⚔️",
    CharacterClass.ROGUE: "🛡️",
    CharacterClass.WIZARD: "🧙‍♂️",
    CharacterClass.RANGER: "🏹",
    CharacterClass.CLERIC: "⛪",
    CharacterClass.SORCERER: "✨",
}


@dataclass
class CharacterStats:
    """The six classic attributes."""

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    @staticmethod
    def modifier(value: int) -> int:
        """Attribute modifier, floor((value - 10) / 2)."""
        return (value - 10) // 2

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def roll_character_stats(dice: DiceRoller) -> CharacterStats:
    """Roll every attribute with 4d6 drop lowest."""
    return CharacterStats(
        strength=dice.roll_attribute(),
        dexterity=dice.roll_attribute(),
        constitution=dice.roll_attribute(),
        intelligence=dice.roll_attribute(),
        wisdom=dice.roll_attribute(),
        charisma=dice.roll_attribute(),
    )


class PlayerState:
    """Represents the complete state of a player in a session."""

    def __init__(
        self,
        player_number: int,
        name: str,
        starting_health: int = 100,
        starting_gold: int = 1500,
        *,
        is_ai: bool = False,
        character_class: Optional[CharacterClass] = None,
        stats: Optional[CharacterStats] = None,
        user_id: Optional[str] = None,
    ):
        self.player_number = player_number
        self.name = name
        self.position = 0
        self.health = starting_health
        self.gold = starting_gold
        self.is_ai = is_ai
        # Character metadata below is carried through untouched by the engine
        self.character_class = character_class
        self.stats = stats or CharacterStats()
        self.user_id = user_id
        self.inventory: List[Any] = []
        self.properties: set[int] = set()

    @property
    def avatar(self) -> str:
        return self.character_class.avatar if self.character_class else "✨"

    @property
    def is_defeated(self) -> bool:
        return self.health == 0

    def __repr__(self) -> str:
        return (
            f"PlayerState(number={self.player_number}, name='{self.name}', "
            f"position={self.position}, health={self.health}, gold={self.gold})"
        )


@dataclass
class Player:
    """
    Character sheet submitted when joining a session.
    This is primarily for the external API.
    """

    name: str
    character_class: Optional[CharacterClass] = None
    stats: CharacterStats = field(default_factory=CharacterStats)
    is_ai: bool = False
    user_id: Optional[str] = None

    def __repr__(self) -> str:
        return f"Player(name='{self.name}', class={self.character_class and self.character_class.value})"

"""
Dice rolling for movement, actions and character creation.
"""

import random
from typing import List, Optional, Protocol, Tuple


class RandomSource(Protocol):
    """Anything that can produce an inclusive random integer, e.g. random.Random."""

    def randint(self, a: int, b: int) -> int:
        ...


class DiceRoller:
    """
    Produces dice outcomes from an injected randomness source.

    Holds no game state; pass a seeded ``random.Random`` (or any object with
    ``randint``) for reproducible games.
    """

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def roll_dice(self, count: int, sides: int = 6) -> List[int]:
        """Roll ``count`` independent dice with ``sides`` faces each."""
        if count < 0:
            raise ValueError(f"Cannot roll a negative number of dice: {count}")
        if sides < 1:
            raise ValueError(f"A die needs at least one side, got {sides}")
        return [self.rng.randint(1, sides) for _ in range(count)]

    def roll_movement(self, count: int = 2, sides: int = 6) -> Tuple[int, ...]:
        """Standard movement roll (2d6)."""
        return tuple(self.roll_dice(count, sides))

    def roll_action(self, sides: int = 20) -> int:
        """Single action roll (1d20)."""
        return self.roll_dice(1, sides)[0]

    def roll_attribute(self) -> int:
        """Roll 4d6 and drop the lowest die."""
        rolls = sorted(self.roll_dice(4, 6), reverse=True)
        return sum(rolls[:3])

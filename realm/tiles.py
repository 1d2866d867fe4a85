"""
Board tile definitions and types.
"""

from dataclasses import dataclass
from enum import Enum


class TileType(Enum):
    """Types of tiles on the board."""

    START = "start"
    PROPERTY = "property"
    MONSTER = "monster"
    TREASURE = "treasure"
    EVENT = "event"


@dataclass(frozen=True)
class Tile:
    """A single tile of the ring. Immutable for the lifetime of a session."""

    position: int
    tile_type: TileType
    name: str = ""
    region: str = ""
    description: str = ""
    purchase_price: int = 0
    rent_price: int = 0

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Tile position must be non-negative, got {self.position}")
        if self.purchase_price < 0 or self.rent_price < 0:
            raise ValueError("Tile prices must be non-negative")
        if not isinstance(self.tile_type, TileType):
            # Accept the raw string form, e.g. from JSON board definitions
            object.__setattr__(self, "tile_type", TileType(self.tile_type))

    @property
    def is_property(self) -> bool:
        return self.tile_type == TileType.PROPERTY

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "tile_type": self.tile_type.value,
            "name": self.name,
            "region": self.region,
            "description": self.description,
            "purchase_price": self.purchase_price,
            "rent_price": self.rent_price,
        }

    def __repr__(self) -> str:
        return f"Tile(position={self.position}, type={self.tile_type.value}, name='{self.name}')"

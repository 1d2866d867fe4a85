"""
Board topology: a fixed ring of tiles and the standard Shadow Realm layout.
"""

from typing import Dict, Iterable, List, Optional

from realm.exceptions import TileNotFoundError
from realm.tiles import Tile, TileType

REGIONS = [
    "Shadow Forest",
    "Cursed Swamp",
    "Haunted Graveyard",
    "Crystal Caverns",
    "Dragon Mountains",
    "Wizard Tower",
    "Demon Fortress",
    "Celestial Gardens",
    "Void Nexus",
    "Vampire Castle",
]

START_TILE_NAME = "Shadow Portal"

# Cycle of tile types for every non-start tile on the standard board
_TYPE_CYCLE = [
    TileType.MONSTER,
    TileType.PROPERTY,
    TileType.TREASURE,
    TileType.EVENT,
    TileType.PROPERTY,
]

_TYPE_NAMES = {
    TileType.MONSTER: "Lair",
    TileType.PROPERTY: "Holding",
    TileType.TREASURE: "Hoard",
    TileType.EVENT: "Crossroads",
}

_TYPE_DESCRIPTIONS = {
    TileType.MONSTER: "A creature of the realm guards this place.",
    TileType.PROPERTY: "Land that a bold adventurer could claim.",
    TileType.TREASURE: "Something glitters in the dark.",
    TileType.EVENT: "Fate turns here, for better or worse.",
}


class Board:
    """A fixed ring of tiles. Read-only after construction."""

    def __init__(self, tiles: Iterable[Tile], size: Optional[int] = None):
        tiles = list(tiles)
        self._size = size if size is not None else len(tiles)
        if self._size < 1:
            raise ValueError("Board size must be positive")

        self._tiles: Dict[int, Tile] = {}
        for tile in tiles:
            if tile.position >= self._size:
                raise ValueError(
                    f"Tile position {tile.position} is outside board of size {self._size}"
                )
            if tile.position in self._tiles:
                raise ValueError(f"Duplicate tile at position {tile.position}")
            self._tiles[tile.position] = tile

    @property
    def size(self) -> int:
        """The fixed ring length."""
        return self._size

    @property
    def tiles(self) -> List[Tile]:
        """All registered tiles ordered by position."""
        return [self._tiles[pos] for pos in sorted(self._tiles)]

    def is_complete(self) -> bool:
        """True when every position in the ring has a tile."""
        return len(self._tiles) == self._size

    def tile_at(self, position: int) -> Tile:
        """Get the tile at the given position."""
        if not 0 <= position < self._size:
            raise TileNotFoundError(f"Position {position} is outside board of size {self._size}")
        tile = self._tiles.get(position)
        if tile is None:
            raise TileNotFoundError(f"No tile registered at position {position}")
        return tile

    def get_tiles_of_type(self, tile_type: TileType) -> List[int]:
        """Get positions of all tiles of a given type."""
        return [t.position for t in self.tiles if t.tile_type == tile_type]

    def get_region(self, region: str) -> List[int]:
        """Get all tile positions in a region."""
        return [t.position for t in self.tiles if t.region == region]

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Board(size={self._size}, tiles={len(self._tiles)})"


def region_for(position: int, size: int) -> str:
    """Region a position belongs to; the ring is split into equal arcs."""
    span = max(1, size // len(REGIONS))
    return REGIONS[min(position // span, len(REGIONS) - 1)]


def create_standard_board(size: int = 100) -> Board:
    """Create the standard Shadow Realm ring of the given size."""
    tiles = [
        Tile(
            position=0,
            tile_type=TileType.START,
            name=START_TILE_NAME,
            region=region_for(0, size),
            description="Every journey around the realm begins and ends here.",
        )
    ]
    for position in range(1, size):
        tile_type = _TYPE_CYCLE[(position - 1) % len(_TYPE_CYCLE)]
        region = region_for(position, size)
        purchase_price = 0
        rent_price = 0
        if tile_type == TileType.PROPERTY:
            # Land grows more valuable further around the ring
            purchase_price = 60 + (position * 340) // size
            rent_price = max(2, purchase_price // 10)
        tiles.append(
            Tile(
                position=position,
                tile_type=tile_type,
                name=f"{region} {_TYPE_NAMES[tile_type]} {position}",
                region=region,
                description=_TYPE_DESCRIPTIONS[tile_type],
                purchase_price=purchase_price,
                rent_price=rent_price,
            )
        )
    return Board(tiles, size)

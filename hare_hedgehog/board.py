"""
Board layout and tile-type definitions.
"""

from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from hare_hedgehog.exceptions import InvalidFieldError

if TYPE_CHECKING:
    from hare_hedgehog.context import GameContext
    from hare_hedgehog.player import Player


class TileType(Enum):
    """Types of tiles on the track."""

    START = "start"
    END = "end"
    CARROT = "carrot"
    SALAD = "salad"
    HARE = "hare"
    HEDGEHOG = "hedgehog"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FLAG = "flag"


_S, _E = TileType.START, TileType.END
_C, _L = TileType.CARROT, TileType.SALAD
_H, _G = TileType.HARE, TileType.HEDGEHOG
_2, _3, _4, _F = TileType.TWO, TileType.THREE, TileType.FOUR, TileType.FLAG

FIELDS: Tuple[TileType, ...] = (
    _S, _H, _C, _H, _3, _C, _H, _L, _G, _4, _2, _G, _3, _C, _H,
    _G, _F, _2, _4, _G, _3, _C, _L, _2, _G, _H, _C, _4, _3, _2,
    _G, _H, _F, _C, _H, _2, _3, _G, _C, _H, _C, _2, _L, _G, _3,
    _4, _H, _2, _F, _C, _G, _H, _3, _2, _4, _C, _G, _L, _H, _C, _2,
    _H, _L, _H, _E,
)


class Board:
    """The Hare & Hedgehog track with 65 fields."""

    def __init__(self, fields: Tuple[TileType, ...] = FIELDS):
        self.fields: Tuple[TileType, ...] = tuple(fields)
        self.start_field: int = self._find(TileType.START, default=0)
        self.end_field: int = self._find(TileType.END, default=len(self.fields) - 1)

    def _find(self, tile_type: TileType, default: int) -> int:
        return next((i for i, t in enumerate(self.fields) if t == tile_type), default)

    @property
    def size(self) -> int:
        """Number of fields on the track."""
        return len(self.fields)

    @property
    def last_field(self) -> int:
        return self.size - 1

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[TileType]:
        return iter(self.fields)

    def is_in_bounds(self, field: int) -> bool:
        """Check if a field index is on the board."""
        return 0 <= field < self.size

    def tile_type(self, field: int) -> TileType:
        """
        Get the tile type at a field.

        Raises:
            InvalidFieldError: if the field is not on the board.
        """
        if not self.is_in_bounds(field):
            raise InvalidFieldError(f"Field {field} is outside the board (0..{self.last_field})")
        return self.fields[field]

    def is_accessible(self, field: int, context: "GameContext", player: "Player") -> bool:
        """
        Check if a player may move to a field by ordinary movement.

        Out-of-bounds fields are never accessible. Everything else is decided
        by the behaviour of the tile at that field.
        """
        return self.is_in_bounds(field) and context.get_tile(field).is_accessible(field, context, player)

    def fields_of_type(self, tile_type: TileType) -> List[int]:
        """Get all field indices of one tile type, ascending."""
        return [i for i, t in enumerate(self.fields) if t == tile_type]

    def nearest_behind(self, field: int, tile_type: TileType) -> Optional[int]:
        """Find the closest field of a tile type strictly behind a field."""
        for i in range(field - 1, -1, -1):
            if self.fields[i] == tile_type:
                return i
        return None

    def describe(self, field: int) -> str:
        """Human readable field description, e.g. '8(hedgehog)'."""
        return f"{field}({self.tile_type(field).value})"

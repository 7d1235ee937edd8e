"""
Hand Module

Melds, eyes, hands and the decompositions the search produces.
All of them are immutable values.
"""

from collections import Counter
from enum import IntEnum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .grouping import TileGroup, group_by_category
from .tiles import Tile

# Melds in a complete standard hand
MELDS_PER_HAND = 4
# Tiles in a complete hand when no quads are held
HAND_SIZE = 3 * MELDS_PER_HAND + 2


class MeldType(IntEnum):
    """Types of melds"""
    SEQUENCE = 0  # 顺子 - 3 consecutive tiles in one numbered suit
    TRIPLET = 1   # 刻子 - 3 identical tiles
    QUAD = 2      # 杠 - 4 identical tiles


class QuadStatus(IntEnum):
    """Whether a quad was declared publicly"""
    OPEN = 0    # 明杠
    CLOSED = 1  # 暗杠


@dataclass(frozen=True)
class Meld:
    """
    Represents a meld of tiles.

    Attributes:
        meld_type: Sequence, Triplet or Quad
        tiles: Tiles in the meld (sequences are stored in ascending order)
        quad_status: Open or Closed, only set for quads
    """
    meld_type: MeldType
    tiles: Tuple[Tile, ...]
    quad_status: Optional[QuadStatus] = None

    def __post_init__(self):
        """Validate meld"""
        object.__setattr__(self, "tiles", tuple(self.tiles))
        if self.meld_type == MeldType.SEQUENCE:
            if len(self.tiles) != 3:
                raise ValueError("Sequence must have exactly 3 tiles")
            object.__setattr__(self, "tiles", tuple(sorted(self.tiles, key=lambda t: t.tile_index)))
            if not self._is_valid_sequence(self.tiles):
                raise ValueError(f"Invalid sequence: {self.tiles}")
        elif self.meld_type == MeldType.TRIPLET:
            if len(self.tiles) != 3:
                raise ValueError("Triplet must have exactly 3 tiles")
            if not all(t == self.tiles[0] for t in self.tiles):
                raise ValueError("Triplet tiles must be identical")
        else:
            if len(self.tiles) != 4:
                raise ValueError("Quad must have exactly 4 tiles")
            if not all(t == self.tiles[0] for t in self.tiles):
                raise ValueError("Quad tiles must be identical")
            if self.quad_status is None:
                raise ValueError("Quad must be declared open or closed")
        if self.meld_type != MeldType.QUAD and self.quad_status is not None:
            raise ValueError("Only quads have a quad status")
        if any(t.is_bonus for t in self.tiles):
            raise ValueError("Flowers and seasons cannot be melded")

    @staticmethod
    def _is_valid_sequence(tiles: Tuple[Tile, ...]) -> bool:
        """Check if tiles form an ascending run in one numbered suit"""
        first = tiles[0]
        if not first.is_number:
            return False
        return tiles[1] == first + 1 and tiles[2] == first + 2

    @classmethod
    def sequence(cls, start: Tile) -> 'Meld':
        """Sequence of start and the next two tiles of its suit"""
        tiles = (start, start + 1, start + 2)
        if None in tiles:
            raise ValueError(f"No sequence starts at {start!r}")
        return cls(MeldType.SEQUENCE, tiles)

    @classmethod
    def triplet(cls, tile: Tile) -> 'Meld':
        return cls(MeldType.TRIPLET, (tile,) * 3)

    @classmethod
    def quad(cls, tile: Tile, status: QuadStatus = QuadStatus.OPEN) -> 'Meld':
        return cls(MeldType.QUAD, (tile,) * 4, status)

    @property
    def base_tile(self) -> Tile:
        """Lowest tile of a sequence, or the repeated tile"""
        return self.tiles[0]

    @property
    def is_pung(self) -> bool:
        """Triplet or quad"""
        return self.meld_type in (MeldType.TRIPLET, MeldType.QUAD)

    @property
    def is_concealed(self) -> bool:
        """Only closed quads keep a declared meld concealed"""
        return self.quad_status == QuadStatus.CLOSED

    def __str__(self) -> str:
        tiles_str = " ".join(str(t) for t in self.tiles)
        if self.meld_type == MeldType.QUAD:
            concealed = "暗" if self.is_concealed else "明"
            return f"[{concealed}{self.meld_type.name}: {tiles_str}]"
        return f"[{self.meld_type.name}: {tiles_str}]"


@dataclass(frozen=True)
class Eye:
    """The pair completing a hand, held as one tile value"""
    tile: Tile

    @property
    def tiles(self) -> Tuple[Tile, Tile]:
        return (self.tile, self.tile)

    def __str__(self) -> str:
        return f"[EYE: {self.tile} {self.tile}]"


@dataclass(frozen=True)
class Hand:
    """
    A hand to evaluate.

    Attributes:
        closed: Closed tiles, not yet assigned to melds. Flowers and
                seasons held here are bonus tiles.
        open_melds: Declared melds, in declaration order
    """
    closed: TileGroup
    open_melds: Tuple[Meld, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "open_melds", tuple(self.open_melds))

    @classmethod
    def from_tiles(cls, closed: Iterable[Tile], open_melds: Iterable[Meld] = ()) -> 'Hand':
        return cls(group_by_category(closed), tuple(open_melds))

    @property
    def melds_needed(self) -> int:
        """Melds still to be resolved from the closed tiles"""
        return MELDS_PER_HAND - len(self.open_melds)

    @property
    def bonus_tiles(self) -> List[Tile]:
        return self.closed.bonus_tiles()

    @property
    def is_concealed(self) -> bool:
        """No melds declared other than closed quads"""
        return all(m.is_concealed for m in self.open_melds)

    def all_tiles(self) -> List[Tile]:
        """Closed tiles followed by open meld tiles"""
        tiles = list(self.closed)
        for meld in self.open_melds:
            tiles.extend(meld.tiles)
        return tiles

    def __len__(self) -> int:
        return len(self.closed) + sum(len(m.tiles) for m in self.open_melds)

    def __str__(self) -> str:
        melds = " ".join(str(m) for m in self.open_melds)
        return f"{self.closed} {melds}".strip()


@dataclass(frozen=True)
class Decomposition:
    """
    One complete reading of a hand: four melds plus an eye.

    Attributes:
        melds: Open melds in declaration order, then resolved closed melds
               in search order
        eye: The pair
        bonus: Flowers and seasons held alongside
    """
    melds: Tuple[Meld, ...]
    eye: Eye
    bonus: Tuple[Tile, ...] = ()

    def tiles(self) -> List[Tile]:
        """Every tile of the reading, the eye counted twice"""
        tiles = []
        for meld in self.melds:
            tiles.extend(meld.tiles)
        tiles.extend(self.eye.tiles)
        tiles.extend(self.bonus)
        return tiles

    def counter(self) -> Counter:
        return Counter(self.tiles())

    def __str__(self) -> str:
        return " ".join(str(m) for m in self.melds) + f" {self.eye}"

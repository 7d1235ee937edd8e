"""
Tile Grouping

Partitions a set of tiles by category. A TileGroup is a snapshot: it is
built once from a hand's closed tiles and re-derived rather than mutated.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple
import numpy as np

from .tiles import Tile, TileCategory, NUM_TILE_TYPES


# Bucket holding each category. Every category must be listed here.
_BUCKETS = {
    TileCategory.WIND: "winds",
    TileCategory.DRAGON: "dragons",
    TileCategory.TONG: "tongs",
    TileCategory.WAN: "wans",
    TileCategory.TIAO: "tiaos",
    TileCategory.FLOWER: "flowers",
    TileCategory.SEASON: "seasons",
}

if set(_BUCKETS) != set(TileCategory):
    raise RuntimeError(f"Tile categories without a bucket: {set(TileCategory) - set(_BUCKETS)}")


@dataclass(frozen=True)
class TileGroup:
    """
    Tiles held, grouped by category.

    Each bucket keeps the tiles in the order they were given, duplicates
    included.
    """
    winds: Tuple[Tile, ...] = ()
    dragons: Tuple[Tile, ...] = ()
    tongs: Tuple[Tile, ...] = ()
    wans: Tuple[Tile, ...] = ()
    tiaos: Tuple[Tile, ...] = ()
    flowers: Tuple[Tile, ...] = ()
    seasons: Tuple[Tile, ...] = ()

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile]) -> 'TileGroup':
        buckets = {name: [] for name in _BUCKETS.values()}
        for tile in tiles:
            buckets[_BUCKETS[tile.category]].append(tile)
        return cls(**{name: tuple(held) for name, held in buckets.items()})

    def bucket(self, category: TileCategory) -> Tuple[Tile, ...]:
        """Tiles of one category"""
        return getattr(self, _BUCKETS[category])

    def __iter__(self) -> Iterator[Tile]:
        for name in _BUCKETS.values():
            yield from getattr(self, name)

    def __len__(self) -> int:
        return sum(len(getattr(self, name)) for name in _BUCKETS.values())

    def playable_tiles(self) -> List[Tile]:
        """Tiles that can be melded (everything but flowers and seasons)"""
        return [t for t in self if not t.is_bonus]

    def bonus_tiles(self) -> List[Tile]:
        return list(self.flowers + self.seasons)

    def counter(self) -> Counter:
        return Counter(self)

    def same_tiles(self, other) -> bool:
        """Multiset equality, ignoring the order tiles were given in"""
        if isinstance(other, TileGroup):
            return self.counter() == other.counter()
        return self.counter() == Counter(other)

    def to_count_array(self) -> np.ndarray:
        """
        Convert to a 42-element array counting each tile type,
        indexed by Tile.tile_index.
        """
        counts = np.zeros(NUM_TILE_TYPES, dtype=np.int8)
        for tile in self:
            counts[tile.tile_index] += 1
        return counts

    def __repr__(self) -> str:
        return f"TileGroup({len(self)} tiles)"

    def __str__(self) -> str:
        return " ".join(str(t) for t in sorted(self, key=lambda t: t.tile_index))


def group_by_category(tiles: Iterable[Tile]) -> TileGroup:
    """Partition tiles into category buckets, preserving input order"""
    return TileGroup.from_tiles(tiles)

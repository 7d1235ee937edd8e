"""
Special Hands

Winning hands that do not follow the four-melds-plus-eye shape. Each is
declared as a set of required tiles plus how many of them appear twice,
and is matched by comparing tile counts rather than by search.
"""

from collections import Counter
from enum import IntEnum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .grouping import TileGroup, group_by_category
from .hand import Eye
from .tiles import (
    Tile, tong, wan, tiao,
    EAST, SOUTH, WEST, NORTH, CENTRAL, PROSPERITY, BLANK,
)


class SpecialHandKind(IntEnum):
    THIRTEEN_ORPHANS = 0  # 十三幺


@dataclass(frozen=True)
class SpecialHand:
    """A matched special hand"""
    kind: SpecialHandKind
    eye: Eye
    bonus: Tuple[Tile, ...] = ()

    def __str__(self) -> str:
        return f"[{self.kind.name}] {self.eye}"


@dataclass(frozen=True)
class SpecialHandPattern:
    """
    Declaration of a special hand.

    Attributes:
        kind: Which special hand this is
        name: English name
        chinese_name: Chinese name
        required: Distinct tiles that must all be held
        duplicates: How many of the required tiles are held twice
    """
    kind: SpecialHandKind
    name: str
    chinese_name: str
    required: Tuple[Tile, ...]
    duplicates: int = 1

    def match(self, group: TileGroup) -> Optional[SpecialHand]:
        playable = group.playable_tiles()
        if len(playable) != len(self.required) + self.duplicates:
            return None

        counts = Counter(playable)
        if set(counts) != set(self.required):
            return None

        doubled = [tile for tile in self.required if counts[tile] == 2]
        if len(doubled) != self.duplicates or any(counts[t] > 2 for t in counts):
            return None

        return SpecialHand(self.kind, Eye(doubled[0]), tuple(group.bonus_tiles()))


THIRTEEN_ORPHANS = SpecialHandPattern(
    SpecialHandKind.THIRTEEN_ORPHANS,
    "Thirteen Orphans",
    "十三幺",
    (
        tiao(1), tiao(9), wan(1), wan(9), tong(1), tong(9),
        EAST, SOUTH, WEST, NORTH,
        CENTRAL, PROSPERITY, BLANK,
    ),
)

# Checked in order, first match wins
SPECIAL_HANDS = (THIRTEEN_ORPHANS,)


def detect_special_hand(tiles: Union[TileGroup, Iterable[Tile]]) -> Optional[SpecialHand]:
    """
    Match the tiles against every special hand.

    Args:
        tiles: A TileGroup or any iterable of tiles. Flowers and seasons are
               set aside and carried on the result as bonus tiles.
    """
    group = tiles if isinstance(tiles, TileGroup) else group_by_category(tiles)
    for pattern in SPECIAL_HANDS:
        special = pattern.match(group)
        if special is not None:
            return special
    return None

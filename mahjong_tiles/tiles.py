"""
Mahjong Tiles

Defines the tile identity used by the hand evaluator:
- 9 Tong (筒) x4 = 36
- 9 Wan (万) x4 = 36
- 9 Tiao (条) x4 = 36
- 4 Winds (东南西北) x4 = 16
- 3 Dragons (中发白) x4 = 12
- 4 Flowers (梅兰菊竹) and 4 Seasons (春夏秋冬), one of each
Total: 144 tiles
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Optional


class TileCategory(IntEnum):
    """Tile categories, in the order the evaluator walks them"""
    TONG = 0     # 筒 - Numbers 1-9
    WAN = 1      # 万 - Numbers 1-9
    TIAO = 2     # 条 - Numbers 1-9
    WIND = 3     # 风 - East, South, West, North
    DRAGON = 4   # 箭 - Central, Prosperity, Blank
    FLOWER = 5   # 花 - Plum, Orchid, Chrysanthemum, Bamboo
    SEASON = 6   # 季 - Spring, Summer, Autumn, Winter

    @property
    def is_number(self) -> bool:
        return self in NUMBER_CATEGORIES

    @property
    def is_honour(self) -> bool:
        return self in (TileCategory.WIND, TileCategory.DRAGON)

    @property
    def is_bonus(self) -> bool:
        return self in (TileCategory.FLOWER, TileCategory.SEASON)


NUMBER_CATEGORIES = (TileCategory.TONG, TileCategory.WAN, TileCategory.TIAO)


class WindType(IntEnum):
    """Wind tile types, also used as seat numbers"""
    EAST = 0   # 东
    SOUTH = 1  # 南
    WEST = 2   # 西
    NORTH = 3  # 北


class DragonType(IntEnum):
    """Dragon tile types"""
    CENTRAL = 0     # 中 (Red)
    PROSPERITY = 1  # 发 (Green)
    BLANK = 2       # 白 (White)


class FlowerType(IntEnum):
    """Flower tile types, numbered by the seat they belong to"""
    PLUM = 0           # 梅
    ORCHID = 1         # 兰
    CHRYSANTHEMUM = 2  # 菊
    BAMBOO = 3         # 竹


class SeasonType(IntEnum):
    """Season tile types, numbered by the seat they belong to"""
    SPRING = 0  # 春
    SUMMER = 1  # 夏
    AUTUMN = 2  # 秋
    WINTER = 3  # 冬


# Index layout of the count arrays, see Tile.tile_index
_CATEGORY_OFFSETS = {
    TileCategory.TONG: 0,
    TileCategory.WAN: 9,
    TileCategory.TIAO: 18,
    TileCategory.WIND: 27,
    TileCategory.DRAGON: 31,
    TileCategory.FLOWER: 34,
    TileCategory.SEASON: 38,
}

_RANK_ENUMS = {
    TileCategory.WIND: WindType,
    TileCategory.DRAGON: DragonType,
    TileCategory.FLOWER: FlowerType,
    TileCategory.SEASON: SeasonType,
}

_SUIT_CHARS = {TileCategory.TONG: "筒", TileCategory.WAN: "万", TileCategory.TIAO: "条"}
_CHINESE_DIGITS = "一二三四五六七八九"
_HONOUR_CHARS = {
    TileCategory.WIND: "东南西北",
    TileCategory.DRAGON: "中发白",
    TileCategory.FLOWER: "梅兰菊竹",
    TileCategory.SEASON: "春夏秋冬",
}


@dataclass(frozen=True)
class Tile:
    """
    Represents a single Mahjong tile.

    Tiles compare and hash by value: two tiles with the same category and
    rank are interchangeable.

    Attributes:
        category: The category of the tile
        rank: 1-9 for numbered suits, the WindType/DragonType/FlowerType/
              SeasonType value otherwise
    """
    category: TileCategory
    rank: int

    def __post_init__(self):
        """Validate tile ranks"""
        if self.category.is_number:
            if not 1 <= self.rank <= 9:
                raise ValueError(f"Numbered suits must have rank 1-9, got {self.rank}")
        else:
            size = len(_RANK_ENUMS[self.category])
            if not 0 <= self.rank < size:
                raise ValueError(
                    f"{self.category.name} tiles must have rank 0-{size - 1}, got {self.rank}"
                )

    @property
    def value(self) -> Optional[int]:
        """Numeric value, only defined for numbered suits"""
        if self.category.is_number:
            return self.rank
        return None

    @property
    def is_number(self) -> bool:
        return self.category.is_number

    @property
    def is_honour(self) -> bool:
        """Check if tile is an honour tile (Wind or Dragon)"""
        return self.category.is_honour

    @property
    def is_bonus(self) -> bool:
        """Check if tile is a flower or season"""
        return self.category.is_bonus

    @property
    def is_terminal(self) -> bool:
        """Check if tile is a terminal (1 or 9 of numbered suits)"""
        return self.is_number and self.rank in (1, 9)

    @property
    def seat(self) -> Optional[WindType]:
        """Seat a wind, flower or season tile belongs to"""
        if self.category in (TileCategory.WIND, TileCategory.FLOWER, TileCategory.SEASON):
            return WindType(self.rank)
        return None

    @property
    def tile_index(self) -> int:
        """
        Get unique index for this tile type (0-41).

        Tong 0-8, Wan 9-17, Tiao 18-26, Winds 27-30, Dragons 31-33,
        Flowers 34-37, Seasons 38-41.
        """
        offset = _CATEGORY_OFFSETS[self.category]
        if self.is_number:
            return offset + self.rank - 1
        return offset + self.rank

    def _check_comparable(self, other: 'Tile') -> None:
        if not (self.is_number and self.category == other.category):
            raise TypeError(f"Tiles {self!r} and {other!r} are not comparable")

    def __lt__(self, other) -> bool:
        """Ordering only exists between numbered tiles of the same suit"""
        if not isinstance(other, Tile):
            return NotImplemented
        self._check_comparable(other)
        return self.rank < other.rank

    def __le__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        self._check_comparable(other)
        return self.rank <= other.rank

    def __gt__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        self._check_comparable(other)
        return self.rank > other.rank

    def __ge__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        self._check_comparable(other)
        return self.rank >= other.rank

    def __add__(self, offset: int) -> Optional['Tile']:
        """Next tiles in the same suit, None past 9 or for non-numbered tiles"""
        if not isinstance(offset, int):
            return NotImplemented
        if not self.is_number or not 1 <= self.rank + offset <= 9:
            return None
        return Tile(self.category, self.rank + offset)

    def __sub__(self, offset: int) -> Optional['Tile']:
        if not isinstance(offset, int):
            return NotImplemented
        return self + (-offset)

    def __repr__(self) -> str:
        if self.is_number:
            return f"{self.category.name}({self.rank})"
        return _RANK_ENUMS[self.category](self.rank).name

    def __str__(self) -> str:
        """Human-readable string representation"""
        if self.is_number:
            return f"{_CHINESE_DIGITS[self.rank - 1]}{_SUIT_CHARS[self.category]}"
        return _HONOUR_CHARS[self.category][self.rank]

    @classmethod
    def from_index(cls, tile_index: int) -> 'Tile':
        """Create a tile from its type index (0-41)"""
        for category in reversed(TileCategory):
            offset = _CATEGORY_OFFSETS[category]
            if tile_index >= offset:
                rank = tile_index - offset
                if category.is_number:
                    rank += 1
                return cls(category, rank)
        raise ValueError(f"Invalid tile index: {tile_index}")

    @classmethod
    def from_string(cls, s: str) -> 'Tile':
        """
        Create tile from string representation.

        Args:
            s: String like "1筒", "9万", "五条", "东", "中", "梅",
               or an ASCII name like "TONG1", "wan9", "EAST", "PLUM".
        """
        s = s.strip()

        # Numbered suits, Chinese
        if len(s) == 2 and s[1] in _SUIT_CHARS.values():
            category = next(c for c, ch in _SUIT_CHARS.items() if ch == s[1])
            if s[0].isdigit():
                return cls(category, int(s[0]))
            if s[0] in _CHINESE_DIGITS:
                return cls(category, _CHINESE_DIGITS.index(s[0]) + 1)

        # Honours and bonus tiles, Chinese
        for category, chars in _HONOUR_CHARS.items():
            if len(s) == 1 and s in chars:
                return cls(category, chars.index(s))

        # ASCII names
        name = s.upper()
        for category in NUMBER_CATEGORIES:
            prefix = category.name
            if name.startswith(prefix) and name[len(prefix):].isdigit():
                return cls(category, int(name[len(prefix):]))
        for category, rank_enum in _RANK_ENUMS.items():
            if name in rank_enum.__members__:
                return cls(category, rank_enum[name])

        raise ValueError(f"Cannot parse tile string: {s}")


# Convenience functions for creating specific tiles
def tong(value: int) -> Tile:
    """Create a Tong tile (1-9筒)"""
    return Tile(TileCategory.TONG, value)

def wan(value: int) -> Tile:
    """Create a Wan tile (1-9万)"""
    return Tile(TileCategory.WAN, value)

def tiao(value: int) -> Tile:
    """Create a Tiao tile (1-9条)"""
    return Tile(TileCategory.TIAO, value)

def wind(wind_type: WindType) -> Tile:
    """Create a Wind tile (东南西北)"""
    return Tile(TileCategory.WIND, wind_type)

def dragon(dragon_type: DragonType) -> Tile:
    """Create a Dragon tile (中发白)"""
    return Tile(TileCategory.DRAGON, dragon_type)


# Named wind tiles
EAST = wind(WindType.EAST)
SOUTH = wind(WindType.SOUTH)
WEST = wind(WindType.WEST)
NORTH = wind(WindType.NORTH)

# Named dragon tiles
CENTRAL = dragon(DragonType.CENTRAL)
PROSPERITY = dragon(DragonType.PROSPERITY)
BLANK = dragon(DragonType.BLANK)

# Named flower and season tiles
PLUM = Tile(TileCategory.FLOWER, FlowerType.PLUM)
ORCHID = Tile(TileCategory.FLOWER, FlowerType.ORCHID)
CHRYSANTHEMUM = Tile(TileCategory.FLOWER, FlowerType.CHRYSANTHEMUM)
BAMBOO = Tile(TileCategory.FLOWER, FlowerType.BAMBOO)

SPRING = Tile(TileCategory.SEASON, SeasonType.SPRING)
SUMMER = Tile(TileCategory.SEASON, SeasonType.SUMMER)
AUTUMN = Tile(TileCategory.SEASON, SeasonType.AUTUMN)
WINTER = Tile(TileCategory.SEASON, SeasonType.WINTER)

# Total number of tile types, bonus tiles included
NUM_TILE_TYPES = 42
# Tile types that can take part in melds
NUM_PLAYABLE_TYPES = 34

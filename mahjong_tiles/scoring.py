"""
Hand Scoring

Maps a completed hand (a decomposition or a special hand) plus the
situation it was won in to the set of named patterns that apply.

The scorer does not turn patterns into points: that is left to a
RuleTable (see rules.py), since conventions differ between tables.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from .hand import Decomposition, Eye, Hand, Meld, MeldType
from .special import SpecialHand, SpecialHandKind
from .tiles import Tile, TileCategory, WindType


class ScoreKind(IntEnum):
    """Named winning patterns"""
    THIRTEEN_ORPHANS = 0      # 十三幺
    MAJOR_FOUR_WINDS = 1      # 大四喜
    MAJOR_THREE_DRAGONS = 2   # 大三元
    MINOR_FOUR_WINDS = 3      # 小四喜
    MINOR_THREE_DRAGONS = 4   # 小三元
    PURE = 5                  # 清一色 / 字一色
    ALL_TRIPLETS = 6          # 对对和
    ALL_SEQUENCES = 7         # 平和
    ALL_QUADS = 8             # 十八罗汉
    MATCHING_SEASON = 9       # 正季
    MATCHING_FLOWER = 10      # 正花
    ALL_CONCEALED = 11        # 门前清
    SELF_DRAWN = 12           # 自摸
    LAST_TILE = 13            # 海底捞月
    ROBBING_THE_KONG = 14     # 抢杠


@dataclass(frozen=True)
class ScoreTag:
    """
    A pattern attached to a scored hand.

    Attributes:
        kind: The pattern
        category: The category a Pure hand is made of, None otherwise
    """
    kind: ScoreKind
    category: Optional[TileCategory] = None

    def __str__(self) -> str:
        name = "".join(part.capitalize() for part in self.kind.name.split("_"))
        if self.category is not None:
            return f"{name}({self.category.name})"
        return name


@dataclass(frozen=True)
class ScoringFlags:
    """Situation the hand was won in"""
    self_drawn: bool = False        # Won on own draw
    concealed: bool = False         # No melds declared except closed quads
    won_on_discard: bool = False    # Won on another player's discard
    robbed_kong: bool = False       # Won on a tile added to another's quad
    last_tile: bool = False         # Won on the last tile of the wall
    seat_wind: Optional[WindType] = None  # For matching flowers and seasons

    def __post_init__(self):
        if self.self_drawn and self.won_on_discard:
            raise ValueError("A hand cannot be both self-drawn and won on a discard")
        if self.self_drawn and self.robbed_kong:
            raise ValueError("Robbing a kong wins on another player's tile, not a self-draw")

    @classmethod
    def for_hand(cls, hand: Hand, **kwargs) -> 'ScoringFlags':
        """Flags with `concealed` derived from the hand's declared melds"""
        kwargs.setdefault("concealed", hand.is_concealed)
        return cls(**kwargs)


@dataclass
class ScoringContext:
    """Context information needed for scoring"""
    combination: Union[Decomposition, SpecialHand]
    flags: ScoringFlags

    # Computed fields (set during analysis)
    melds: Tuple[Meld, ...] = ()
    eye: Optional[Eye] = None
    bonus: Tuple[Tile, ...] = ()
    special: Optional[SpecialHandKind] = None
    categories: FrozenSet[TileCategory] = field(default_factory=frozenset)

    def __post_init__(self):
        self._analyze()

    def _analyze(self):
        combination = self.combination
        self.eye = combination.eye
        self.bonus = tuple(combination.bonus)
        if isinstance(combination, SpecialHand):
            self.special = combination.kind
        else:
            self.melds = tuple(combination.melds)

        tiles = [t for m in self.melds for t in m.tiles] + [self.eye.tile]
        self.categories = frozenset(t.category for t in tiles)

    @property
    def is_standard(self) -> bool:
        """Four melds and an eye, as opposed to a special hand"""
        return self.special is None

    def pungs_of(self, category: TileCategory) -> int:
        """Number of triplets and quads in a category"""
        return sum(1 for m in self.melds if m.is_pung and m.base_tile.category == category)


@dataclass
class ScoringPattern:
    """Represents a scoring pattern"""
    kind: ScoreKind
    name: str
    chinese_name: str
    check_func: Callable[[ScoringContext], bool]


class Scorer:
    """
    Pattern scorer.

    Checks every pattern against a hand and returns the full set that
    applies; several patterns may apply to one hand.
    """

    def __init__(self):
        self.patterns = self._create_patterns()

    def score(
        self,
        combination: Union[Decomposition, SpecialHand],
        flags: Optional[ScoringFlags] = None,
    ) -> FrozenSet[ScoreTag]:
        """
        Get the patterns that apply to a completed hand.

        Args:
            combination: A decomposition from the meld search, or a matched
                         special hand
            flags: How the hand was won; defaults to no situational flags
        """
        ctx = ScoringContext(combination, flags or ScoringFlags())
        return frozenset(self._tag(pattern, ctx) for pattern in self.get_matching_patterns(ctx))

    def get_matching_patterns(self, ctx: ScoringContext) -> List[ScoringPattern]:
        return [pattern for pattern in self.patterns if pattern.check_func(ctx)]

    @staticmethod
    def _tag(pattern: ScoringPattern, ctx: ScoringContext) -> ScoreTag:
        if pattern.kind == ScoreKind.PURE:
            (category,) = ctx.categories
            return ScoreTag(pattern.kind, category)
        return ScoreTag(pattern.kind)

    def _create_patterns(self) -> List[ScoringPattern]:
        """Create all scoring patterns"""
        return [
            # ========== Special Hands ==========
            ScoringPattern(ScoreKind.THIRTEEN_ORPHANS, "Thirteen Orphans", "十三幺",
                           self._check_thirteen_orphans),

            # ========== Honour Hands ==========
            ScoringPattern(ScoreKind.MAJOR_FOUR_WINDS, "Major Four Winds", "大四喜",
                           self._check_major_four_winds),
            ScoringPattern(ScoreKind.MAJOR_THREE_DRAGONS, "Major Three Dragons", "大三元",
                           self._check_major_three_dragons),
            ScoringPattern(ScoreKind.MINOR_FOUR_WINDS, "Minor Four Winds", "小四喜",
                           self._check_minor_four_winds),
            ScoringPattern(ScoreKind.MINOR_THREE_DRAGONS, "Minor Three Dragons", "小三元",
                           self._check_minor_three_dragons),

            # ========== Shape ==========
            ScoringPattern(ScoreKind.PURE, "Pure", "清一色",
                           self._check_pure),
            ScoringPattern(ScoreKind.ALL_TRIPLETS, "All Triplets", "对对和",
                           self._check_all_triplets),
            ScoringPattern(ScoreKind.ALL_SEQUENCES, "All Sequences", "平和",
                           self._check_all_sequences),
            ScoringPattern(ScoreKind.ALL_QUADS, "All Quads", "十八罗汉",
                           self._check_all_quads),

            # ========== Bonus Tiles ==========
            ScoringPattern(ScoreKind.MATCHING_SEASON, "Matching Season", "正季",
                           self._check_matching_season),
            ScoringPattern(ScoreKind.MATCHING_FLOWER, "Matching Flower", "正花",
                           self._check_matching_flower),

            # ========== Situational ==========
            ScoringPattern(ScoreKind.ALL_CONCEALED, "All Concealed", "门前清",
                           lambda ctx: ctx.flags.concealed),
            ScoringPattern(ScoreKind.SELF_DRAWN, "Self-Drawn", "自摸",
                           lambda ctx: ctx.flags.self_drawn),
            ScoringPattern(ScoreKind.LAST_TILE, "Last Tile", "海底捞月",
                           lambda ctx: ctx.flags.last_tile),
            ScoringPattern(ScoreKind.ROBBING_THE_KONG, "Robbing the Kong", "抢杠",
                           lambda ctx: ctx.flags.robbed_kong),
        ]

    # ========== Pattern Check Functions ==========

    def _check_thirteen_orphans(self, ctx: ScoringContext) -> bool:
        return ctx.special == SpecialHandKind.THIRTEEN_ORPHANS

    def _check_major_four_winds(self, ctx: ScoringContext) -> bool:
        """Triplets/quads of all four winds"""
        return ctx.pungs_of(TileCategory.WIND) == 4

    def _check_major_three_dragons(self, ctx: ScoringContext) -> bool:
        """Triplets/quads of all three dragons"""
        return ctx.pungs_of(TileCategory.DRAGON) == 3

    def _check_minor_four_winds(self, ctx: ScoringContext) -> bool:
        """Three wind triplets/quads + wind eye"""
        return (ctx.is_standard
                and ctx.pungs_of(TileCategory.WIND) == 3
                and ctx.eye.tile.category == TileCategory.WIND)

    def _check_minor_three_dragons(self, ctx: ScoringContext) -> bool:
        """Two dragon triplets/quads + dragon eye"""
        return (ctx.is_standard
                and ctx.pungs_of(TileCategory.DRAGON) == 2
                and ctx.eye.tile.category == TileCategory.DRAGON)

    def _check_pure(self, ctx: ScoringContext) -> bool:
        """Every meld and the eye drawn from one category"""
        return ctx.is_standard and len(ctx.categories) == 1

    def _check_all_triplets(self, ctx: ScoringContext) -> bool:
        return ctx.is_standard and all(m.is_pung for m in ctx.melds)

    def _check_all_sequences(self, ctx: ScoringContext) -> bool:
        return ctx.is_standard and all(m.meld_type == MeldType.SEQUENCE for m in ctx.melds)

    def _check_all_quads(self, ctx: ScoringContext) -> bool:
        return ctx.is_standard and all(m.meld_type == MeldType.QUAD for m in ctx.melds)

    def _check_matching_season(self, ctx: ScoringContext) -> bool:
        """A season belonging to the winner's seat"""
        return self._has_seat_bonus(ctx, TileCategory.SEASON)

    def _check_matching_flower(self, ctx: ScoringContext) -> bool:
        """A flower belonging to the winner's seat"""
        return self._has_seat_bonus(ctx, TileCategory.FLOWER)

    @staticmethod
    def _has_seat_bonus(ctx: ScoringContext, category: TileCategory) -> bool:
        if ctx.flags.seat_wind is None:
            return False
        return any(t.category == category and t.seat == ctx.flags.seat_wind for t in ctx.bonus)


_DEFAULT_SCORER = Scorer()


def score(
    combination: Union[Decomposition, SpecialHand],
    flags: Optional[ScoringFlags] = None,
) -> FrozenSet[ScoreTag]:
    """Patterns that apply to a decomposition or special hand"""
    return _DEFAULT_SCORER.score(combination, flags)

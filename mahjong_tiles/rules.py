"""
Rule Tables

Turn a set of score tags into a single total. Tables differ in how many
points each pattern is worth, which patterns suppress the patterns they
imply, and whether points add up or only the best pattern counts.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from .scoring import ScoreKind, ScoreTag


class Aggregation(IntEnum):
    """How tag points combine into a total"""
    SUM = 0      # Add every tag
    HIGHEST = 1  # Only the best tag counts


# Patterns that always imply others; the implied ones are not counted twice
IMPLIED_PATTERNS: Dict[ScoreKind, Tuple[ScoreKind, ...]] = {
    ScoreKind.THIRTEEN_ORPHANS: (ScoreKind.ALL_CONCEALED,),
    ScoreKind.MAJOR_FOUR_WINDS: (ScoreKind.ALL_TRIPLETS, ScoreKind.MINOR_FOUR_WINDS),
    ScoreKind.ALL_QUADS: (ScoreKind.ALL_TRIPLETS,),
}


@dataclass
class RuleTable:
    """
    Point values and combination policy for score tags.

    Attributes:
        name: Name used to select the table
        points: Points per pattern
        default_points: Points for patterns missing from `points`
        excludes: Patterns a pattern suppresses when both apply
        aggregation: SUM or HIGHEST
        limit: Cap on the total, if any
    """

    name: str = "Default"
    points: Dict[ScoreKind, int] = field(default_factory=dict)
    default_points: int = 0
    excludes: Dict[ScoreKind, Tuple[ScoreKind, ...]] = field(default_factory=dict)
    aggregation: Aggregation = Aggregation.SUM
    limit: Optional[int] = None

    def points_for(self, tag: ScoreTag) -> int:
        return self.points.get(tag.kind, self.default_points)

    def effective_tags(self, tags: Iterable[ScoreTag]) -> FrozenSet[ScoreTag]:
        """Drop tags suppressed by another tag in the set"""
        tags = frozenset(tags)
        excluded: Set[ScoreKind] = set()
        for tag in tags:
            excluded.update(self.excludes.get(tag.kind, ()))
        return frozenset(t for t in tags if t.kind not in excluded)

    def total(self, tags: Iterable[ScoreTag]) -> int:
        """Combine tags into a single total"""
        values = [self.points_for(t) for t in self.effective_tags(tags)]
        if not values:
            total = 0
        elif self.aggregation == Aggregation.HIGHEST:
            total = max(values)
        else:
            total = sum(values)
        if self.limit is not None:
            total = min(total, self.limit)
        return total

    def __repr__(self) -> str:
        return f"RuleTable({self.name})"


# One point per pattern, added up
FLAT_RULES = RuleTable(
    name="Flat",
    points={kind: 1 for kind in ScoreKind},
    excludes=IMPLIED_PATTERNS,
    aggregation=Aggregation.SUM,
)


# Limit hands over shape patterns over situational flags
TIERED_POINTS: Dict[ScoreKind, int] = {
    ScoreKind.THIRTEEN_ORPHANS: 4,
    ScoreKind.MAJOR_FOUR_WINDS: 4,
    ScoreKind.MAJOR_THREE_DRAGONS: 4,
    ScoreKind.ALL_QUADS: 4,
    ScoreKind.MINOR_FOUR_WINDS: 3,
    ScoreKind.MINOR_THREE_DRAGONS: 3,
    ScoreKind.PURE: 3,
    ScoreKind.ALL_TRIPLETS: 2,
    ScoreKind.ALL_SEQUENCES: 2,
    ScoreKind.MATCHING_SEASON: 1,
    ScoreKind.MATCHING_FLOWER: 1,
    ScoreKind.ALL_CONCEALED: 1,
    ScoreKind.SELF_DRAWN: 1,
    ScoreKind.LAST_TILE: 1,
    ScoreKind.ROBBING_THE_KONG: 1,
}


# Tiered points, best pattern only
HIGHEST_TAG_RULES = RuleTable(
    name="Highest",
    points=TIERED_POINTS,
    excludes=IMPLIED_PATTERNS,
    aggregation=Aggregation.HIGHEST,
)


RULE_TABLES = {table.name.lower(): table for table in (FLAT_RULES, HIGHEST_TAG_RULES)}


def get_rule_table(name: str) -> RuleTable:
    """Look up a preset table by name (case-insensitive)"""
    try:
        return RULE_TABLES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown rule table: {name} (known: {', '.join(RULE_TABLES)})") from None

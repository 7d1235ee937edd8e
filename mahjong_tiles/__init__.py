"""
Mahjong Hand Evaluation
Decomposes winning hands into melds and an eye, and scores them
"""

from .tiles import Tile, TileCategory, WindType, DragonType, FlowerType, SeasonType
from .grouping import TileGroup, group_by_category
from .hand import Meld, MeldType, QuadStatus, Eye, Hand, Decomposition
from .search import enumerate_decompositions, is_complete
from .special import SpecialHand, SpecialHandKind, detect_special_hand
from .scoring import Scorer, ScoreKind, ScoreTag, ScoringFlags, score
from .rules import RuleTable, Aggregation, FLAT_RULES, HIGHEST_TAG_RULES, get_rule_table
from .evaluator import HandEvaluator, EvaluationResult, find_highest_scoring_hand

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "TileCategory",
    "WindType",
    "DragonType",
    "FlowerType",
    "SeasonType",
    "TileGroup",
    "group_by_category",
    "Meld",
    "MeldType",
    "QuadStatus",
    "Eye",
    "Hand",
    "Decomposition",
    "enumerate_decompositions",
    "is_complete",
    "SpecialHand",
    "SpecialHandKind",
    "detect_special_hand",
    "Scorer",
    "ScoreKind",
    "ScoreTag",
    "ScoringFlags",
    "score",
    "RuleTable",
    "Aggregation",
    "FLAT_RULES",
    "HIGHEST_TAG_RULES",
    "get_rule_table",
    "HandEvaluator",
    "EvaluationResult",
    "find_highest_scoring_hand",
]

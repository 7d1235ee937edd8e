"""
Tests for the meld search and special hand detection
"""

import types
from collections import Counter

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_tiles.tiles import (
    tong, wan, tiao,
    EAST, SOUTH, WEST, NORTH, CENTRAL, PROSPERITY, BLANK, PLUM, SUMMER,
)
from mahjong_tiles.grouping import group_by_category
from mahjong_tiles.hand import Meld, MeldType, QuadStatus, Eye, Hand, Decomposition
from mahjong_tiles.search import MeldSearch, enumerate_decompositions, is_complete
from mahjong_tiles.special import SpecialHandKind, detect_special_hand


def scenario_a_tiles():
    return [
        tong(1), tong(2), tong(3),
        wan(4), wan(4), wan(4),
        tiao(5), tiao(6), tiao(7),
        EAST, EAST, EAST,
        CENTRAL, CENTRAL,
    ]


def thirteen_orphans_tiles():
    return [
        tiao(1), tiao(9), wan(1), wan(9), tong(1), tong(9),
        EAST, SOUTH, WEST, NORTH, CENTRAL, PROSPERITY, BLANK,
        EAST,
    ]


def ambiguous_tiles():
    """111 222 333 Tong reads as three triplets or three sequences"""
    return [tong(v) for v in (1, 1, 1, 2, 2, 2, 3, 3, 3)] + [wan(4), wan(5), wan(6), tiao(9), tiao(9)]


def assert_valid_decomposition(decomposition: Decomposition, hand: Hand):
    """Check shapes and that every tile is used exactly once"""
    assert len(decomposition.melds) == 4
    assert isinstance(decomposition.eye, Eye)
    for meld in decomposition.melds:
        if meld.meld_type == MeldType.SEQUENCE:
            first = meld.tiles[0]
            assert first.is_number
            assert [t.category for t in meld.tiles] == [first.category] * 3
            assert [t.value for t in meld.tiles] == [first.value, first.value + 1, first.value + 2]
        elif meld.meld_type == MeldType.TRIPLET:
            assert len(set(meld.tiles)) == 1 and len(meld.tiles) == 3
        else:
            assert len(set(meld.tiles)) == 1 and len(meld.tiles) == 4
    assert decomposition.counter() == Counter(hand.all_tiles())


class TestMeldSearch:
    """Test enumeration of decompositions"""

    def test_scenario_a_single_decomposition(self):
        """Mixed hand has exactly one reading"""
        hand = Hand.from_tiles(scenario_a_tiles())
        decompositions = list(enumerate_decompositions(hand))

        assert decompositions == [
            Decomposition(
                melds=(
                    Meld.sequence(tong(1)),
                    Meld.triplet(wan(4)),
                    Meld.sequence(tiao(5)),
                    Meld.triplet(EAST),
                ),
                eye=Eye(CENTRAL),
            )
        ]

    def test_input_order_does_not_matter(self):
        tiles = scenario_a_tiles()
        shuffled = tiles[7:] + tiles[:7]
        assert list(enumerate_decompositions(Hand.from_tiles(tiles))) == \
            list(enumerate_decompositions(Hand.from_tiles(shuffled)))

    def test_scenario_c_thirteen_tiles(self):
        """A waiting hand is not complete"""
        hand = Hand.from_tiles(scenario_a_tiles()[:-1])
        assert list(enumerate_decompositions(hand)) == []
        assert not is_complete(hand)

    def test_too_many_tiles(self):
        hand = Hand.from_tiles(scenario_a_tiles() + [tong(5)])
        assert list(enumerate_decompositions(hand)) == []

    def test_unresolvable_tiles(self):
        """Right count, but no valid reading"""
        tiles = scenario_a_tiles()
        tiles[0] = tong(9)  # 9 2 3 Tong
        hand = Hand.from_tiles(tiles)
        assert list(enumerate_decompositions(hand)) == []

    def test_ambiguous_hand_order(self):
        """Triplets are tried before sequences"""
        hand = Hand.from_tiles(ambiguous_tiles())
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 2
        assert [m.meld_type for m in decompositions[0].melds] == [MeldType.TRIPLET] * 3 + [MeldType.SEQUENCE]
        assert [m.meld_type for m in decompositions[1].melds] == [MeldType.SEQUENCE] * 4
        for d in decompositions:
            assert d.eye == Eye(tiao(9))
            assert_valid_decomposition(d, hand)

    def test_eye_taken_from_triplet_run(self):
        """1112 3 reads as eye 11 plus sequence 123"""
        tiles = [tong(1), tong(1), tong(1), tong(2), tong(3)] + \
            [wan(5)] * 3 + [EAST] * 3 + [CENTRAL] * 3
        hand = Hand.from_tiles(tiles)
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 1
        assert decompositions[0].eye == Eye(tong(1))
        assert decompositions[0].melds[0] == Meld.sequence(tong(1))

    def test_single_suit_several_readings(self):
        """Runs of triplets give several readings, always in the same order"""
        tiles = [tong(v) for v in (1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5)]
        hand = Hand.from_tiles(tiles)
        decompositions = list(enumerate_decompositions(hand))

        assert [(d.melds, d.eye) for d in decompositions] == [
            ((Meld.triplet(tong(1)), Meld.sequence(tong(2)), Meld.sequence(tong(3)), Meld.sequence(tong(3))),
             Eye(tong(2))),
            ((Meld.triplet(tong(1)), Meld.triplet(tong(2)), Meld.triplet(tong(3)), Meld.triplet(tong(4))),
             Eye(tong(5))),
            ((Meld.triplet(tong(1)), Meld.sequence(tong(2)), Meld.sequence(tong(2)), Meld.sequence(tong(2))),
             Eye(tong(5))),
            ((Meld.sequence(tong(1)), Meld.sequence(tong(1)), Meld.sequence(tong(1)), Meld.triplet(tong(4))),
             Eye(tong(5))),
        ]
        for d in decompositions:
            assert_valid_decomposition(d, hand)
        assert list(enumerate_decompositions(Hand.from_tiles(tiles[::-1]))) == decompositions

    def test_nine_gates(self):
        """Nine gates plus 5 has a single reading"""
        tiles = [tong(v) for v in (1, 1, 1, 2, 3, 4, 5, 6, 7, 8, 9, 9, 9, 5)]
        hand = Hand.from_tiles(tiles)
        decompositions = list(enumerate_decompositions(hand))

        assert decompositions == [
            Decomposition(
                melds=(
                    Meld.triplet(tong(1)),
                    Meld.sequence(tong(2)),
                    Meld.sequence(tong(6)),
                    Meld.triplet(tong(9)),
                ),
                eye=Eye(tong(5)),
            )
        ]

    def test_completeness_property(self):
        """Every decomposition uses each tile exactly once"""
        hands = [
            Hand.from_tiles(scenario_a_tiles()),
            Hand.from_tiles(ambiguous_tiles()),
            Hand.from_tiles([tong(v) for v in (1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5)]),
            Hand.from_tiles([wan(v) for v in (2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8)]),
        ]
        for hand in hands:
            decompositions = list(enumerate_decompositions(hand))
            assert decompositions
            for d in decompositions:
                assert_valid_decomposition(d, hand)

            # No reading is produced twice, whatever order its melds are in
            readings = [(frozenset(Counter(d.melds).items()), d.eye) for d in decompositions]
            assert len(set(readings)) == len(readings)

    def test_idempotent(self):
        """Two runs over the same hand give the same sequence"""
        hand = Hand.from_tiles([tong(v) for v in (1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5)])
        first = list(enumerate_decompositions(hand))
        second = list(enumerate_decompositions(hand))
        assert len(first) > 1
        assert first == second

    def test_lazy(self):
        """Results are produced on demand and can be abandoned"""
        hand = Hand.from_tiles(ambiguous_tiles())
        decompositions = enumerate_decompositions(hand)

        assert isinstance(decompositions, types.GeneratorType)
        first = next(decompositions)
        assert first.melds[0] == Meld.triplet(tong(1))
        decompositions.close()

    def test_single_pass(self):
        hand = Hand.from_tiles(scenario_a_tiles())
        decompositions = enumerate_decompositions(hand)
        assert len(list(decompositions)) == 1
        assert list(decompositions) == []

    def test_open_melds_come_first(self):
        """Declared melds lead, in declaration order"""
        hand = Hand.from_tiles(
            [tiao(5), tiao(6), tiao(7), CENTRAL, CENTRAL],
            [Meld.triplet(EAST), Meld.sequence(tong(1)), Meld.triplet(wan(4))],
        )
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 1
        assert decompositions[0].melds == (
            Meld.triplet(EAST),
            Meld.sequence(tong(1)),
            Meld.triplet(wan(4)),
            Meld.sequence(tiao(5)),
        )
        assert_valid_decomposition(decompositions[0], hand)

    def test_declared_quads(self):
        """Declared quads count as one meld each"""
        hand = Hand.from_tiles(
            [NORTH, NORTH, NORTH, CENTRAL, CENTRAL],
            [Meld.quad(EAST), Meld.quad(SOUTH), Meld.quad(WEST, QuadStatus.CLOSED)],
        )
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 1
        assert decompositions[0].melds[-1] == Meld.triplet(NORTH)
        assert_valid_decomposition(decompositions[0], hand)

    def test_required_closed_quad(self):
        """An extra closed tile must be read as a closed quad"""
        hand = Hand.from_tiles(
            [NORTH, NORTH, NORTH, NORTH, CENTRAL, CENTRAL],
            [Meld.quad(EAST), Meld.quad(SOUTH), Meld.quad(WEST)],
        )
        search = MeldSearch(hand)
        assert search.quads_required == 1

        decompositions = list(enumerate_decompositions(hand))
        assert len(decompositions) == 1
        assert decompositions[0].melds[-1] == Meld.quad(NORTH, QuadStatus.CLOSED)
        assert_valid_decomposition(decompositions[0], hand)

    def test_four_copies_without_quad(self):
        """Four copies split between a triplet and a sequence"""
        tiles = [tong(1)] * 4 + [tong(2), tong(3)] + [wan(5)] * 3 + [EAST] * 3 + [CENTRAL] * 2
        hand = Hand.from_tiles(tiles)
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 1
        assert decompositions[0].melds[:2] == (Meld.triplet(tong(1)), Meld.sequence(tong(1)))

    def test_bonus_tiles_set_aside(self):
        """Flowers and seasons do not take part in melds"""
        hand = Hand.from_tiles(scenario_a_tiles() + [PLUM, SUMMER])
        decompositions = list(enumerate_decompositions(hand))

        assert len(decompositions) == 1
        assert decompositions[0].bonus == (PLUM, SUMMER)
        assert_valid_decomposition(decompositions[0], hand)

    def test_more_than_four_copies(self):
        """A set holds four of each tile"""
        hand = Hand.from_tiles([EAST] * 6 + [SOUTH] * 6 + [CENTRAL] * 2)
        search = MeldSearch(hand)

        assert search.excess_tiles == [EAST, SOUTH]
        assert not search.is_well_formed
        assert list(enumerate_decompositions(hand)) == []
        assert not is_complete(hand)

    def test_declared_quad_counts_toward_copies(self):
        """Copies in declared melds count against the same four"""
        hand = Hand.from_tiles(
            [EAST, EAST, EAST, tong(1), tong(2), tong(3), wan(4), wan(5), wan(6), CENTRAL, CENTRAL],
            [Meld.quad(EAST)],
        )
        assert MeldSearch(hand).excess_tiles == [EAST]
        assert list(enumerate_decompositions(hand)) == []

    def test_duplicate_bonus_tile(self):
        """Each flower and season exists once"""
        hand = Hand.from_tiles(scenario_a_tiles() + [PLUM, PLUM])
        assert MeldSearch(hand).excess_tiles == [PLUM]
        assert list(enumerate_decompositions(hand)) == []


class TestSpecialHands:
    """Test special hand detection"""

    def test_scenario_b_thirteen_orphans(self):
        special = detect_special_hand(thirteen_orphans_tiles())

        assert special is not None
        assert special.kind == SpecialHandKind.THIRTEEN_ORPHANS
        assert special.eye == Eye(EAST)

    def test_accepts_tile_group(self):
        special = detect_special_hand(group_by_category(thirteen_orphans_tiles()))
        assert special is not None

    def test_any_member_can_pair(self):
        tiles = thirteen_orphans_tiles()[:-1] + [tong(9)]
        special = detect_special_hand(tiles)
        assert special is not None
        assert special.eye == Eye(tong(9))

    def test_missing_member(self):
        tiles = thirteen_orphans_tiles()
        # 1 Tiao three times, East missing
        tiles[-1] = tiles[0]
        tiles[6] = tiao(1)
        assert detect_special_hand(tiles) is None

    def test_non_member_tile(self):
        tiles = thirteen_orphans_tiles()
        tiles[-1] = tong(5)
        assert detect_special_hand(tiles) is None

    def test_thirteen_tiles(self):
        assert detect_special_hand(thirteen_orphans_tiles()[:-1]) is None

    def test_bonus_tiles_ignored(self):
        special = detect_special_hand(thirteen_orphans_tiles() + [PLUM])
        assert special is not None
        assert special.bonus == (PLUM,)

    def test_standard_hand(self):
        assert detect_special_hand(scenario_a_tiles()) is None

    def test_meld_search_finds_nothing(self):
        """Thirteen orphans has no four-meld reading"""
        assert list(enumerate_decompositions(Hand.from_tiles(thirteen_orphans_tiles()))) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Meld Search

Backtracking search that reads a hand's closed tiles as melds plus one eye.

The smallest remaining tile (by Tile.tile_index, so Tong, Wan, Tiao, then
winds and dragons) must be used by one of three moves, always tried in the
same order:

1. Eye      - two copies, if no eye has been taken yet
2. Triplet  - three copies (or four as a closed quad, when one is required)
3. Sequence - the tile and the next two of its suit

Moves applied to the same tile never go back to an earlier move in that
order, so each decomposition is reached by exactly one path.

Every move removes tiles, so the search always terminates. Decompositions
are yielded as they are found; callers may stop pulling at any point.
"""

import logging
from collections import Counter
from enum import IntEnum
from typing import Iterator, List, Optional
import numpy as np

from .hand import Decomposition, Eye, Hand, Meld, QuadStatus, HAND_SIZE
from .tiles import Tile, NUM_PLAYABLE_TYPES

logger = logging.getLogger(__name__)

# Copies of each tile in a full set
COPIES_PER_TILE = 4
COPIES_PER_BONUS_TILE = 1


class Move(IntEnum):
    """Ways to use the smallest remaining tile, in the order they are tried"""
    EYE = 0
    TRIPLET = 1
    QUAD = 2
    SEQUENCE = 3


def _copies_in_set(tile: Tile) -> int:
    return COPIES_PER_BONUS_TILE if tile.is_bonus else COPIES_PER_TILE


class MeldSearch:
    """
    Single-pass search over one hand.

    Holds the count array and the melds resolved so far; both are modified
    in place while descending and restored while backtracking.
    """

    def __init__(self, hand: Hand):
        self.hand = hand
        self.counts = hand.closed.to_count_array()[:NUM_PLAYABLE_TYPES].astype(np.int16)
        self.resolved: List[Meld] = []

        # Closed tiles beyond the usual 3 per meld + 2 must come from quads
        closed_count = int(self.counts.sum())
        self.melds_needed = hand.melds_needed
        self.quads_required = closed_count - (HAND_SIZE - 3 * len(hand.open_melds))

        # Declared melds draw from the same set as the closed tiles
        self.excess_tiles = sorted(
            (tile for tile, n in Counter(hand.all_tiles()).items() if n > _copies_in_set(tile)),
            key=lambda t: t.tile_index,
        )

    @property
    def is_well_formed(self) -> bool:
        """Whether the tiles allow any decomposition at all"""
        return (
            self.melds_needed >= 0
            and 0 <= self.quads_required <= self.melds_needed
            and not self.excess_tiles
        )

    def run(self) -> Iterator[Decomposition]:
        if self.excess_tiles:
            logger.debug(
                f"No decomposition possible for {self.hand}: "
                f"too many copies of {', '.join(str(t) for t in self.excess_tiles)}"
            )
            return
        if not self.is_well_formed:
            logger.debug(
                f"No decomposition possible for {self.hand}: "
                f"{self.melds_needed} melds needed, {self.quads_required} quads required"
            )
            return
        yield from self._search(None, self.melds_needed, self.quads_required, -1, Move.EYE)

    def _first_remaining(self) -> Optional[int]:
        remaining = np.flatnonzero(self.counts)
        if len(remaining) == 0:
            return None
        return int(remaining[0])

    def _search(
        self,
        eye: Optional[Eye],
        melds_left: int,
        quads_left: int,
        last_idx: int,
        last_move: Move,
    ) -> Iterator[Decomposition]:
        idx = self._first_remaining()
        if idx is None:
            if eye is not None and melds_left == 0 and quads_left == 0:
                yield Decomposition(
                    melds=self.hand.open_melds + tuple(self.resolved),
                    eye=eye,
                    bonus=tuple(self.hand.bonus_tiles),
                )
            return

        counts = self.counts
        tile = Tile.from_index(idx)
        floor = last_move if idx == last_idx else Move.EYE

        # 1. Eye
        if floor <= Move.EYE and eye is None and counts[idx] >= 2:
            counts[idx] -= 2
            yield from self._search(Eye(tile), melds_left, quads_left, idx, Move.EYE)
            counts[idx] += 2

        if melds_left == 0:
            return

        # 2. Triplet, or a closed quad while one is still required
        if floor <= Move.TRIPLET and counts[idx] >= 3:
            counts[idx] -= 3
            self.resolved.append(Meld.triplet(tile))
            yield from self._search(eye, melds_left - 1, quads_left, idx, Move.TRIPLET)
            self.resolved.pop()
            counts[idx] += 3

        if floor <= Move.QUAD and quads_left > 0 and counts[idx] >= 4:
            counts[idx] -= 4
            self.resolved.append(Meld.quad(tile, QuadStatus.CLOSED))
            yield from self._search(eye, melds_left - 1, quads_left - 1, idx, Move.QUAD)
            self.resolved.pop()
            counts[idx] += 4

        # 3. Sequence (numbered suits only)
        if tile.is_number and tile.value <= 7 and counts[idx + 1] > 0 and counts[idx + 2] > 0:
            counts[idx:idx + 3] -= 1
            self.resolved.append(Meld.sequence(tile))
            yield from self._search(eye, melds_left - 1, quads_left, idx, Move.SEQUENCE)
            self.resolved.pop()
            counts[idx:idx + 3] += 1


def enumerate_decompositions(hand: Hand) -> Iterator[Decomposition]:
    """
    Lazily yield every decomposition of a hand into four melds and an eye.

    The order is deterministic. The returned iterator is single-pass; call
    again for a fresh one. Hands with the wrong tile count, more copies of a
    tile than a set holds, or tiles that cannot be resolved, yield nothing.
    """
    return MeldSearch(hand).run()


def is_complete(hand: Hand) -> bool:
    """Whether the hand has at least one decomposition, stopping at the first"""
    return next(enumerate_decompositions(hand), None) is not None

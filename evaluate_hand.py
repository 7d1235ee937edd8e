#!/usr/bin/env python3
"""
Evaluate a Mahjong hand from the command line.

Usage:
    python evaluate_hand.py 1筒 2筒 3筒 4万 4万 4万 5条 6条 7条 东 东 东 中 中
    python evaluate_hand.py TONG1 TONG1 TONG9 TONG9 ... --self-drawn --seat-wind east
    python evaluate_hand.py 2万 2万 3筒 3筒 3筒 --open-meld "4万 4万 4万" \
        --open-meld "5条 6条 7条" --open-meld "东 东 东 东" --rules highest -v
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent))

from mahjong_tiles.tiles import Tile, WindType
from mahjong_tiles.hand import Hand, Meld, MeldType, QuadStatus
from mahjong_tiles.rules import get_rule_table, RULE_TABLES
from mahjong_tiles.scoring import ScoringFlags
from mahjong_tiles.evaluator import HandEvaluator


def parse_tiles(text: str) -> List[Tile]:
    """Parse whitespace or comma separated tile names."""
    return [Tile.from_string(s) for s in text.replace(",", " ").split()]


def parse_meld(text: str, closed_quad: bool = False) -> Meld:
    """Parse a declared meld, inferring its type from its tiles."""
    tiles = parse_tiles(text)
    if len(tiles) == 4:
        status = QuadStatus.CLOSED if closed_quad else QuadStatus.OPEN
        return Meld(MeldType.QUAD, tiles, status)
    if len(tiles) == 3 and tiles[0] == tiles[1] == tiles[2]:
        return Meld(MeldType.TRIPLET, tiles)
    return Meld(MeldType.SEQUENCE, tiles)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a Mahjong hand")
    parser.add_argument("tiles", nargs="+",
                        help="Closed tiles, e.g. 1筒 9万 东 中 or TONG1 WAN9 EAST CENTRAL")
    parser.add_argument("--open-meld", action="append", default=[],
                        help="A declared meld, e.g. \"4万 4万 4万\" (repeatable)")
    parser.add_argument("--closed-quad", action="append", default=[],
                        help="A declared closed quad, e.g. \"东 东 东 东\" (repeatable)")
    parser.add_argument("--rules", type=str, default="flat", choices=sorted(RULE_TABLES),
                        help="Rule table used to total the patterns")
    parser.add_argument("--self-drawn", action="store_true",
                        help="Winning tile was self-drawn")
    parser.add_argument("--won-on-discard", action="store_true",
                        help="Winning tile was another player's discard")
    parser.add_argument("--robbed-kong", action="store_true",
                        help="Won by robbing a kong")
    parser.add_argument("--last-tile", action="store_true",
                        help="Won on the last tile of the wall")
    parser.add_argument("--seat-wind", type=str, default=None,
                        choices=[w.name.lower() for w in WindType],
                        help="Seat wind, for matching flowers and seasons")
    parser.add_argument("--all", action="store_true",
                        help="Show every decomposition, not only the best")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log search progress")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        closed = parse_tiles(" ".join(args.tiles))
        melds = [parse_meld(m) for m in args.open_meld]
        melds += [parse_meld(m, closed_quad=True) for m in args.closed_quad]
        hand = Hand.from_tiles(closed, melds)
        flags = ScoringFlags.for_hand(
            hand,
            self_drawn=args.self_drawn,
            won_on_discard=args.won_on_discard,
            robbed_kong=args.robbed_kong,
            last_tile=args.last_tile,
            seat_wind=WindType[args.seat_wind.upper()] if args.seat_wind else None,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    evaluator = HandEvaluator(get_rule_table(args.rules))

    print(f"Hand:  {hand}")
    print(f"Rules: {evaluator.rules.name}")

    if args.all:
        results = evaluator.rank(hand, flags)
    else:
        best = evaluator.evaluate(hand, flags)
        results = [best] if best is not None else []

    if not results:
        print("No winning hand")
        return 1

    for result in results:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

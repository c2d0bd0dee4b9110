from __future__ import annotations

import argparse
import sys
from time import perf_counter
from typing import List, Optional

from ..engine.board import IllegalMoveError
from ..engine.notation import PositionFormatError, parse_moves
from ..engine.perft import perft, play_moves


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="reversi-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--position", type=str, default=None, help="move sequence like d3c3b3 or 'd3 c3 pass'")
    args = p.parse_args(argv)

    try:
        b = play_moves(None, parse_moves(args.position) if args.position else [])
    except (PositionFormatError, IllegalMoveError) as e:
        print(f"reversi-perft: {e}", file=sys.stderr)
        return 1
    t0 = perf_counter()
    n = perft(b, args.depth)
    dt = perf_counter() - t0
    print(f"perft(d={args.depth})={n} in {dt:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())

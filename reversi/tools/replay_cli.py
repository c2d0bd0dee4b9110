from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..engine.board import InvariantViolation, count_pieces, is_game_over, winner
from ..game.play import render_board
from ..game.record import RESULT_TAGS, load_game, replay_game
from ..logging_setup import setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="reversi-replay", description="Replay a saved game record")
    p.add_argument("record", help="Path to a record written by reversi-play")
    p.add_argument("--strict", action="store_true", help="Check board/hash invariants after every move")
    p.add_argument("--log-file", default=None)
    args = p.parse_args(argv)

    setup_logging(overwrite=False, level=logging.INFO, log_path=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        record = load_game(args.record)
        board = replay_game(record, strict=args.strict)
    except (OSError, ValueError, InvariantViolation) as e:
        logger.error("Cannot replay %s: %s", args.record, e)
        return 1

    print(render_board(board))
    print(f"hash={board.hash:#018x} moves={len(record.moves)}")
    if is_game_over(board):
        b, w = count_pieces(board)
        final = RESULT_TAGS[winner(board)]
        print(f"result={final} ({b}-{w})")
        if record.result is not None and record.result_tag != final:
            logger.warning("Record says %s but replay ends %s", record.result_tag, final)
    else:
        print("result=UNFINISHED")
    return 0


if __name__ == "__main__":
    sys.exit(main())

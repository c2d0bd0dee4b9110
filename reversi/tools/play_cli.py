"""Play a game between two players from the terminal"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..config import ConfigError, load_config
from ..engine.board import InvariantViolation
from ..engine.players import PLAYER_KINDS, make_player
from ..game.play import play_game
from ..logging_setup import log_event, setup_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="reversi-play", description="Play a game of Reversi")
    p.add_argument("--black", choices=PLAYER_KINDS, help="Black player (default from config)")
    p.add_argument("--white", choices=PLAYER_KINDS, help="White player (default from config)")
    p.add_argument("--depth", type=int, help="Search depth for minimax players")
    p.add_argument("--time-ms", type=int, help="Per-move time budget for minimax players (0 = none)")
    p.add_argument("--seed", type=int, help="Seed for random players")
    p.add_argument("--record", help="Write the game record to this path")
    p.add_argument("--quiet", action="store_true", help="Do not print the board")
    p.add_argument("--no-hints", action="store_true", help="Do not mark legal moves on the board")
    p.add_argument("--check", action="store_true", help="Verify board/hash invariants after every move")
    p.add_argument("--config", help="Path to a config.toml")
    p.add_argument("--log-file", help="Log file path (default from config)")
    p.add_argument("--log-level", help="Log level (default from config)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"reversi-play: {e}", file=sys.stderr)
        return 1

    log_cfg = cfg["logging"]
    setup_logging(
        overwrite=bool(log_cfg.get("overwrite", True)),
        level=args.log_level or log_cfg.get("level", "INFO"),
        log_path=args.log_file or log_cfg.get("file") or None,
    )
    logger = logging.getLogger(__name__)

    players_cfg = cfg["players"]
    game_cfg = cfg["game"]
    depth = args.depth if args.depth is not None else int(players_cfg.get("minimax_depth", 3))
    time_ms = args.time_ms if args.time_ms is not None else int(players_cfg.get("minimax_time_ms", 0))
    seed = args.seed if args.seed is not None else int(players_cfg.get("seed", -1))
    record_path = args.record or game_cfg.get("record_path") or None

    try:
        black = make_player(args.black or players_cfg.get("black", "heuristic"),
                            seed=None if seed < 0 else seed, depth=depth, time_ms=time_ms or None)
        white = make_player(args.white or players_cfg.get("white", "minimax"),
                            seed=None if seed < 0 else seed + 1, depth=depth, time_ms=time_ms or None)
        result = play_game(
            black,
            white,
            verbose=not args.quiet,
            record_path=record_path,
            check=args.check or bool(game_cfg.get("check_invariants", False)),
            max_plies=int(game_cfg.get("max_plies", 200)),
            hints=not args.no_hints and bool(game_cfg.get("hints", True)),
        )
    except KeyboardInterrupt:
        logger.info("Game interrupted by user")
        return 1
    except (ValueError, InvariantViolation) as e:
        logger.exception("Error playing game: %s", e)
        return 1

    log_event(
        "play",
        "game_over",
        black=black.name,
        white=white.name,
        winner=result.record.result_tag,
        black_count=result.black_count,
        white_count=result.white_count,
        plies=len(result.record.moves),
    )
    if args.quiet:
        print(f"{result.record.result_tag} {result.black_count}-{result.white_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

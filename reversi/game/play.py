from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from ..engine.board import (
    Board,
    Color,
    IllegalMoveError,
    check_invariants,
    count_pieces,
    is_game_over,
    make_move,
    pass_turn,
    start_board,
    valid_moves,
    winner,
)
from ..engine.notation import FILES, Position
from ..engine.players import Player
from .record import GameRecord, save_game

logger = logging.getLogger(__name__)

SYMBOLS = {Color.BLACK: "●", Color.WHITE: "○"}


def render_board(board: Board, hints: Iterable[Position] = ()) -> str:
    """Text board with columns a-h, rows 1-8; hints are marked '*'."""
    hint_squares = {p.square for p in hints}
    lines = ["  " + " ".join(FILES)]
    for r in range(8):
        cells = []
        for c in range(8):
            sq = r * 8 + c
            if board.black >> sq & 1:
                cells.append(SYMBOLS[Color.BLACK])
            elif board.white >> sq & 1:
                cells.append(SYMBOLS[Color.WHITE])
            elif sq in hint_squares:
                cells.append("*")
            else:
                cells.append("·")
        lines.append(f"{r + 1} " + " ".join(cells))
    black_count, white_count = count_pieces(board)
    lines.append(f"Black ({SYMBOLS[Color.BLACK]}): {black_count}  White ({SYMBOLS[Color.WHITE]}): {white_count}")
    lines.append(f"Current player: {board.current_player} ({SYMBOLS[board.current_player]})")
    return "\n".join(lines)


def display_board(board: Board, hints: Iterable[Position] = (), output_fn: Callable[[str], None] = print) -> None:
    output_fn(render_board(board, hints))


@dataclass
class GameResult:
    winner: Color
    black_count: int
    white_count: int
    record: GameRecord
    board: Board


def play_game(
    black: Player,
    white: Player,
    verbose: bool = False,
    record_path: Optional[Union[str, pathlib.Path]] = None,
    check: bool = False,
    max_plies: int = 200,
    hints: bool = False,
    output_fn: Callable[[str], None] = print,
) -> GameResult:
    """Alternate the two players until the game is over.

    A player returning None passes. A player returning an illegal move is a
    bug in that player and raises IllegalMoveError.
    """
    board = start_board()
    players = {Color.BLACK: black, Color.WHITE: white}
    record = GameRecord()
    logger.info("Starting game: %s (black) vs %s (white)", black.name, white.name)
    if verbose:
        display_board(board, output_fn=output_fn)

    plies = 0
    while not is_game_over(board):
        if plies >= max_plies:
            raise RuntimeError(f"game exceeded {max_plies} plies without finishing")
        color = board.current_player
        current = players[color]
        move = current.choose_move(board)
        if move is None:
            if valid_moves(board):
                logger.warning("%s passed with legal moves available", current.name)
            logger.debug("%s passes", color)
            pass_turn(board)
        else:
            if not make_move(board, move):
                raise IllegalMoveError(f"{current.name} ({color}) chose illegal move {move}")
            logger.debug("%s plays %s", color, move)
        record.append(move)
        plies += 1
        if check:
            check_invariants(board)
        if verbose:
            output_fn("=" * 40)
            output_fn(f"{color} {'passes' if move is None else f'plays at {move}'}")
            display_board(board, valid_moves(board) if hints else (), output_fn=output_fn)

    result = winner(board)
    record.result = result
    black_count, white_count = count_pieces(board)
    logger.info("Game over after %d plies: %s (black %d, white %d)", plies, record.result_tag, black_count, white_count)
    if verbose:
        output_fn("=" * 40)
        output_fn("Game Over!")
        output_fn("It's a draw!" if result == Color.EMPTY else f"{result} wins!")
        output_fn(f"Final score - Black: {black_count}, White: {white_count}")
    if record_path is not None:
        save_game(record, record_path)
    return GameResult(result, black_count, white_count, record, board)

from __future__ import annotations

from typing import Iterable, Optional, Union

from .bitboard import iter_bits
from .board import Board, IllegalMoveError, copy_on_move, copy_board, is_game_over, legal_moves_mask, make_move, pass_turn, start_board
from .notation import PASS_TOKEN, Position


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes `depth` plies below `board`.

    A forced pass is one ply; a finished game is a single leaf.
    """
    if depth == 0 or is_game_over(board):
        return 1
    mask = legal_moves_mask(board)
    if mask == 0:
        return perft(copy_on_move(board, None), depth - 1)
    total = 0
    for sq in iter_bits(mask):
        total += perft(copy_on_move(board, Position.from_square(sq)), depth - 1)
    return total


def play_moves(board: Optional[Board], moves: Iterable[Union[str, Position, None]]) -> Board:
    """Apply a move sequence to a copy of `board` (or the start position)."""
    b = start_board() if board is None else copy_board(board)
    for mv in moves:
        if mv is None or mv == PASS_TOKEN:
            pass_turn(b)
        elif not make_move(b, mv):
            raise IllegalMoveError(f"illegal move: {mv}")
    return b

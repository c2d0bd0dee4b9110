"""Bitboard Reversi/Othello rules engine with incremental Zobrist hashing"""

from .engine.board import (
    DRAW,
    Board,
    Color,
    IllegalMoveError,
    InvariantViolation,
    check_invariants,
    copy_on_move,
    count_pieces,
    get_piece,
    is_game_over,
    is_valid_move,
    make_move,
    new_game,
    next_state,
    opponent,
    pass_turn,
    start_board,
    valid_moves,
    winner,
)
from .engine.notation import PASS_TOKEN, Position, PositionFormatError, position_to_string
from .engine.zobrist import compute_full_hash, update_hash

__version__ = "0.1.0"

__all__ = [
    'DRAW',
    'Board',
    'Color',
    'IllegalMoveError',
    'InvariantViolation',
    'PASS_TOKEN',
    'Position',
    'PositionFormatError',
    'check_invariants',
    'compute_full_hash',
    'copy_on_move',
    'count_pieces',
    'get_piece',
    'is_game_over',
    'is_valid_move',
    'make_move',
    'new_game',
    'next_state',
    'opponent',
    'pass_turn',
    'position_to_string',
    'start_board',
    'update_hash',
    'valid_moves',
    'winner',
]

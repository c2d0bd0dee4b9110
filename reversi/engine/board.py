from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from .bitboard import FULL, flips_for_move, format_bitboard, iter_bits, legal_moves, popcount, square
from .notation import PASS_TOKEN, Position, coerce_position
from .zobrist import compute_full_hash, zobrist_square


class Color(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def __str__(self) -> str:
        return self.name.capitalize()


# winner() reports a drawn game as EMPTY
DRAW = Color.EMPTY


class IllegalMoveError(ValueError):
    """Raised by layers that must not silently ignore an illegal move (replay, play loop)."""


class InvariantViolation(AssertionError):
    """Board masks and hash disagree. Always a bug, never a user error."""


def opponent(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


def is_valid_position(row: object, col: object) -> bool:
    return (
        isinstance(row, int) and isinstance(col, int)
        and not isinstance(row, bool) and not isinstance(col, bool)
        and 1 <= row <= 8 and 1 <= col <= 8
    )


@dataclass
class Board:
    black: int
    white: int
    current_player: Color
    pass_count: int
    hash: int

    def masks_for(self, player: Color) -> Tuple[int, int]:
        """(own, opponent) masks from `player`'s point of view."""
        if player == Color.BLACK:
            return self.black, self.white
        return self.white, self.black

    @property
    def occupied(self) -> int:
        return self.black | self.white

    @property
    def empty(self) -> int:
        return ~(self.black | self.white) & FULL


def start_board() -> Board:
    # d4/e5 white, e4/d5 black
    black = (1 << square(4, 5)) | (1 << square(5, 4))
    white = (1 << square(4, 4)) | (1 << square(5, 5))
    return Board(black, white, Color.BLACK, 0, compute_full_hash(black, white))


new_game = start_board


def copy_board(board: Board) -> Board:
    # Every field is an immutable value, so a field-wise copy shares nothing mutable.
    return replace(board)


def full_hash(board: Board) -> int:
    return compute_full_hash(board.black, board.white)


def check_invariants(board: Board) -> None:
    if board.black & board.white:
        raise InvariantViolation("black and white overlap:\n" + format_bitboard(board.black & board.white))
    if board.black > FULL or board.white > FULL or board.black < 0 or board.white < 0:
        raise InvariantViolation("mask outside 64 bits")
    expected = full_hash(board)
    if board.hash != expected:
        raise InvariantViolation(f"hash {board.hash:#018x} != recomputed {expected:#018x}")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def legal_moves_mask(board: Board, player: Optional[Color] = None) -> int:
    me, opp = board.masks_for(board.current_player if player is None else player)
    return legal_moves(me, opp)


def valid_moves(board: Board, player: Optional[Color] = None) -> List[Position]:
    return [Position.from_square(sq) for sq in iter_bits(legal_moves_mask(board, player))]


def is_valid_move(board: Board, row: int, col: int, player: Optional[Color] = None) -> bool:
    if not is_valid_position(row, col):
        return False
    return bool(legal_moves_mask(board, player) >> square(row, col) & 1)


def get_piece(board: Board, row: int, col: int) -> Color:
    pos = Position(row, col)
    mask = 1 << pos.square
    if board.black & mask:
        return Color.BLACK
    if board.white & mask:
        return Color.WHITE
    return Color.EMPTY


def count_pieces(board: Board) -> Tuple[int, int]:
    return popcount(board.black), popcount(board.white)


def is_game_over(board: Board) -> bool:
    if board.pass_count >= 2:
        return True
    if board.occupied == FULL:
        return True
    # Neither side can move: over now, without waiting for two explicit passes
    return not legal_moves(board.black, board.white) and not legal_moves(board.white, board.black)


def winner(board: Board) -> Color:
    black_count, white_count = count_pieces(board)
    if black_count > white_count:
        return Color.BLACK
    if white_count > black_count:
        return Color.WHITE
    return DRAW


# ---------------------------------------------------------------------------
# Mutation
# ---------------------------------------------------------------------------

MoveArg = Union[int, Position, str]


def _place(board: Board, sq: int) -> bool:
    color = board.current_player
    other = opponent(color)
    me, opp = board.masks_for(color)
    move = 1 << sq
    if not legal_moves(me, opp) & move:
        return False
    flips = flips_for_move(me, opp, move)

    # Incremental Zobrist update: new disc in, each flipped disc swaps color
    h = board.hash ^ zobrist_square(sq, color)
    for f in iter_bits(flips):
        h ^= zobrist_square(f, other) ^ zobrist_square(f, color)

    me |= move | flips
    opp &= ~flips & FULL
    if color == Color.BLACK:
        board.black, board.white = me, opp
    else:
        board.white, board.black = me, opp
    board.hash = h
    board.pass_count = 0
    board.current_player = other
    return True


def make_move(board: Board, row: MoveArg, col: Optional[int] = None) -> bool:
    """Play the side to move at a square given as (row, col), a Position or 'e4'.

    Returns False and leaves the board untouched when the square is not a legal
    destination. A malformed algebraic string raises PositionFormatError.
    """
    if col is None:
        pos = coerce_position(row)  # type: ignore[arg-type]
        return _place(board, pos.square)
    if not is_valid_position(row, col):
        return False
    return _place(board, square(row, col))  # type: ignore[arg-type]


def pass_turn(board: Board) -> None:
    board.pass_count += 1
    board.current_player = opponent(board.current_player)


MoveSpec = Union[Position, str, Tuple[int, int], None]


def copy_on_move(board: Board, move: MoveSpec) -> Board:
    """Return a new board with `move` applied; `board` itself is never touched.

    `None` or 'pass' passes. An illegal move yields an unchanged copy, the
    same outcome make_move reports with False.
    """
    child = copy_board(board)
    if move is None or (isinstance(move, str) and move.lower() == PASS_TOKEN):
        pass_turn(child)
    elif isinstance(move, tuple):
        make_move(child, move[0], move[1])
    else:
        make_move(child, move)
    return child


next_state = copy_on_move

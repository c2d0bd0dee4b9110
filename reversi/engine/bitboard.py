from __future__ import annotations

from typing import Iterator, Tuple

# Board is 8x8, squares numbered 0..63, a1=0 (LSB) to h8=63 (MSB).
# Square index = (row-1)*8 + (col-1): shifting by 8 moves one row, by 1 one column.

FULL = 0xFFFFFFFFFFFFFFFF

# File masks to prevent horizontal wrap
FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
NOT_FILE_A = ~FILE_A & FULL
NOT_FILE_H = ~FILE_H & FULL

CORNER_MASK = (1 << 0) | (1 << 7) | (1 << 56) | (1 << 63)
CENTER_MASK = (1 << 27) | (1 << 28) | (1 << 35) | (1 << 36)

# (delta, mask applied to the source before shifting). A step east can never
# start from file H, a step west never from file A.
DIRS: Tuple[Tuple[int, int], ...] = (
    (8, FULL),         # N
    (-8, FULL),        # S
    (1, NOT_FILE_H),   # E
    (-1, NOT_FILE_A),  # W
    (9, NOT_FILE_H),   # NE
    (7, NOT_FILE_A),   # NW
    (-7, NOT_FILE_H),  # SE
    (-9, NOT_FILE_A),  # SW
)

# Longest run of opponent discs that can be bracketed on an 8-wide board.
MAX_RUN = 6


def popcount(x: int) -> int:
    return x.bit_count()


def shift(bb: int, d: int, premask: int = FULL) -> int:
    bb &= premask
    if d > 0:
        return (bb << d) & FULL
    return bb >> (-d)


def bit(sq: int) -> int:
    return 1 << sq


def square(row: int, col: int) -> int:
    """Square index for 1-based (row, col)."""
    return (row - 1) * 8 + (col - 1)


def row_col(sq: int) -> Tuple[int, int]:
    """1-based (row, col) for a square index."""
    r, c = divmod(sq, 8)
    return r + 1, c + 1


def iter_bits(bb: int) -> Iterator[int]:
    """Yield square indices of set bits, lowest first."""
    while bb:
        lsb = bb & -bb
        yield lsb.bit_length() - 1
        bb ^= lsb


def legal_moves(me: int, opp: int) -> int:
    """Return bitmask of legal moves for side with discs `me` against `opp`."""
    empty = ~(me | opp) & FULL
    moves = 0
    for d, premask in DIRS:
        t = shift(me, d, premask) & opp
        # Up to 5 additional expansions are sufficient on an 8x8 board
        for _ in range(MAX_RUN - 1):
            t |= shift(t, d, premask) & opp
        moves |= shift(t, d, premask) & empty
    return moves


def flips_for_move(me: int, opp: int, move: int) -> int:
    """Return bitboard of discs to flip if we play `move` (single-bit int set) for `me`.

    A run in one direction only counts when the square just past it holds one of
    our discs; runs ending on an empty square or the board edge flip nothing.
    """
    flips = 0
    for d, premask in DIRS:
        x = shift(move, d, premask) & opp
        for _ in range(MAX_RUN - 1):
            x |= shift(x, d, premask) & opp
        if shift(x, d, premask) & me:
            flips |= x
    return flips


def format_bitboard(bb: int) -> str:
    """Debug rendering of a mask, row 1 at the top."""
    lines = []
    for r in range(8):
        cells = ("x" if (bb >> (r * 8 + c)) & 1 else "." for c in range(8))
        lines.append(f"{r + 1} " + " ".join(cells))
    lines.append("  a b c d e f g h")
    return "\n".join(lines)

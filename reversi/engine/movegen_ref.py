"""Reference move generator: a plain per-square ray walk.

Slow and obvious on purpose; tests compare the bitboard generator against it.
"""
from __future__ import annotations

from typing import List

from .bitboard import square

# (row delta, col delta)
DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


def _ray(me: int, opp: int, row: int, col: int, dr: int, dc: int) -> List[int]:
    """Opponent squares bracketed from (row, col) along (dr, dc), or []."""
    run: List[int] = []
    r, c = row + dr, col + dc
    while 1 <= r <= 8 and 1 <= c <= 8:
        sq = square(r, c)
        if opp >> sq & 1:
            run.append(sq)
        elif me >> sq & 1:
            return run
        else:
            return []
        r += dr
        c += dc
    return []


def flips_for_move(me: int, opp: int, sq: int) -> int:
    row, col = divmod(sq, 8)
    flips = 0
    for dr, dc in DIRECTIONS:
        for f in _ray(me, opp, row + 1, col + 1, dr, dc):
            flips |= 1 << f
    return flips


def legal_moves(me: int, opp: int) -> int:
    occupied = me | opp
    moves = 0
    for sq in range(64):
        if occupied >> sq & 1:
            continue
        if flips_for_move(me, opp, sq):
            moves |= 1 << sq
    return moves

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

from .bitboard import CORNER_MASK, FULL, NOT_FILE_A, NOT_FILE_H, iter_bits, legal_moves, popcount
from .board import Board, Color, is_game_over

# Positional weights, row 1 first. Corners are valuable, edges decent,
# squares touching a corner are bad until that corner is taken.
SQUARE_WEIGHTS: Sequence[Sequence[int]] = (
    (100, -20, 10, 5, 5, 10, -20, 100),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (10, -2, 5, 3, 3, 5, -2, 10),
    (5, -2, 3, 1, 1, 3, -2, 5),
    (5, -2, 3, 1, 1, 3, -2, 5),
    (10, -2, 5, 3, 3, 5, -2, 10),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (100, -20, 10, 5, 5, 10, -20, 100),
)

WIN_SCORE = 100_000


@dataclass
class EvalWeights:
    squares: int = 1
    mobility: int = 8
    pot_mobility: int = 2
    corners: int = 30
    frontier: int = -2
    disc_diff: int = 1


DEFAULT_WEIGHTS = EvalWeights()


def _neighbours(bb: int) -> int:
    # King-move adjacency, wrap-free
    adj = ((bb << 8) & FULL) | (bb >> 8)
    east = (bb & NOT_FILE_H) << 1
    west = (bb & NOT_FILE_A) >> 1
    adj |= east | west
    adj |= ((east << 8) & FULL) | (east >> 8) | ((west << 8) & FULL) | (west >> 8)
    return adj & FULL


def potential_mobility(me: int, opp: int) -> int:
    # Number of empty squares adjacent to opponent discs
    empty = ~(me | opp) & FULL
    return popcount(_neighbours(opp) & empty)


def frontier_discs(me: int, opp: int) -> int:
    # A disc is frontier if adjacent to any empty
    empty = ~(me | opp) & FULL
    return popcount(me & _neighbours(empty))


def square_score(bb: int, weights: Sequence[Sequence[int]] = SQUARE_WEIGHTS) -> int:
    return sum(weights[sq // 8][sq % 8] for sq in iter_bits(bb))


def evaluate(board: Board, color: Optional[Color] = None, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    """Score from `color`'s perspective (default: side to move); positive is good."""
    color = board.current_player if color is None else color
    me, opp = board.masks_for(color)
    disc = popcount(me) - popcount(opp)
    if is_game_over(board):
        if disc == 0:
            return 0
        return (WIN_SCORE + disc) if disc > 0 else (-WIN_SCORE + disc)
    score = 0
    score += weights.squares * (square_score(me) - square_score(opp))
    score += weights.mobility * (popcount(legal_moves(me, opp)) - popcount(legal_moves(opp, me)))
    score += weights.pot_mobility * (potential_mobility(me, opp) - potential_mobility(opp, me))
    score += weights.corners * (popcount(me & CORNER_MASK) - popcount(opp & CORNER_MASK))
    score += weights.frontier * (frontier_discs(me, opp) - frontier_discs(opp, me))
    # Phase blend: as board fills, rely more on disc diff
    filled = popcount(me | opp)
    score += weights.disc_diff * disc * filled // 64
    return score

"""Move-choosing strategies.

A player is anything with a ``name`` and a ``choose_move(board)`` method that
returns a legal Position, or None to pass. Players receive the live board
and must not mutate it; anything that needs to look ahead works on copies.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from .board import Board, Color, valid_moves
from .eval import SQUARE_WEIGHTS
from .notation import Position, PositionFormatError, parse_move_text
from .search import SearchLimits, Searcher

logger = logging.getLogger(__name__)


@runtime_checkable
class Player(Protocol):
    name: str

    def choose_move(self, board: Board) -> Optional[Position]:
        ...


def board_to_array(board: Board) -> np.ndarray:
    """8x8 int8 grid, row 1 first: 0 empty, 1 black, 2 white."""
    grid = np.zeros(64, dtype=np.int8)
    for sq in range(64):
        if board.black >> sq & 1:
            grid[sq] = int(Color.BLACK)
        elif board.white >> sq & 1:
            grid[sq] = int(Color.WHITE)
    return grid.reshape(8, 8)


def board_to_planes(board: Board) -> np.ndarray:
    """(3, 8, 8) float32 planes from the mover's view: own discs, opponent discs, legal moves."""
    me, opp = board.masks_for(board.current_player)
    legal = 0
    for pos in valid_moves(board):
        legal |= 1 << pos.square
    bits = np.arange(64, dtype=np.uint64)
    planes = np.stack([
        (np.uint64(mask) >> bits) & np.uint64(1)
        for mask in (me, opp, legal)
    ]).astype(np.float32)
    return planes.reshape(3, 8, 8)


class RandomPlayer:
    """Uniform choice among legal moves."""

    def __init__(self, seed: Optional[int] = None, name: str = "random") -> None:
        self.name = name
        self.rng = random.Random(seed)

    def choose_move(self, board: Board) -> Optional[Position]:
        moves = valid_moves(board)
        if not moves:
            return None
        return self.rng.choice(moves)


class HeuristicPlayer:
    """Greedy on a positional weight table; earliest square wins ties."""

    def __init__(self, weights: Sequence[Sequence[float]] = SQUARE_WEIGHTS, name: str = "heuristic") -> None:
        self.name = name
        self.weights = weights

    def choose_move(self, board: Board) -> Optional[Position]:
        moves = valid_moves(board)
        if not moves:
            return None
        best = moves[0]
        best_score = self.weights[best.row - 1][best.col - 1]
        for move in moves[1:]:
            score = self.weights[move.row - 1][move.col - 1]
            if score > best_score:
                best, best_score = move, score
        return best


class MinimaxPlayer:
    """Fixed-depth alpha-beta search, optionally time bounded."""

    def __init__(self, depth: int = 4, time_ms: Optional[int] = None, name: str = "minimax") -> None:
        self.name = name
        self.limits = SearchLimits(max_depth=depth, time_ms=time_ms)
        self.searcher = Searcher()
        self.last_result = None

    def choose_move(self, board: Board) -> Optional[Position]:
        if not valid_moves(board):
            return None
        self.last_result = self.searcher.search(board, self.limits)
        logger.debug("%s: depth=%d score=%d nodes=%d", self.name, self.last_result.depth, self.last_result.score, self.last_result.nodes)
        return self.last_result.best_position


PolicyFn = Callable[[np.ndarray], np.ndarray]


class PolicyPlayer:
    """Delegates to an external policy (e.g. a trained network).

    The policy receives ``board_to_planes(board)`` and returns 64 scores
    (flat or 8x8); the best-scoring legal square is played.
    """

    def __init__(self, policy: PolicyFn, name: str = "policy") -> None:
        self.name = name
        self.policy = policy

    def choose_move(self, board: Board) -> Optional[Position]:
        moves = valid_moves(board)
        if not moves:
            return None
        scores = np.asarray(self.policy(board_to_planes(board)), dtype=np.float64).reshape(64)
        return max(moves, key=lambda m: (scores[m.square], -m.square))


class HumanPlayer:
    """Reads moves as 'e4' or 'row,col' until a legal one is entered."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        name: str = "human",
    ) -> None:
        self.name = name
        self.input_fn = input_fn
        self.output_fn = output_fn

    def choose_move(self, board: Board) -> Optional[Position]:
        moves = valid_moves(board)
        if not moves:
            self.input_fn("No valid moves. Press Enter to pass...")
            return None
        while True:
            text = self.input_fn("Move (e.g. e4 or row,col): ")
            try:
                pos = parse_move_text(text)
            except PositionFormatError:
                self.output_fn("Please enter as 'e4' or 'row,col' (e.g., 4,3).")
                continue
            if pos is None:
                self.output_fn("You have a legal move; passing is not allowed.")
            elif pos in moves:
                return pos
            else:
                self.output_fn(f"Invalid move: {pos}. Legal moves: {' '.join(str(m) for m in moves)}")


PLAYER_KINDS = ("human", "random", "heuristic", "minimax")


def make_player(kind: str, *, seed: Optional[int] = None, depth: int = 4, time_ms: Optional[int] = None) -> Player:
    if kind == "human":
        return HumanPlayer()
    if kind == "random":
        return RandomPlayer(seed=seed)
    if kind == "heuristic":
        return HeuristicPlayer()
    if kind == "minimax":
        return MinimaxPlayer(depth=depth, time_ms=time_ms)
    raise ValueError(f"Unknown player kind {kind!r}; expected one of {', '.join(PLAYER_KINDS)}")

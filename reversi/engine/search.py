from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .bitboard import CORNER_MASK, iter_bits
from .board import Board, copy_on_move, is_game_over, legal_moves_mask
from .eval import SQUARE_WEIGHTS, evaluate
from .notation import Position
from .tt import EXACT, LOWER, UPPER, TranspositionTable

logger = logging.getLogger(__name__)

INF = 1_000_000
PASS_MOVE = -1


@dataclass
class SearchLimits:
    max_depth: int = 4
    time_ms: Optional[int] = None
    node_cap: int = 5_000_000


@dataclass
class SearchResult:
    best_move: Optional[int]
    score: int
    depth: int
    nodes: int
    time_ms: int
    pv: List[int] = field(default_factory=list)

    @property
    def best_position(self) -> Optional[Position]:
        if self.best_move is None or self.best_move == PASS_MOVE:
            return None
        return Position.from_square(self.best_move)


class _Abort(Exception):
    pass


class Searcher:
    """Iterative-deepening negamax with alpha-beta and a transposition table.

    Every node owns its board: children come from copy_on_move, so the root
    board handed to search() is never modified. Budgets are checked between
    node expansions; depth 1 always completes so a legal move is returned.
    """

    def __init__(self, tt: Optional[TranspositionTable] = None) -> None:
        self.tt = tt if tt is not None else TranspositionTable()
        self.nodes = 0
        # Killer moves: two killers per ply index
        self.killers: List[List[int]] = [[-1, -1] for _ in range(128)]
        # History heuristic: move (0..63) -> score
        self.history: List[int] = [0 for _ in range(64)]
        self._deadline: Optional[float] = None
        self._node_cap = 0
        self._enforce = False

    def search(self, board: Board, limits: SearchLimits) -> SearchResult:
        start = time.perf_counter()
        self.nodes = 0
        self._node_cap = limits.node_cap
        self._deadline = None if limits.time_ms is None else start + limits.time_ms / 1000.0
        self._enforce = False
        self.tt.new_generation()

        best_move: Optional[int] = None
        best_score = 0
        pv: List[int] = []
        completed = 0
        for depth in range(1, max(1, limits.max_depth) + 1):
            try:
                score, line = self._negamax(board, depth, -INF, INF, ply=0)
            except _Abort:
                logger.debug("search aborted at depth %d after %d nodes", depth, self.nodes)
                break
            best_score, pv, completed = score, line, depth
            best_move = line[0] if line else None
            self._enforce = True
            if self._out_of_budget():
                break
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("search depth=%d score=%d nodes=%d time_ms=%d pv=%s", completed, best_score, self.nodes, elapsed_ms, pv)
        return SearchResult(best_move, best_score, completed, self.nodes, elapsed_ms, pv)

    def _out_of_budget(self) -> bool:
        if self.nodes >= self._node_cap:
            return True
        return self._deadline is not None and time.perf_counter() > self._deadline

    def _order(self, mask: int, tt_move: int, ply: int) -> List[int]:
        moves = list(iter_bits(mask))
        killers = self.killers[ply] if ply < len(self.killers) else [-1, -1]

        # Order moves using priority: TT -> killers -> corners -> history -> square weight
        def move_key(sq: int) -> tuple:
            return (
                0 if sq == tt_move else 1,
                0 if sq in killers else 1,
                0 if (CORNER_MASK >> sq) & 1 else 1,
                -self.history[sq],
                -SQUARE_WEIGHTS[sq // 8][sq % 8],
            )

        moves.sort(key=move_key)
        return moves

    def _negamax(self, board: Board, depth: int, alpha: int, beta: int, ply: int) -> Tuple[int, List[int]]:
        if self._enforce and self._out_of_budget():
            raise _Abort()
        self.nodes += 1

        if is_game_over(board) or depth == 0:
            return evaluate(board), []

        key = (board.hash, int(board.current_player))
        alpha_orig = alpha
        entry = self.tt.probe(key)
        tt_move = -1
        if entry is not None:
            tt_move = entry.best
            if entry.depth >= depth:
                if entry.flag == EXACT:
                    return entry.score, ([entry.best] if entry.best >= 0 else [])
                if entry.flag == LOWER:
                    alpha = max(alpha, entry.score)
                elif entry.flag == UPPER:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score, ([entry.best] if entry.best >= 0 else [])

        mask = legal_moves_mask(board)
        if mask == 0:
            score, line = self._negamax(copy_on_move(board, None), depth - 1, -beta, -alpha, ply + 1)
            return -score, [PASS_MOVE] + line

        best_score = -INF
        best_line: List[int] = []
        for sq in self._order(mask, tt_move, ply):
            child = copy_on_move(board, Position.from_square(sq))
            score, line = self._negamax(child, depth - 1, -beta, -alpha, ply + 1)
            score = -score
            if score > best_score:
                best_score = score
                best_line = [sq] + line
            if score > alpha:
                alpha = score
            if alpha >= beta:
                # Beta cutoff: update killers and history
                if ply < len(self.killers) and self.killers[ply][0] != sq:
                    self.killers[ply][1] = self.killers[ply][0]
                    self.killers[ply][0] = sq
                self.history[sq] = min(self.history[sq] + depth * depth, 10_000)
                break

        # Store in TT with appropriate bound
        if best_score <= alpha_orig:
            flag = UPPER
        elif best_score >= beta:
            flag = LOWER
        else:
            flag = EXACT
        self.tt.save(key, depth, best_score, flag, best_line[0] if best_line else -1)
        return best_score, best_line

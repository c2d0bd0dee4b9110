"""Zobrist keys for Reversi positions.

The table holds one 64-bit key per (row, col, color), 128 keys in all, built
once at import time from a fixed seed with a 64-bit linear congruential
generator. Two processes (or two boards in one process) that reach the same
arrangement of discs therefore always agree on its hash.

Only disc placement is hashed; the side to move is not part of the key.
"""
from __future__ import annotations

from typing import Tuple

from .bitboard import FULL, iter_bits, square

ZOBRIST_SEED = 0x123456789ABCDEF0
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407

# Color indices match reversi.engine.board.Color
_BLACK = 1
_WHITE = 2


def _generate_keys(seed: int) -> Tuple[int, ...]:
    # Fill order: color-major, then column, then row (row varies fastest).
    keys = [0] * 128
    for color in (_BLACK, _WHITE):
        for col in range(1, 9):
            for row in range(1, 9):
                seed = (seed * LCG_MULTIPLIER + LCG_INCREMENT) & FULL
                keys[(color - 1) * 64 + square(row, col)] = seed
    return tuple(keys)


_KEYS: Tuple[int, ...] = _generate_keys(ZOBRIST_SEED)


def zobrist_square(sq: int, color: int) -> int:
    return _KEYS[(color - 1) * 64 + sq]


def zobrist_entry(row: int, col: int, color: int) -> int:
    """Key for a `color` disc on 1-based (row, col)."""
    if not (1 <= row <= 8 and 1 <= col <= 8):
        raise IndexError(f"square out of range: ({row}, {col})")
    if color not in (_BLACK, _WHITE):
        raise IndexError(f"no zobrist key for color {color!r}")
    return zobrist_square(square(row, col), color)


def update_hash(current_hash: int, row: int, col: int, color: int) -> int:
    """Toggle one disc in or out of `current_hash` (XOR is its own inverse)."""
    return current_hash ^ zobrist_entry(row, col, color)


def compute_full_hash(black: int, white: int) -> int:
    h = 0
    for sq in iter_bits(black):
        h ^= _KEYS[sq]
    for sq in iter_bits(white):
        h ^= _KEYS[64 + sq]
    return h


def table_snapshot() -> Tuple[int, ...]:
    """The 128 keys in storage order (black a1..h8, then white a1..h8)."""
    return _KEYS

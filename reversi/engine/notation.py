"""
Coordinate notation for Reversi moves.

Squares are addressed as 1-based (row, col) pairs. Two textual forms are
supported: algebraic notation ('e4': column letter a-h, then row digit 1-8)
and numeric notation ('4,5': row then column). Passes are written as the
literal token 'pass' in move lists.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .bitboard import row_col, square

# Special token for pass moves (no available moves)
PASS_TOKEN = "pass"

FILES = "abcdefgh"

_NUMERIC_RE = re.compile(r"^([1-8])[\s,]*([1-8])$")


class PositionFormatError(ValueError):
    """Raised for malformed or out-of-range square notation."""


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    def __post_init__(self) -> None:
        for name, value in (("row", self.row), ("col", self.col)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise PositionFormatError(f"{name} must be an int, got {value!r}")
            if not 1 <= value <= 8:
                raise PositionFormatError(f"{name} must be 1-8, got {value}")

    @classmethod
    def from_algebraic(cls, text: str) -> "Position":
        """Parse 'e4' style notation; 'E4' is accepted too."""
        if not isinstance(text, str) or len(text) != 2:
            raise PositionFormatError(f"Position string must be 2 characters, e.g. 'e4', got {text!r}")
        col_char = text[0].lower()
        row_char = text[1]
        if col_char not in FILES:
            raise PositionFormatError(f"Column must be a-h, got {text[0]!r}")
        if row_char not in "12345678":
            raise PositionFormatError(f"Row must be 1-8, got {row_char!r}")
        return cls(int(row_char), FILES.index(col_char) + 1)

    @classmethod
    def from_numeric(cls, text: str) -> "Position":
        """Parse 'row,col' notation such as '4,3' or '4 3'."""
        m = _NUMERIC_RE.match(text.strip()) if isinstance(text, str) else None
        if m is None:
            raise PositionFormatError(f"Expected 'row,col' with values 1-8, got {text!r}")
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def from_square(cls, sq: int) -> "Position":
        if not 0 <= sq <= 63:
            raise PositionFormatError(f"Invalid square index: {sq}")
        return cls(*row_col(sq))

    @property
    def square(self) -> int:
        return square(self.row, self.col)

    def to_algebraic(self) -> str:
        return f"{FILES[self.col - 1]}{self.row}"

    def to_numeric(self) -> str:
        return f"{self.row},{self.col}"

    def __str__(self) -> str:
        return self.to_algebraic()


def position_to_string(pos: Position) -> str:
    return pos.to_algebraic()


def parse_move_text(text: str) -> Optional[Position]:
    """Parse user input: algebraic ('e4'), numeric ('4,5') or 'pass' (returns None)."""
    cleaned = text.strip().lower()
    if cleaned == PASS_TOKEN:
        return None
    if len(cleaned) == 2 and cleaned[0].isalpha():
        return Position.from_algebraic(cleaned)
    return Position.from_numeric(cleaned)


def move_to_token(move: Optional[Position]) -> str:
    return PASS_TOKEN if move is None else move.to_algebraic()


def token_to_move(token: str) -> Optional[Position]:
    if token == PASS_TOKEN:
        return None
    return Position.from_algebraic(token)


def format_moves(moves: Iterable[Optional[Position]]) -> str:
    """Space separated move list, passes written as 'pass'."""
    return " ".join(move_to_token(m) for m in moves)


def parse_moves(text: str) -> List[Optional[Position]]:
    """Parse a move list.

    Accepts whitespace separated tokens ('d3 c3 pass b3') as well as the
    compact concatenated form ('d3c3b3'). Passes come back as None.
    """
    moves: List[Optional[Position]] = []
    for token in text.split():
        if token.lower() == PASS_TOKEN:
            moves.append(None)
            continue
        if len(token) % 2:
            raise PositionFormatError(f"Invalid move token: {token!r}")
        for i in range(0, len(token), 2):
            moves.append(Position.from_algebraic(token[i : i + 2]))
    return moves


MoveLike = Union[Position, str]


def coerce_position(move: MoveLike) -> Position:
    """Accept a Position or an algebraic string."""
    if isinstance(move, Position):
        return move
    if isinstance(move, str):
        return Position.from_algebraic(move)
    raise PositionFormatError(f"Cannot interpret {move!r} as a position")

"""
Game records: an ordered list of move tokens plus a result tag.

Text format (one game per file)::

    MOVES: d3 c3 b3 b2
    RESULT: BLACK | WHITE | DRAW | UNKNOWN

Tokens are algebraic squares or the literal 'pass'. Replaying the tokens on a
fresh board reproduces the masks, side to move and hash of the original game.
"""
from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import List, Optional, Union

import orjson

from ..engine.board import Board, Color, IllegalMoveError, check_invariants, make_move, pass_turn, start_board
from ..engine.notation import PASS_TOKEN, Position, PositionFormatError

logger = logging.getLogger(__name__)

RESULT_TAGS = {Color.BLACK: "BLACK", Color.WHITE: "WHITE", Color.EMPTY: "DRAW"}
UNKNOWN_TAG = "UNKNOWN"


class RecordFormatError(ValueError):
    """Raised when a record file or JSON payload cannot be parsed."""


@dataclass
class GameRecord:
    moves: List[str] = field(default_factory=list)
    result: Optional[Color] = None  # None while unfinished

    def append(self, move: Optional[Position]) -> None:
        self.moves.append(PASS_TOKEN if move is None else move.to_algebraic())

    @property
    def result_tag(self) -> str:
        return UNKNOWN_TAG if self.result is None else RESULT_TAGS[self.result]


def _validate_tokens(tokens: List[str]) -> List[str]:
    for tok in tokens:
        if tok == PASS_TOKEN:
            continue
        try:
            Position.from_algebraic(tok)
        except PositionFormatError as e:
            raise RecordFormatError(f"bad move token {tok!r}: {e}") from e
    return tokens


def _tag_to_result(tag: str) -> Optional[Color]:
    for color, name in RESULT_TAGS.items():
        if tag == name:
            return color
    return None


def format_record(record: GameRecord) -> str:
    return f"MOVES: {' '.join(record.moves)}\nRESULT: {record.result_tag}\n"


def parse_record(text: str) -> GameRecord:
    moves: Optional[List[str]] = None
    result: Optional[Color] = None
    for line in text.splitlines():
        if line.startswith("MOVES:"):
            raw = line[len("MOVES:"):].strip()
            moves = raw.split() if raw else []
        elif line.startswith("RESULT:"):
            result = _tag_to_result(line[len("RESULT:"):].strip())
    if moves is None:
        raise RecordFormatError("record has no MOVES: line")
    return GameRecord(_validate_tokens(moves), result)


def save_game(record: GameRecord, filepath: Union[str, pathlib.Path]) -> None:
    path = pathlib.Path(filepath)
    path.write_text(format_record(record), encoding="utf-8")
    logger.info("Saved game record (%d moves, %s) to %s", len(record.moves), record.result_tag, path)


def load_game(filepath: Union[str, pathlib.Path]) -> GameRecord:
    path = pathlib.Path(filepath)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise RecordFormatError(f"{path} is not UTF-8 text: {e}") from e
    record = parse_record(text)
    logger.debug("Loaded %d moves from %s", len(record.moves), path)
    return record


def record_to_json(record: GameRecord) -> bytes:
    return orjson.dumps({"moves": record.moves, "result": record.result_tag})


def record_from_json(data: Union[bytes, str]) -> GameRecord:
    try:
        payload = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise RecordFormatError(f"invalid JSON record: {e}") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("moves"), list):
        raise RecordFormatError("JSON record must be an object with a 'moves' list")
    moves = [str(m) for m in payload["moves"]]
    return GameRecord(_validate_tokens(moves), _tag_to_result(str(payload.get("result", UNKNOWN_TAG))))


def replay_game(record: GameRecord, strict: bool = False) -> Board:
    """Replay `record` on a fresh board and return the final position.

    A token that is not a legal move raises IllegalMoveError; with `strict`
    the board invariants are checked after every step.
    """
    board = start_board()
    for i, token in enumerate(record.moves, 1):
        logger.debug("Move %d: %s", i, token)
        if token == PASS_TOKEN:
            pass_turn(board)
        elif not make_move(board, token):
            raise IllegalMoveError(f"move {i} ({token}) is illegal for {board.current_player}")
        if strict:
            check_invariants(board)
    return board

from __future__ import annotations

import pytest

from reversi.engine.bitboard import FULL
from reversi.engine.board import (
    DRAW,
    Board,
    Color,
    InvariantViolation,
    check_invariants,
    copy_board,
    copy_on_move,
    count_pieces,
    full_hash,
    get_piece,
    is_game_over,
    is_valid_move,
    make_move,
    next_state,
    opponent,
    pass_turn,
    start_board,
    valid_moves,
    winner,
)
from reversi.engine.notation import Position, PositionFormatError
from reversi.engine.zobrist import compute_full_hash


def snapshot(b: Board):
    return (b.black, b.white, b.current_player, b.pass_count, b.hash)


def board_from_masks(black: int, white: int, to_move: Color = Color.BLACK, pass_count: int = 0) -> Board:
    return Board(black, white, to_move, pass_count, compute_full_hash(black, white))


class TestInitialBoard:
    def test_centre_squares(self):
        b = start_board()
        assert get_piece(b, 4, 4) == Color.WHITE
        assert get_piece(b, 4, 5) == Color.BLACK
        assert get_piece(b, 5, 4) == Color.BLACK
        assert get_piece(b, 5, 5) == Color.WHITE
        assert get_piece(b, 1, 1) == Color.EMPTY
        assert b.current_player == Color.BLACK
        assert b.pass_count == 0
        assert b.hash == full_hash(b)
        assert count_pieces(b) == (2, 2)

    def test_opening_moves(self):
        b = start_board()
        assert valid_moves(b) == [Position(3, 4), Position(4, 3), Position(5, 6), Position(6, 5)]
        assert valid_moves(b, Color.WHITE) == [Position(3, 5), Position(4, 6), Position(5, 3), Position(6, 4)]

    def test_get_piece_out_of_range(self):
        with pytest.raises(PositionFormatError):
            get_piece(start_board(), 0, 4)


def test_opponent():
    assert opponent(Color.BLACK) == Color.WHITE
    assert opponent(Color.WHITE) == Color.BLACK


class TestIsValidMove:
    def test_current_and_explicit_player(self):
        b = start_board()
        assert is_valid_move(b, 3, 4)
        assert is_valid_move(b, 3, 4, Color.BLACK)
        assert not is_valid_move(b, 3, 4, Color.WHITE)
        assert is_valid_move(b, 3, 5, Color.WHITE)

    @pytest.mark.parametrize("row,col", [(0, 1), (9, 1), (1, 9), (-1, -1), (4, 0)])
    def test_out_of_range_is_false(self, row, col):
        assert is_valid_move(start_board(), row, col) is False

    def test_occupied_is_false(self):
        assert not is_valid_move(start_board(), 4, 4)


class TestMakeMove:
    def test_d3_scenario(self):
        b = start_board()
        assert make_move(b, 3, 4) is True
        assert get_piece(b, 3, 4) == Color.BLACK
        assert get_piece(b, 4, 4) == Color.BLACK  # flipped
        assert count_pieces(b) == (4, 1)
        assert b.current_player == Color.WHITE
        assert b.pass_count == 0
        assert b.hash == full_hash(b)

    def test_string_and_position_overloads(self):
        by_ints, by_str, by_pos = start_board(), start_board(), start_board()
        assert make_move(by_ints, 3, 4)
        assert make_move(by_str, "d3")
        assert make_move(by_pos, Position(3, 4))
        assert snapshot(by_ints) == snapshot(by_str) == snapshot(by_pos)

    @pytest.mark.parametrize("move", [(1, 1), (4, 4), (0, 5), (9, 9), (3, 5)])
    def test_illegal_move_changes_nothing(self, move):
        b = start_board()
        before = snapshot(b)
        assert make_move(b, *move) is False
        assert snapshot(b) == before

    def test_illegal_string_changes_nothing(self):
        b = start_board()
        before = snapshot(b)
        assert make_move(b, "a1") is False
        assert snapshot(b) == before

    def test_malformed_string_raises_and_changes_nothing(self):
        b = start_board()
        before = snapshot(b)
        with pytest.raises(PositionFormatError):
            make_move(b, "z9")
        assert snapshot(b) == before

    def test_move_resets_pass_count(self):
        b = start_board()
        pass_turn(b)
        pass_turn(b)  # back to black, pass_count 2
        b.pass_count = 1
        assert make_move(b, "d3")
        assert b.pass_count == 0


class TestPassAndGameOver:
    def test_pass(self):
        b = start_board()
        h = b.hash
        assert not is_game_over(b)
        pass_turn(b)
        assert b.pass_count == 1
        assert b.current_player == Color.WHITE
        assert b.hash == h
        assert not is_game_over(b)
        pass_turn(b)
        assert b.pass_count == 2
        assert is_game_over(b)

    def test_full_board_is_over(self):
        b = board_from_masks(FULL ^ 1, 1)
        assert is_game_over(b)

    def test_no_moves_for_either_side_is_over(self):
        # Isolated discs in opposite corners, nobody has passed yet
        b = board_from_masks(1, 1 << 63)
        assert b.pass_count == 0
        assert is_game_over(b)

    def test_one_side_stuck_is_not_over(self):
        # Black a1, white b1: only black can move (c1)
        b = board_from_masks(1, 1 << 1, to_move=Color.WHITE)
        assert valid_moves(b) == []
        assert not is_game_over(b)

    def test_wiped_out_side_is_over(self):
        b = start_board()
        b.white = 0
        b.hash = full_hash(b)
        assert is_game_over(b)


class TestWinner:
    def test_black_wins(self):
        b = board_from_masks((1 << 0) | (1 << 1), 1 << 2)
        assert winner(b) == Color.BLACK

    def test_white_wins(self):
        b = board_from_masks(1 << 0, (1 << 1) | (1 << 2))
        assert winner(b) == Color.WHITE

    def test_draw(self):
        b = board_from_masks(1 << 0, 1 << 1)
        assert winner(b) == DRAW == Color.EMPTY
        assert winner(start_board()) == DRAW


class TestCopyOnMove:
    def test_original_untouched(self):
        b = start_board()
        before = snapshot(b)
        child = copy_on_move(b, Position(3, 4))
        assert snapshot(b) == before
        assert get_piece(b, 3, 4) == Color.EMPTY
        assert get_piece(child, 3, 4) == Color.BLACK
        assert child.current_player == Color.WHITE
        assert child.hash == full_hash(child)

    def test_move_forms(self):
        b = start_board()
        expected = snapshot(copy_on_move(b, Position(3, 4)))
        assert snapshot(next_state(b, "d3")) == expected
        assert snapshot(copy_on_move(b, (3, 4))) == expected

    def test_pass_forms(self):
        b = start_board()
        for mv in (None, "pass"):
            child = copy_on_move(b, mv)
            assert child.current_player == Color.WHITE
            assert child.pass_count == 1
        assert b.pass_count == 0

    def test_illegal_move_returns_unchanged_copy(self):
        b = start_board()
        child = copy_on_move(b, Position(1, 1))
        assert child is not b
        assert snapshot(child) == snapshot(b)

    def test_copies_do_not_alias(self):
        b = start_board()
        c = copy_board(b)
        make_move(c, "d3")
        assert snapshot(b) == snapshot(start_board())


class TestInvariants:
    def test_start_board_passes(self):
        check_invariants(start_board())

    def test_overlap_detected(self):
        b = start_board()
        b.white |= b.black
        with pytest.raises(InvariantViolation):
            check_invariants(b)

    def test_stale_hash_detected(self):
        b = start_board()
        b.hash ^= 1
        with pytest.raises(InvariantViolation):
            check_invariants(b)

"""
Tests for the coordinate notation system.
"""

import pytest
from reversi.engine.notation import (
    PASS_TOKEN,
    Position,
    PositionFormatError,
    coerce_position,
    format_moves,
    parse_move_text,
    parse_moves,
    position_to_string,
)


class TestAlgebraicNotation:
    """Test algebraic notation conversion."""

    def test_from_algebraic(self):
        assert Position.from_algebraic("e4") == Position(4, 5)
        assert Position.from_algebraic("a1") == Position(1, 1)
        assert Position.from_algebraic("h8") == Position(8, 8)
        assert Position.from_algebraic("d3") == Position(3, 4)

        # Case insensitivity on input
        assert Position.from_algebraic("E4") == Position(4, 5)

    def test_to_algebraic(self):
        assert Position(4, 5).to_algebraic() == "e4"
        assert position_to_string(Position(1, 1)) == "a1"
        assert str(Position(8, 8)) == "h8"

    def test_round_trip_all_squares(self):
        for col_char in "abcdefgh":
            for row_char in "12345678":
                s = col_char + row_char
                assert Position.from_algebraic(s).to_algebraic() == s

    def test_square_index(self):
        assert Position(1, 1).square == 0
        assert Position(1, 8).square == 7
        assert Position(3, 4).square == 19
        assert Position(8, 8).square == 63
        for sq in range(64):
            assert Position.from_square(sq).square == sq

    @pytest.mark.parametrize("bad", ["z9", "e", "", "abc", "i1", "a0", "a9", "1a", "e44"])
    def test_invalid_notation(self, bad):
        with pytest.raises(PositionFormatError):
            Position.from_algebraic(bad)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            Position.from_algebraic("x9")


class TestPositionValue:
    def test_out_of_range_construction(self):
        with pytest.raises(PositionFormatError):
            Position(0, 1)
        with pytest.raises(PositionFormatError):
            Position(1, 9)
        with pytest.raises(PositionFormatError):
            Position.from_square(64)

    def test_immutable_and_hashable(self):
        p = Position(4, 5)
        with pytest.raises(AttributeError):
            p.row = 3  # type: ignore[misc]
        assert {p, Position(4, 5)} == {p}

    def test_numeric_notation(self):
        assert Position.from_numeric("4,3") == Position(4, 3)
        assert Position.from_numeric("4 3") == Position(4, 3)
        assert Position.from_numeric(" 4, 3 ") == Position(4, 3)
        assert Position(4, 3).to_numeric() == "4,3"
        with pytest.raises(PositionFormatError):
            Position.from_numeric("9,1")
        with pytest.raises(PositionFormatError):
            Position.from_numeric("e4")


class TestMoveText:
    def test_parse_move_text(self):
        assert parse_move_text("e4") == Position(4, 5)
        assert parse_move_text("  D3 ") == Position(3, 4)
        assert parse_move_text("4,5") == Position(4, 5)
        assert parse_move_text("pass") is None
        with pytest.raises(PositionFormatError):
            parse_move_text("hello")

    def test_parse_moves_spaced_and_compact(self):
        expected = [Position(3, 4), Position(3, 3), None, Position(3, 2)]
        assert parse_moves("d3 c3 pass b3") == expected
        assert parse_moves("d3c3 pass b3") == expected
        assert parse_moves("") == []

    def test_parse_moves_rejects_garbage(self):
        with pytest.raises(PositionFormatError):
            parse_moves("d3c")
        with pytest.raises(PositionFormatError):
            parse_moves("d3 x9")

    def test_format_moves(self):
        assert format_moves([Position(3, 4), None, Position(8, 8)]) == f"d3 {PASS_TOKEN} h8"
        assert format_moves([]) == ""

    def test_coerce_position(self):
        assert coerce_position("d3") == Position(3, 4)
        p = Position(2, 2)
        assert coerce_position(p) is p
        with pytest.raises(PositionFormatError):
            coerce_position(19)  # type: ignore[arg-type]

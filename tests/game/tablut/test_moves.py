"""Tests for move representation and notation."""

import pytest

from tablut_ai.errors import OutOfBounds
from tablut_ai.game.tablut.moves import Move, mv
from tablut_ai.game.tablut.square import sq


class TestMove:
    def test_rook_move_accepted(self) -> None:
        move = Move(sq(0, 0), sq(0, 2))
        assert move.from_sq == sq(0, 0)
        assert move.to_sq == sq(0, 2)

    def test_diagonal_rejected(self) -> None:
        with pytest.raises(ValueError):
            Move(sq(0, 0), sq(1, 1))

    def test_null_move_rejected(self) -> None:
        with pytest.raises(ValueError):
            Move(sq(3, 3), sq(3, 3))

    def test_structural_equality(self) -> None:
        assert Move(sq(0, 0), sq(0, 2)) == Move(sq(0, 0), sq(0, 2))
        assert len({Move(sq(0, 0), sq(0, 2)), Move(sq(0, 0), sq(0, 2))}) == 1

    def test_direction_matters(self) -> None:
        assert Move(sq(0, 0), sq(0, 2)) != Move(sq(0, 2), sq(0, 0))

    def test_mv_returns_none_for_non_rook_move(self) -> None:
        assert mv(sq(0, 0), sq(2, 1)) is None
        assert mv(sq(0, 0), sq(2, 0)) == Move(sq(0, 0), sq(2, 0))


class TestNotation:
    def test_str(self) -> None:
        assert str(Move(sq(0, 0), sq(0, 2))) == "a1-a3"

    def test_parse(self) -> None:
        assert Move.parse("e3-c3") == Move(sq(4, 2), sq(2, 2))

    def test_parse_str_roundtrip(self) -> None:
        assert str(Move.parse("i9-i2")) == "i9-i2"

    @pytest.mark.parametrize("text", ["a1a3", "a1-a3-a5", "", "a1-b2"])
    def test_parse_malformed(self, text: str) -> None:
        with pytest.raises(ValueError):
            Move.parse(text)

    def test_parse_off_board(self) -> None:
        with pytest.raises(OutOfBounds):
            Move.parse("a1-a10")

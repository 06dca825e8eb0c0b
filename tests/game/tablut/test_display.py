"""Tests for board display."""

from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.display import board_to_str


class TestBoardToStr:
    def test_initial_rows(self) -> None:
        lines = board_to_str(Board()).splitlines()
        assert lines[0] == " 9 - - - B B B - - -"
        assert lines[1] == " 8 - - - - B - - - -"
        assert lines[4] == " 5 B B W W K W W B B"
        assert lines[8] == " 1 - - - B B B - - -"

    def test_column_footer(self) -> None:
        lines = board_to_str(Board()).splitlines()
        assert len(lines) == 10
        assert lines[9] == "   a b c d e f g h i"

    def test_without_coordinates(self) -> None:
        lines = board_to_str(Board(), coordinates=False).splitlines()
        assert len(lines) == 9
        assert lines[4] == "   B B W W K W W B B"

    def test_str_uses_display(self) -> None:
        board = Board()
        assert str(board) == board_to_str(board)

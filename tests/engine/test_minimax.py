"""Tests for minimax search engine."""

from __future__ import annotations

import pytest

from tablut_ai.engine.minimax import (
    INFTY,
    WILL_WIN_VALUE,
    WINNING_VALUE,
    SearchConfig,
    alphabeta,
    find_move,
    max_depth,
    static_score,
)
from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.moves import Move
from tablut_ai.game.tablut.square import parse_square
from tablut_ai.game.tablut.types import Piece

K, W, B = Piece.KING, Piece.WHITE, Piece.BLACK


def _board(layout: dict[str, Piece], turn: Piece) -> Board:
    """Helper: build a board from {"e5": Piece.KING, ...}."""
    return Board.from_pieces({parse_square(k): v for k, v in layout.items()}, turn=turn)


class TestStaticScore:
    def test_initial_position_balanced(self) -> None:
        # (守備兵8 + 王1 + 王の価値7) - 攻撃兵16 = 0
        assert static_score(Board()) == 0

    def test_material(self) -> None:
        board = _board({"e5": K, "c3": W, "b3": B}, Piece.WHITE)
        assert static_score(board) == (2 + 7) - 1

    def test_missing_king(self) -> None:
        board = _board({"c3": W, "b3": B}, Piece.WHITE)
        assert static_score(board) == -WILL_WIN_VALUE

    def test_king_on_edge(self) -> None:
        board = _board({"a5": K, "b3": B}, Piece.BLACK)
        assert static_score(board) == WILL_WIN_VALUE

    def test_values_ordered(self) -> None:
        assert WILL_WIN_VALUE < WINNING_VALUE < INFTY


class TestSearchConfig:
    def test_default_depth(self) -> None:
        config = SearchConfig()
        assert config.depth_policy(Board()) == 2
        assert max_depth(Board()) == 2

    def test_fixed_depth(self) -> None:
        assert SearchConfig.fixed(3).depth_policy(Board()) == 3


class TestAlphaBeta:
    def test_terminal_white_win(self) -> None:
        board = _board({"c5": K, "g7": B}, Piece.WHITE)
        board.make_move(Move.parse("c5-c9"))
        move, value = alphabeta(board, 2, -1, -INFTY, INFTY)
        assert move is None
        assert value == WINNING_VALUE

    def test_terminal_black_win(self) -> None:
        board = _board({"c3": K, "b3": B, "d1": B}, Piece.BLACK)
        board.make_move(Move.parse("d1-d3"))
        move, value = alphabeta(board, 2, 1, -INFTY, INFTY)
        assert move is None
        assert value == -WINNING_VALUE

    def test_depth_zero_looks_one_move_ahead(self) -> None:
        # 静的評価は 7 だが、王が1手で盤端に出られるので葉の値は WILL_WIN_VALUE
        board = _board({"c5": K, "g7": B}, Piece.WHITE)
        assert static_score(board) == 7
        move, value = alphabeta(board, 0, 1, -INFTY, INFTY)
        assert move is None
        assert value == WILL_WIN_VALUE

    def test_depth_zero_minimizer(self) -> None:
        board = _board({"c3": K, "b3": B, "d1": B}, Piece.BLACK)
        _, value = alphabeta(board, 0, -1, -INFTY, INFTY)
        assert value == -WILL_WIN_VALUE

    def test_winning_value_dominates(self) -> None:
        board = _board({"c5": K, "g7": B}, Piece.WHITE)
        move, value = alphabeta(board, 1, 1, -INFTY, INFTY)
        assert value == WINNING_VALUE
        assert move is not None and move.to_sq.is_edge()

    def test_last_equal_move_wins_tie(self) -> None:
        # 王の脱出手は4つ（e1, a5, i5, e9）。マス番号順で最後の e9 が選ばれる
        board = _board({"e5": K, "a1": B}, Piece.WHITE)
        move, value = alphabeta(board, 1, 1, -INFTY, INFTY)
        assert value == WINNING_VALUE
        assert move == Move.parse("e5-e9")

    def test_search_does_not_mutate_board(self) -> None:
        board = Board()
        before = board.encoded_board()
        alphabeta(board, 1, -1, -INFTY, INFTY)
        assert board.encoded_board() == before
        assert board.move_count == 0


class TestFindMove:
    @pytest.mark.parametrize("depth", [1, 2])
    def test_finds_king_escape(self, depth: int) -> None:
        board = _board({"c5": K, "g7": B, "h8": B}, Piece.WHITE)
        move = find_move(board, SearchConfig.fixed(depth))
        board.make_move(move)
        assert board.winner == Piece.WHITE

    @pytest.mark.parametrize("depth", [1, 2])
    def test_finds_king_capture(self, depth: int) -> None:
        board = _board({"c3": K, "b3": B, "d1": B}, Piece.BLACK)
        move = find_move(board, SearchConfig.fixed(depth))
        assert move == Move.parse("d1-d3")

    def test_returns_legal_move_from_initial_position(self) -> None:
        board = Board()
        move = find_move(board, SearchConfig.fixed(1))
        assert board.is_legal(move)

    def test_does_not_mutate_board(self) -> None:
        board = Board()
        before = board.encoded_board()
        find_move(board, SearchConfig.fixed(1))
        assert board.encoded_board() == before

    def test_game_over_raises(self) -> None:
        board = _board({"c5": K, "g7": B}, Piece.WHITE)
        board.make_move(Move.parse("c5-c9"))
        with pytest.raises(ValueError):
            find_move(board)

    def test_no_legal_moves_raises(self) -> None:
        board = _board({"e5": K, "a1": B, "a2": W, "b1": W}, Piece.BLACK)
        with pytest.raises(ValueError):
            find_move(board)

    @pytest.mark.slow
    def test_default_depth_from_initial_position(self) -> None:
        board = Board()
        move = find_move(board)
        assert move in board.legal_moves(Piece.BLACK)

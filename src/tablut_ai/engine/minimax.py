"""Minimax search with alpha-beta pruning for Tablut.

Tablut 用のミニマックス探索（αβ枝刈り付き）。

評価値は常に WHITE（守備側）視点: 正なら WHITE 有利、負なら BLACK 有利。
WHITE は最大化（sense=+1）、BLACK は最小化（sense=-1）を行う。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.moves import Move
from tablut_ai.game.tablut.types import Piece

logger = logging.getLogger(__name__)

# 通常の評価値より大きい値
INFTY = 2**31 - 1
# 勝敗が確定した局面の評価値（WHITE 勝ちなら正、BLACK 勝ちなら負）
WINNING_VALUE = INFTY - 20
# 次の手で勝ちが確定する局面の評価値
# WINNING_VALUE より小さくして「今すぐ勝てるのに先延ばしする」ことを防ぐ
WILL_WIN_VALUE = INFTY - 40
# 王の価値（守備兵何枚分か）
KING_VALUE = 7


def max_depth(board: Board) -> int:
    """Return the search depth for board (constant 2)."""
    return 2


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for the minimax search.

    depth_policy: 局面から探索深さを決める関数（既定は常に 2）。
    """

    depth_policy: Callable[[Board], int] = max_depth

    @classmethod
    def fixed(cls, depth: int) -> SearchConfig:
        """Return a config that always searches depth plies."""
        return cls(depth_policy=lambda _board: depth)


def static_score(board: Board) -> int:
    """Return a heuristic value for board from WHITE's perspective.

    静的評価関数:
    - 王が取られている → -WILL_WIN_VALUE
    - 王が盤端にいる   → +WILL_WIN_VALUE
    - それ以外         → (WHITE 側の駒数 + 王の価値) - BLACK の駒数
    """
    king = board.king_position()
    if king is None:
        return -WILL_WIN_VALUE
    if king.is_edge():
        return WILL_WIN_VALUE
    white = len(board.piece_locations(Piece.WHITE)) + KING_VALUE
    black = len(board.piece_locations(Piece.BLACK))
    return white - black


def _terminal_value(winner: Piece) -> int:
    return WINNING_VALUE if winner == Piece.WHITE else -WINNING_VALUE


def _greedy_value(board: Board, sense: int, alpha: int, beta: int) -> int:
    """Best static score reachable with one move of the side to move.

    深さ 0 の葉ノード。局面そのものの静的評価ではなく、
    手番側が1手指した直後の静的評価の最善値を返す（1手先読み）。
    """
    best = -INFTY if sense == 1 else INFTY
    for move in board.legal_moves(board.turn):
        child = board.copy()
        child.make_move(move)
        value = static_score(child)
        if sense == 1:
            if value >= best:
                best = value
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
        elif value <= best:
            best = value
            beta = min(beta, value)
            if beta <= alpha:
                break
    return best


def alphabeta(
    board: Board,
    depth: int,
    sense: int,
    alpha: int,
    beta: int,
) -> tuple[Move | None, int]:
    """Minimax search with alpha-beta pruning.

    ミニマックス法 + αβ枝刈りによる探索。

    sense=+1 なら評価値を最大化（WHITE）、-1 なら最小化（BLACK）。
    alpha: 最大化側が保証できる最低スコア
    beta:  最小化側が保証できる最高スコア

    同じ評価値の手が複数あるときは、後に列挙された手を採用する。

    Returns (best_move, value). best_move is None at terminal nodes and at
    depth 0.
    """
    # 終局していれば展開せずに確定値を返す
    if board.winner is not None:
        return None, _terminal_value(board.winner)

    if depth == 0:
        return None, _greedy_value(board, sense, alpha, beta)

    best_move: Move | None = None
    best = -INFTY if sense == 1 else INFTY

    for move in board.legal_moves(board.turn):
        child = board.copy()
        child.make_move(move)
        _, value = alphabeta(child, depth - 1, -sense, alpha, beta)

        if sense == 1:
            if value >= best:
                best, best_move = value, move
                alpha = max(alpha, value)
                if beta <= alpha:
                    break  # βカットオフ
        elif value <= best:
            best, best_move = value, move
            beta = min(beta, value)
            if beta <= alpha:
                break  # αカットオフ

    return best_move, best


def find_move(board: Board, config: SearchConfig | None = None) -> Move:
    """Return the best move for the side to move on board.

    手番側の最善手を返す。board は変更しない（探索は複製に対して行う）。
    合法手がない局面で呼ぶのは呼び出し側の誤り（ValueError）。
    """
    config = config or SearchConfig()
    if board.winner is not None:
        raise ValueError("Game is already over")
    if not board.has_move(board.turn):
        raise ValueError("No legal moves available")
    depth = max(1, config.depth_policy(board))
    sense = 1 if board.turn == Piece.WHITE else -1
    move, value = alphabeta(board.copy(), depth, sense, -INFTY, INFTY)
    assert move is not None
    logger.debug("%s plays %s (depth=%d, value=%d)", board.turn.name, move, depth, value)
    return move

"""Random player — selects a legal move uniformly at random.

ランダムプレイヤー: 合法手の中からランダムに手を選ぶ。

用途:
- ルール実装の動作確認（ランダム対局が必ず終局するか）
- ミニマックス AI の比較対象（ランダムに勝てない AI は弱すぎる）
"""

from __future__ import annotations

import random

from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.moves import Move


def random_move(board: Board, rng: random.Random | None = None) -> Move:
    """Return a random legal move for the side to move.

    合法手がない場合は ValueError を送出する（終局局面では呼ばれないはず）。
    """
    moves = board.legal_moves(board.turn)
    if not moves:
        raise ValueError("No legal moves available")
    return (rng or random).choice(moves)

"""Terminal display for Tablut boards.

Tablut の盤面をターミナルに表示するためのモジュール。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tablut_ai.game.tablut.square import sq
from tablut_ai.game.tablut.types import SIZE, Piece

if TYPE_CHECKING:
    from tablut_ai.game.tablut.board import Board

# 陣営の表示名（CLI や Web API の結果表示に使用）
SIDE_NAMES: dict[Piece, str] = {
    Piece.WHITE: "White",
    Piece.BLACK: "Black",
}


def board_to_str(board: Board, coordinates: bool = True) -> str:
    """Convert a board to a human-readable string.

    盤面を人間が読みやすい文字列に変換する。

    Example output (initial position):
         9 - - - B B B - - -
         8 - - - - B - - - -
         ...
         1 - - - B B B - - -
           a b c d e f g h i

    - 行は 9 段目（上）から 1 段目（下）の順
    - "K" = 王, "W" = 守備兵, "B" = 攻撃兵, "-" = 空マス
    - coordinates=False なら行ラベル・列ラベルを省略する
    """
    lines: list[str] = []
    for r in range(SIZE - 1, -1, -1):
        label = f"{r + 1:2d}" if coordinates else "  "
        cells = "".join(f" {board.get(sq(c, r)).char}" for c in range(SIZE))
        lines.append(label + cells)
    if coordinates:
        lines.append("  " + "".join(f" {chr(ord('a') + c)}" for c in range(SIZE)))
    return "\n".join(lines) + "\n"

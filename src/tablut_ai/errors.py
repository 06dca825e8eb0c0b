"""Exception types raised by the Tablut rules engine.

ルールエンジンが送出する例外クラス。
呼び出し側が ValueError / IndexError として扱えるよう、組み込み例外も継承する。
"""

from __future__ import annotations


class TablutError(Exception):
    """Base class for all Tablut engine errors."""


class OutOfBounds(TablutError, IndexError):
    """A coordinate or square lies outside the 9x9 board.

    盤外（0〜8 の範囲外）の座標にアクセスしようとした。
    """


class InvalidConfiguration(TablutError, ValueError):
    """An engine setting cannot be applied in the current position.

    現局面では適用できない設定（例: 手数制限が既に超過している）。
    """


class IllegalMove(TablutError, ValueError):
    """A move failed the legality check; the board was not modified."""

"""Types and constants for Tablut.

Tablut の基本型・定数定義。
盤面は 9列 × 9行（81マス）で、駒は KING・WHITE（守備側）・BLACK（攻撃側）の3種類。
"""

from __future__ import annotations

from enum import IntEnum, unique

# 盤面のサイズ: 9列 × 9行
SIZE = 9
NUM_SQUARES = SIZE * SIZE


@unique
class Piece(IntEnum):
    """Contents of a square.

    マスの中身。EMPTY（空）・KING（王）・WHITE（守備兵）・BLACK（攻撃兵）。
    KING は WHITE 側の駒として扱う（side が WHITE を返す）。
    """

    EMPTY = 0
    KING = 1
    WHITE = 2
    BLACK = 3

    @property
    def side(self) -> Piece | None:
        """所属する陣営を返す。KING は WHITE、EMPTY は None。"""
        if self == Piece.EMPTY:
            return None
        if self == Piece.BLACK:
            return Piece.BLACK
        return Piece.WHITE

    @property
    def opponent(self) -> Piece:
        """相手陣営を返す（WHITE↔BLACK）。"""
        if self == Piece.EMPTY:
            raise ValueError("EMPTY has no opponent")
        if self == Piece.BLACK:
            return Piece.WHITE
        return Piece.BLACK

    @property
    def char(self) -> str:
        """盤面表示・局面エンコードで使う1文字。"""
        return _PIECE_CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Return the piece whose display character is char."""
        try:
            return _CHAR_PIECES[char]
        except KeyError:
            raise ValueError(f"Unknown piece character: {char!r}") from None

    def __str__(self) -> str:
        return self.char


_PIECE_CHARS: dict[Piece, str] = {
    Piece.EMPTY: "-",
    Piece.KING: "K",
    Piece.WHITE: "W",
    Piece.BLACK: "B",
}
_CHAR_PIECES: dict[str, Piece] = {c: piece for piece, c in _PIECE_CHARS.items()}


@unique
class Direction(IntEnum):
    """Orthogonal directions on the board.

    N は行番号が増える方向（盤面表示では上）、E は列が増える方向。
    """

    N = 0
    E = 1
    S = 2
    W = 3

    @property
    def delta(self) -> tuple[int, int]:
        """(列の変化, 行の変化) を返す。"""
        return _DIRECTION_DELTAS[self]

    @property
    def reverse(self) -> Direction:
        return Direction((self.value + 2) % 4)


_DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.E: (1, 0),
    Direction.S: (0, -1),
    Direction.W: (-1, 0),
}

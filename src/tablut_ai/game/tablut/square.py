"""Board coordinates for Tablut.

盤面の座標（マス）。81個の Square はモジュール読み込み時に一度だけ生成され、
sq(col, row) は常に同じインスタンスを返す（キャッシュ）。

座標系:
  col: 0〜8（表記では a〜i、左から右）
  row: 0〜8（表記では 1〜9、下から上）
  index = row * 9 + col（a1=0, b1=1, ..., i9=80）
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tablut_ai.errors import OutOfBounds
from tablut_ai.game.tablut.types import SIZE, Direction

_SQUARE_PATTERN = re.compile(r"^([a-i])([1-9])$")


@dataclass(frozen=True)
class Square:
    """A single cell of the board.

    盤上の1マス。イミュータブルで、直接生成せず sq() を使う。
    """

    col: int
    row: int

    @property
    def index(self) -> int:
        """配列アクセス用の通し番号（0〜80）。"""
        return self.row * SIZE + self.col

    def is_rook_move(self, other: Square) -> bool:
        """Return True iff other shares exactly a row or a column with self."""
        if self == other:
            return False
        return self.row == other.row or self.col == other.col

    def direction(self, other: Square) -> Direction:
        """Return the direction of the rook move self -> other."""
        if not self.is_rook_move(other):
            raise ValueError(f"{self}-{other} is not a rook move")
        if self.col == other.col:
            return Direction.N if other.row > self.row else Direction.S
        return Direction.E if other.col > self.col else Direction.W

    def rook_move(self, direction: Direction, steps: int) -> Square:
        """Return the square steps cells away in direction.

        盤外に出る場合は OutOfBounds を送出する。
        """
        dc, dr = direction.delta
        return sq(self.col + dc * steps, self.row + dr * steps)

    def between(self, other: Square) -> Square:
        """Return the square strictly between self and other.

        2マス離れた同一直線上のマス同士でのみ定義される（挟み取りの判定に使用）。
        """
        dc, dr = abs(self.col - other.col), abs(self.row - other.row)
        if sorted((dc, dr)) != [0, 2]:
            raise ValueError(f"{self} and {other} are not two squares apart on a line")
        return sq((self.col + other.col) // 2, (self.row + other.row) // 2)

    def is_edge(self) -> bool:
        """盤端（1段目・9段目・a筋・i筋）にあれば True。"""
        return self.row in (0, SIZE - 1) or self.col in (0, SIZE - 1)

    def __str__(self) -> str:
        return f"{chr(ord('a') + self.col)}{self.row + 1}"


def exists(col: int, row: int) -> bool:
    """Return True iff (col, row) lies on the board."""
    return 0 <= col < SIZE and 0 <= row < SIZE


# 全81マス（index 順）。以後変更されない。
SQUARE_LIST: tuple[Square, ...] = tuple(
    Square(col, row) for row in range(SIZE) for col in range(SIZE)
)


def sq(col: int, row: int) -> Square:
    """Return the cached square at (col, row).

    範囲外の座標は OutOfBounds。
    """
    if not exists(col, row):
        raise OutOfBounds(f"Square ({col}, {row}) is off the board")
    return SQUARE_LIST[row * SIZE + col]


def parse_square(text: str) -> Square:
    """Parse a square written as column letter + row digit, e.g. "e5"."""
    m = _SQUARE_PATTERN.match(text.strip().lower())
    if m is None:
        if re.match(r"^[a-z]\d+$", text.strip().lower()):
            raise OutOfBounds(f"Square {text!r} is off the board")
        raise ValueError(f"Malformed square: {text!r}")
    return sq(ord(m.group(1)) - ord("a"), int(m.group(2)) - 1)


def _build_rays() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """各マス・各方向について、到達可能なマスを近い順に並べた表を作る。"""
    rays = []
    for square in SQUARE_LIST:
        per_direction = []
        for direction in Direction:
            dc, dr = direction.delta
            ray = []
            col, row = square.col + dc, square.row + dr
            while exists(col, row):
                ray.append(sq(col, row))
                col, row = col + dc, row + dr
            per_direction.append(tuple(ray))
        rays.append(tuple(per_direction))
    return tuple(rays)


# ROOK_RAYS[square.index][direction] → そのマスから direction 方向に並ぶマス（近い順）
ROOK_RAYS = _build_rays()

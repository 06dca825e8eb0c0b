"""Move representation and notation for Tablut.

手の表現と表記。

表記: "移動元-移動先"（例: "a1-a3"）。列は a〜i、行は 1〜9。
すべての手は飛車と同じ縦横の直進移動なので、移動元と移動先は
必ず同じ行か同じ列にある。
"""

from __future__ import annotations

from dataclasses import dataclass

from tablut_ai.game.tablut.square import Square, parse_square


@dataclass(frozen=True)
class Move:
    """A straight orthogonal move from from_sq to to_sq.

    イミュータブルな手。生成時に縦横の直進移動であることを検証する。
    """

    from_sq: Square
    to_sq: Square

    def __post_init__(self) -> None:
        if not self.from_sq.is_rook_move(self.to_sq):
            raise ValueError(f"Not a rook move: {self.from_sq}-{self.to_sq}")

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse "a1-a3" style notation.

        表記を解析して Move を返す。形式が不正なら ValueError。
        """
        parts = text.strip().split("-")
        if len(parts) != 2:
            raise ValueError(f"Malformed move: {text!r}")
        return cls(parse_square(parts[0]), parse_square(parts[1]))

    def __str__(self) -> str:
        return f"{self.from_sq}-{self.to_sq}"


def mv(from_sq: Square, to_sq: Square) -> Move | None:
    """Return the move from_sq-to_sq, or None if it is not a rook move."""
    if not from_sq.is_rook_move(to_sq):
        return None
    return Move(from_sq, to_sq)

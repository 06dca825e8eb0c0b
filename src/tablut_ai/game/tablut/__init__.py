"""Tablut — 9x9 asymmetric capture game (king escape vs. attackers)."""

from tablut_ai.game.tablut.board import THRONE, Board
from tablut_ai.game.tablut.display import board_to_str
from tablut_ai.game.tablut.moves import Move, mv
from tablut_ai.game.tablut.square import SQUARE_LIST, Square, parse_square, sq
from tablut_ai.game.tablut.types import SIZE, Direction, Piece

__all__ = [
    "Board",
    "Direction",
    "Move",
    "Piece",
    "SIZE",
    "SQUARE_LIST",
    "Square",
    "THRONE",
    "board_to_str",
    "mv",
    "parse_square",
    "sq",
]

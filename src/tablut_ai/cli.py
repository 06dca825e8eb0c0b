"""CLI entry point for tablut-ai — play Tablut in the terminal.

コマンドラインで動く Tablut 対局プログラム。
WHITE・BLACK それぞれに人間 / ミニマックスAI / ランダムAI を割り当てられる。

起動方法: `tablut-cli --white human --black ai`

人間の入力:
  "e3-c3" のような表記で手を指す
  "undo"  で直前の自分の手まで戻す
  "quit"  で対局を中断する
"""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable

from tablut_ai.engine.minimax import SearchConfig, find_move
from tablut_ai.engine.random_player import random_move
from tablut_ai.errors import TablutError
from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.display import SIDE_NAMES, board_to_str
from tablut_ai.game.tablut.moves import Move
from tablut_ai.game.tablut.types import Piece

logger = logging.getLogger(__name__)

PLAYER_TYPES = ("human", "ai", "random")

# 手を選ぶ関数。None は人間（入力待ち）を表す
MoveFn = Callable[[Board], Move]


def make_player(
    kind: str,
    config: SearchConfig | None = None,
    rng: random.Random | None = None,
) -> MoveFn | None:
    """Return the move function for a player type, or None for a human."""
    if kind == "human":
        return None
    if kind == "ai":
        return lambda board: find_move(board, config)
    if kind == "random":
        return lambda board: random_move(board, rng)
    raise ValueError(f"Unknown player type: {kind}")


def result_message(board: Board) -> str:
    """終局した盤面の結果を文字列にする。"""
    if board.winner is None:
        return "No winner."
    message = f"{SIDE_NAMES[board.winner]} wins."
    if board.repeated_position:
        message += " (repeated position)"
    return message


def run_game(
    board: Board,
    white: MoveFn | None,
    black: MoveFn | None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Piece | None:
    """Play board to completion and return the winner.

    対局を終局まで進めて勝者を返す。人間が中断した場合は None。

    ゲームの流れ:
    1. 盤面を表示
    2. 手番側が人間なら入力を求め、AI なら手を計算する
    3. 勝者が決まるまで繰り返す
    """
    players = {Piece.WHITE: white, Piece.BLACK: black}

    while board.winner is None:
        write(board_to_str(board))
        side = board.turn
        player = players[side]

        if player is not None:
            move = player(board)
            write(f"{SIDE_NAMES[side]} plays {move}")
            board.make_move(move)
            continue

        try:
            line = read(f"{SIDE_NAMES[side]} move: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            write("Game aborted.")
            return None

        if line == "quit":
            write("Game aborted.")
            return None
        if line == "undo":
            board.undo()
            # 相手が AI なら、自分の手番に戻るまでもう1手戻す
            if players[board.turn] is not None and board.move_count > 0:
                board.undo()
            continue

        try:
            board.make_move(Move.parse(line))
        except (ValueError, TablutError) as exc:
            write(f"Invalid move: {exc}")

    write(board_to_str(board))
    write(result_message(board))
    logger.info("Game over after %d moves: %s", board.move_count, result_message(board))
    return board.winner


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Tablut in the terminal")
    parser.add_argument("--white", choices=PLAYER_TYPES, default="human")
    parser.add_argument("--black", choices=PLAYER_TYPES, default="ai")
    parser.add_argument("--depth", type=int, default=None, help="Fixed AI search depth (default 2)")
    parser.add_argument("--limit", type=int, default=None, help="Move limit")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random player")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run a Tablut game from the command line."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = SearchConfig.fixed(args.depth) if args.depth is not None else SearchConfig()
    rng = random.Random(args.seed)

    board = Board()
    if args.limit is not None:
        board.set_move_limit(args.limit)

    print("=== Tablut ===")
    print("Black (B) attacks and moves first. White (W) defends the king (K).")
    print()
    run_game(
        board,
        white=make_player(args.white, config, rng),
        black=make_player(args.black, config, rng),
    )


if __name__ == "__main__":
    main()

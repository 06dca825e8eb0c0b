"""FastAPI web application for playing Tablut against the AI.

FastAPI を使った Tablut AI の Web API。
JSON で対局の開始・着手・待った・AI 同士の観戦ができる。

エンドポイント:
  POST /api/new-game            — 新規対局を開始（ゲームIDを返す）
  GET  /api/state/{id}          — 現在の局面情報を取得
  POST /api/move                — 人間が手を指す（相手が AI なら応答する）
  POST /api/auto-move/{id}      — 手番側の AI が1手指す
  POST /api/undo/{id}           — 直前の手を取り消す（AI の応手ごと戻す）
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from tablut_ai.cli import PLAYER_TYPES, MoveFn, make_player, result_message
from tablut_ai.engine.minimax import SearchConfig
from tablut_ai.errors import InvalidConfiguration, TablutError
from tablut_ai.game.tablut.board import Board
from tablut_ai.game.tablut.display import board_to_str
from tablut_ai.game.tablut.moves import Move
from tablut_ai.game.tablut.types import Piece

logger = logging.getLogger(__name__)

app = FastAPI(title="Tablut AI")

# 対局情報のインメモリストレージ（サーバ再起動で消える簡易実装）
_games: dict[str, dict[str, Any]] = {}


class NewGameRequest(BaseModel):
    """新規対局リクエストのスキーマ。"""

    white_type: str = "human"  # "human", "ai", "random"
    black_type: str = "ai"  # BLACK（先手）の種別
    depth: int | None = Field(default=None, ge=1, le=4)  # AI の探索深さ（None なら 2）
    move_limit: int | None = Field(default=None, ge=1)


class MoveRequest(BaseModel):
    """指し手リクエストのスキーマ。"""

    game_id: str  # 対局ID（/api/new-game で取得）
    move: str  # 手の表記（例: "e3-c3"）


def _state_to_dict(board: Board) -> dict[str, Any]:
    """Convert a board to a JSON-serializable dict.

    局面情報を JSON 形式（辞書）に変換する。
    """
    winner = board.winner
    return {
        "turn": board.turn.name,  # 手番（"WHITE" / "BLACK"）
        "winner": winner.name if winner is not None else None,
        "is_terminal": winner is not None,
        "repeated_position": board.repeated_position,
        "move_count": board.move_count,
        "king": str(board.king_position()) if board.king_position() else None,
        "legal_moves": [] if winner is not None else [str(m) for m in board.legal_moves(board.turn)],
        "encoded": board.encoded_board(),  # 82文字の局面エンコード
        "board_display": board_to_str(board),  # テキスト形式の盤面表示
        "result": result_message(board) if winner is not None else None,
    }


def _get_game(game_id: str) -> dict[str, Any]:
    game = _games.get(game_id)
    if game is None:
        raise HTTPException(404, "Game not found")
    return game


def _player_for(game: dict[str, Any], side: Piece) -> MoveFn | None:
    return game["players"][side]


@app.post("/api/new-game")
async def new_game(req: NewGameRequest) -> dict[str, Any]:
    """新規対局を開始する。

    対局IDと初期局面情報を返す。
    """
    for kind in (req.white_type, req.black_type):
        if kind not in PLAYER_TYPES:
            raise HTTPException(400, f"Unknown player type: {kind}")

    config = SearchConfig.fixed(req.depth) if req.depth is not None else SearchConfig()
    board = Board()
    if req.move_limit is not None:
        try:
            board.set_move_limit(req.move_limit)
        except InvalidConfiguration as exc:
            raise HTTPException(400, str(exc)) from exc

    game_id = str(uuid.uuid4())[:8]  # 短いIDを生成
    _games[game_id] = {
        "board": board,
        "players": {
            Piece.WHITE: make_player(req.white_type, config),
            Piece.BLACK: make_player(req.black_type, config),
        },
    }
    logger.info("New game %s: white=%s black=%s", game_id, req.white_type, req.black_type)

    return {"game_id": game_id, "state": _state_to_dict(board)}


@app.get("/api/state/{game_id}")
async def get_state(game_id: str) -> dict[str, Any]:
    """現在の局面情報を取得する。"""
    return _state_to_dict(_get_game(game_id)["board"])


@app.post("/api/move")
async def make_move(req: MoveRequest) -> dict[str, Any]:
    """人間の手を受け取り、相手が AI なら応答して次の局面を返す。

    処理フロー:
    1. 手の表記を解析して合法性を検証し、適用する
    2. 相手が AI で対局が続いていれば、AI が1手指す
    """
    game = _get_game(req.game_id)
    board: Board = game["board"]

    if board.winner is not None:
        raise HTTPException(400, "Game is already over")
    if _player_for(game, board.turn) is not None:
        raise HTTPException(400, "Current player is an AI; use /api/auto-move instead")

    try:
        board.make_move(Move.parse(req.move))
    except (ValueError, TablutError) as exc:
        raise HTTPException(400, f"Illegal move: {req.move}") from exc

    ai_move = None
    ai_fn = _player_for(game, board.turn)
    if board.winner is None and ai_fn is not None:
        ai_move = ai_fn(board)
        board.make_move(ai_move)

    if board.winner is not None:
        logger.info("Game %s over: %s", req.game_id, result_message(board))

    return {
        "state": _state_to_dict(board),
        "player_move": req.move,
        "ai_move": str(ai_move) if ai_move is not None else None,
    }


@app.post("/api/auto-move/{game_id}")
async def auto_move(game_id: str) -> dict[str, Any]:
    """手番側の AI が1手指す（AI 同士の観戦モード用）。"""
    game = _get_game(game_id)
    board: Board = game["board"]

    if board.winner is not None:
        raise HTTPException(400, "Game is already over")

    moved_by = board.turn
    fn = _player_for(game, moved_by)
    if fn is None:
        raise HTTPException(400, "Current player is human; use /api/move instead")

    move = fn(board)
    board.make_move(move)
    return {
        "state": _state_to_dict(board),
        "move": str(move),
        "moved_by": moved_by.name,
    }


@app.post("/api/undo/{game_id}")
async def undo(game_id: str) -> dict[str, Any]:
    """直前の手を取り消す。

    取り消した結果 AI の手番になる場合は、もう1手戻して人間の手番にする。
    """
    game = _get_game(game_id)
    board: Board = game["board"]
    board.undo()
    if _player_for(game, board.turn) is not None and board.move_count > 0:
        board.undo()
    return {"state": _state_to_dict(board)}


def main() -> None:
    """Run the web server.

    `tablut-web` または `python -m tablut_ai.web.app` で起動する。
    """
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()

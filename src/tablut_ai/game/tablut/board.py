"""Board state and rules engine for Tablut.

Tablut の盤面と対局ルール。

Board はミュータブル（変更可能）な対局状態で、合法手判定・着手・駒取り・
勝敗判定・千日手（同一局面の再出現）判定・待った（undo）を担当する。
探索エンジンは copy() で複製した盤面だけを変更し、対局中の盤面には触れない。

勝利条件:
1. 王が盤端に到達 → WHITE（守備側）の勝ち
2. 王が取られる → BLACK（攻撃側）の勝ち
3. 相手に合法手がない → 直前に指した側の勝ち
4. 手数制限に到達 → 直前に指した側の相手の勝ち
5. 同一局面が再出現 → その局面で手番の側の勝ち（1〜4 より優先）
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import overload

from tablut_ai.errors import IllegalMove, InvalidConfiguration
from tablut_ai.game.tablut.display import board_to_str
from tablut_ai.game.tablut.moves import Move, mv
from tablut_ai.game.tablut.square import ROOK_RAYS, SQUARE_LIST, Square, sq
from tablut_ai.game.tablut.types import NUM_SQUARES, Direction, Piece

# 玉座（中央のマス）とその上下左右の4マス
THRONE = sq(4, 4)
NTHRONE = sq(4, 5)
ETHRONE = sq(5, 4)
STHRONE = sq(4, 3)
WTHRONE = sq(3, 4)
THRONE_NEIGHBORS: tuple[Square, ...] = (NTHRONE, ETHRONE, STHRONE, WTHRONE)

# 攻撃側（BLACK）の初期配置: 各辺の中央に4枚ずつ（T字型）
INITIAL_ATTACKERS: tuple[Square, ...] = (
    sq(0, 3), sq(0, 4), sq(0, 5), sq(1, 4),
    sq(8, 3), sq(8, 4), sq(8, 5), sq(7, 4),
    sq(3, 0), sq(4, 0), sq(5, 0), sq(4, 1),
    sq(3, 8), sq(4, 8), sq(5, 8), sq(4, 7),
)

# 守備側（WHITE）の初期配置: 玉座の周囲に十字型
INITIAL_DEFENDERS: tuple[Square, ...] = (
    NTHRONE, ETHRONE, STHRONE, WTHRONE,
    sq(4, 6), sq(4, 2), sq(2, 4), sq(6, 4),
)


def _as_move(move: Move | Square, to_sq: Square | None) -> Move:
    """Normalize the (move) and (from_sq, to_sq) call forms to a Move."""
    if to_sq is None:
        if not isinstance(move, Move):
            raise TypeError(f"Expected a Move, got {type(move).__name__}")
        return move
    if not isinstance(move, Square) or not isinstance(to_sq, Square):
        raise TypeError("Expected two squares")
    found = mv(move, to_sq)
    if found is None:
        raise IllegalMove(f"Not a rook move: {move}-{to_sq}")
    return found


class Board:
    """Mutable Tablut game state.

    対局状態。81マスの駒配置・手番・手数・手数制限・勝者・局面履歴を持つ。

    局面履歴（history）には着手ごとに局面のエンコード文字列
    （手番1文字 + 81マス分の駒文字 = 82文字）を1つ追加する。
    この履歴は千日手判定と undo の両方に使う。
    """

    def __init__(self, model: Board | None = None) -> None:
        if model is None:
            self.init()
        else:
            self.copy_from(model)

    @classmethod
    def from_pieces(cls, pieces: dict[Square, Piece], turn: Piece = Piece.BLACK) -> Board:
        """Return a board holding only the given pieces.

        任意の局面（詰め問題やテスト用）を作る。指定されていないマスは空。
        """
        board = cls()
        board._cells = [Piece.EMPTY] * NUM_SQUARES
        for square, piece in pieces.items():
            board.put(piece, square)
        board._turn = turn
        board._base = board.encoded_board()
        return board

    def init(self) -> None:
        """Reset to the initial position.

        初期局面に戻す。手数・履歴・勝者・手数制限もすべてリセットする。
        """
        self._cells: list[Piece] = [Piece.EMPTY] * NUM_SQUARES
        self._cells[THRONE.index] = Piece.KING
        for square in INITIAL_DEFENDERS:
            self._cells[square.index] = Piece.WHITE
        for square in INITIAL_ATTACKERS:
            self._cells[square.index] = Piece.BLACK
        self._turn = Piece.BLACK  # 攻撃側が先手
        self._winner: Piece | None = None
        self._repeated = False
        self._move_count = 0
        self._move_limit: int | None = None
        self._history: list[str] = []
        # 千日手を起こした局面は undo 後も記録に残す
        self._retained: set[str] = set()
        # history の起点となる局面（最初の手を undo したときの復元先）
        self._base = self.encoded_board()

    def copy_from(self, model: Board) -> None:
        """Make this board an independent copy of model."""
        if model is self:
            return
        self._cells = list(model._cells)
        self._turn = model._turn
        self._winner = model._winner
        self._repeated = model._repeated
        self._move_count = model._move_count
        self._move_limit = model._move_limit
        self._history = list(model._history)
        self._retained = set(model._retained)
        self._base = model._base

    def copy(self) -> Board:
        """Return a new, independent copy of this board."""
        return Board(self)

    # ------------------------------------------------------------------
    # 状態の参照
    # ------------------------------------------------------------------

    @property
    def turn(self) -> Piece:
        """手番の陣営（WHITE または BLACK）。"""
        return self._turn

    @property
    def winner(self) -> Piece | None:
        """勝者（WHITE / BLACK）。対局中は None。着手時にのみ更新される。"""
        return self._winner

    @property
    def repeated_position(self) -> bool:
        """千日手（同一局面の再出現）で決着した局面なら True。"""
        return self._repeated

    @property
    def move_count(self) -> int:
        """初期局面から指された（undo されていない）手の数。"""
        return self._move_count

    @property
    def move_limit(self) -> int | None:
        return self._move_limit

    def set_move_limit(self, n: int) -> None:
        """Set the move limit to n.

        2 * n <= move_count の場合は設定できない（InvalidConfiguration）。
        """
        if 2 * n <= self._move_count:
            raise InvalidConfiguration(
                f"Cannot set move limit {n} after {self._move_count} moves"
            )
        self._move_limit = n

    def get(self, square: Square) -> Piece:
        """Return the contents of square."""
        return self._cells[square.index]

    def piece_at(self, col: int, row: int) -> Piece:
        """Return the contents of (col, row); OutOfBounds if off the board."""
        return self._cells[sq(col, row).index]

    def put(self, piece: Piece, square: Square) -> None:
        """Set square to piece (position setup only, bypasses the rules)."""
        self._cells[square.index] = piece

    def king_position(self) -> Square | None:
        """王のいるマス。王が取られていれば None。"""
        try:
            return SQUARE_LIST[self._cells.index(Piece.KING)]
        except ValueError:
            return None

    def piece_locations(self, side: Piece) -> list[Square]:
        """Return the squares holding pieces of side, in square-index order.

        side=WHITE なら王のマスも含む。
        """
        if side == Piece.EMPTY:
            raise ValueError("EMPTY is not a side")
        return [
            square
            for square, piece in zip(SQUARE_LIST, self._cells)
            if piece == side or (side == Piece.WHITE and piece == Piece.KING)
        ]

    # ------------------------------------------------------------------
    # 合法手
    # ------------------------------------------------------------------

    def is_unblocked_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Return True iff from_sq-to_sq is a rook move over empty squares.

        移動元以外の経路上のマス（移動先を含む）がすべて空であること。
        """
        if not from_sq.is_rook_move(to_sq):
            return False
        direction = from_sq.direction(to_sq)
        distance = max(abs(from_sq.row - to_sq.row), abs(from_sq.col - to_sq.col))
        for square in ROOK_RAYS[from_sq.index][direction][:distance]:
            if self._cells[square.index] != Piece.EMPTY:
                return False
        return True

    def is_legal_start(self, from_sq: Square) -> bool:
        """移動元のマスに手番側の駒があれば True。"""
        return self.get(from_sq).side == self._turn

    @overload
    def is_legal(self, move: Move) -> bool: ...

    @overload
    def is_legal(self, move: Square, to_sq: Square) -> bool: ...

    def is_legal(self, move: Move | Square, to_sq: Square | None = None) -> bool:
        """Return True iff move (or move-from, to_sq) is legal now.

        合法手の条件:
        1. 対局が終わっていない
        2. 移動元に手番側の駒がある
        3. 経路が空いている
        4. 王以外の駒は玉座に入れない
        """
        try:
            move = _as_move(move, to_sq)
        except IllegalMove:
            return False
        if self._winner is not None:
            return False
        if not self.is_legal_start(move.from_sq):
            return False
        if not self.is_unblocked_move(move.from_sq, move.to_sq):
            return False
        if self.get(move.from_sq) != Piece.KING:
            return move.to_sq != THRONE
        return True

    def _destinations(self, from_sq: Square) -> Iterator[Square]:
        """from_sq の駒が移動できるマスを方向ごとに近い順で返す。"""
        is_king = self._cells[from_sq.index] == Piece.KING
        for ray in ROOK_RAYS[from_sq.index]:
            for square in ray:
                if self._cells[square.index] != Piece.EMPTY:
                    break
                # 空の玉座は通過できるが、王以外は止まれない
                if square == THRONE and not is_king:
                    continue
                yield square

    def legal_moves(self, side: Piece) -> list[Move]:
        """Return all legal moves for side, ignoring whose turn it is.

        手番に関係なく side の合法手をすべて返す。
        並び順: 移動元のマス番号順、同じ移動元なら移動先のマス番号順。
        探索の同点処理がこの順序に依存するため、順序は固定である。
        """
        moves: list[Move] = []
        for from_sq in self.piece_locations(side):
            targets = sorted(self._destinations(from_sq), key=lambda s: s.index)
            moves.extend(Move(from_sq, to_sq) for to_sq in targets)
        return moves

    def has_move(self, side: Piece) -> bool:
        """side に合法手が1つでもあれば True。"""
        return any(
            next(self._destinations(from_sq), None) is not None
            for from_sq in self.piece_locations(side)
        )

    # ------------------------------------------------------------------
    # 着手
    # ------------------------------------------------------------------

    @overload
    def make_move(self, move: Move) -> None: ...

    @overload
    def make_move(self, move: Square, to_sq: Square) -> None: ...

    def make_move(self, move: Move | Square, to_sq: Square | None = None) -> None:
        """Apply a legal move, resolve captures and update the winner.

        手を適用する。合法でなければ盤面を一切変更せずに IllegalMove を送出する。

        処理の順序:
        1. 駒を移動
        2. 移動先の周囲で駒取りを判定
        3. 勝敗判定（王の脱出 → 王の捕獲 → 相手の合法手なし → 手数制限）
        4. 手数を進め、手番を交代（勝敗が決まった手も1手として数える）
        5. 千日手判定（3 の結果を上書きする）
        """
        move = _as_move(move, to_sq)
        if not self.is_legal(move):
            raise IllegalMove(f"Illegal move: {move}")

        mover = self._turn
        self._cells[move.to_sq.index] = self._cells[move.from_sq.index]
        self._cells[move.from_sq.index] = Piece.EMPTY
        self._capture_around(move.to_sq, mover)

        king = self.king_position()
        if king is not None and king.is_edge():
            self._winner = Piece.WHITE
        elif king is None:
            self._winner = Piece.BLACK
        elif not self.has_move(mover.opponent):
            self._winner = mover
        elif self._move_limit is not None and self._move_count + 1 >= self._move_limit:
            self._winner = mover.opponent

        self._move_count += 1
        self._turn = mover.opponent
        self._check_repeated()

    def _capture_around(self, to_sq: Square, mover: Piece) -> None:
        """Capture every enemy piece flanked by the piece that moved to to_sq.

        移動先から4方向それぞれについて、隣のマス（mid）と
        2つ先のマス（other）で挟み取りを判定する。
        """
        for direction in Direction:
            ray = ROOK_RAYS[to_sq.index][direction]
            if len(ray) < 2:
                continue  # 2マス先が盤外
            mid, other = ray[0], ray[1]
            target = self._cells[mid.index]
            if target == mover.opponent:
                if (
                    self.get(other).side == mover
                    or (other == THRONE and self.get(THRONE) == Piece.EMPTY)
                    or (
                        mover == Piece.BLACK
                        and other == THRONE
                        and self.get(THRONE) == Piece.KING
                        and self._throne_white_hostile()
                    )
                ):
                    self._capture(to_sq, other)
            elif mover == Piece.BLACK and target == Piece.KING:
                if mid == THRONE or mid in THRONE_NEIGHBORS:
                    # 玉座とその隣では四方（玉座を除く）を囲まれたときだけ取られる
                    neighbors = [line[0] for line in ROOK_RAYS[mid.index]]
                    if all(
                        self.get(n) == Piece.BLACK for n in neighbors if n != THRONE
                    ):
                        self._capture(to_sq, other)
                elif self.get(other).side == Piece.BLACK:
                    self._capture(to_sq, other)

    def _throne_white_hostile(self) -> bool:
        """王のいる玉座が守備兵に対して敵として働くか。

        玉座の隣4マスのうち3マス以上が攻撃兵で埋まっていれば True。
        """
        return sum(self.get(s) == Piece.BLACK for s in THRONE_NEIGHBORS) >= 3

    def _capture(self, sq0: Square, sq2: Square) -> None:
        """sq0 と sq2 に挟まれたマスの駒を取り除く。"""
        self._cells[sq0.between(sq2).index] = Piece.EMPTY

    def _check_repeated(self) -> None:
        """Record the current position; a repeat ends the game.

        同じ局面（手番を含む）が再出現したら、その局面で手番の側を勝者とする。
        """
        encoded = self.encoded_board()
        if encoded in self._retained or encoded in self._history:
            self._repeated = True
            self._winner = self._turn
        self._history.append(encoded)

    # ------------------------------------------------------------------
    # 待った・履歴
    # ------------------------------------------------------------------

    def undo(self) -> None:
        """Undo one move. Has no effect on a board with no recorded moves.

        直前の手を取り消す。勝者と千日手フラグはリセットされる。
        千日手を起こした局面は記録に残し、同じ局面を再現すれば再び千日手になる。
        """
        if self._move_count == 0:
            return
        top = self._history.pop()
        if self._repeated:
            self._retained.add(top)
        # 元の出現が履歴から消えた記録は捨てる
        self._retained = {e for e in self._retained if e in self._history}
        self._restore(self._history[-1] if self._history else self._base)
        self._move_count -= 1
        self._winner = None
        self._repeated = False

    def clear_undo(self) -> None:
        """Forget the undo history; the position and winner are kept."""
        self._history.clear()
        self._retained.clear()
        self._move_count = 0
        self._base = self.encoded_board()

    def _restore(self, encoded: str) -> None:
        self._turn = Piece.from_char(encoded[0])
        self._cells = [Piece.from_char(c) for c in encoded[1:]]

    def encoded_board(self) -> str:
        """Return the 82-character position encoding.

        手番（"W" / "B"）+ 81マスの駒文字（マス番号順）。
        """
        return self._turn.char + "".join(piece.char for piece in self._cells)

    def __str__(self) -> str:
        return board_to_str(self)

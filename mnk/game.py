from __future__ import annotations
import logging
import random
import threading
from typing import Any, List, Optional, Tuple

from mnk.board import Board, Cell
from mnk.config import GameConfig, Mode, clamp_size, clamp_win_length, parse_mode
from mnk.rules import IN_PROGRESS, Result, Status, detect_result
from engine.worker import MoveRequest

logger = logging.getLogger(__name__)

FIRST_PLAYER = Cell.X


class GameController:
    """
    Owns one game: history of boards, the undo cursor, whose turn it is and
    the derived result. Human and computer moves both go through _apply, so they
    are validated the same way.

    While it is the computer's turn, requested or not, no human move is
    accepted. reset/undo/set_mode cancel the outstanding request
    and any late answer for it is thrown away.
    """

    def __init__(self, n: Any = None, k: Any = None, mode: Any = None,
                 human: Cell = Cell.X, seed: Optional[int] = None):
        self.config = GameConfig.from_raw(n, k, mode)
        self.human = human
        self.rng = random.Random(seed)
        self._lock = threading.RLock()
        self._pending: Optional[MoveRequest] = None
        self._history: List[Board] = []
        self._cursor = 0
        self._to_move = FIRST_PLAYER
        self._result: Result = IN_PROGRESS
        self.reset()

    # ---- queries ----
    @property
    def n(self) -> int:
        return self.config.n

    @property
    def k(self) -> int:
        return self.config.k

    @property
    def mode(self) -> Mode:
        return self.config.mode

    @property
    def board(self) -> Board:
        return self._history[self._cursor]

    @property
    def history(self) -> Tuple[Board, ...]:
        return tuple(self._history[:self._cursor + 1])

    @property
    def ply(self) -> int:
        return self._cursor

    @property
    def to_move(self) -> Cell:
        return self._to_move

    @property
    def result(self) -> Result:
        return self._result

    @property
    def status(self) -> Status:
        return self._result.status

    @property
    def winner(self) -> Optional[Cell]:
        return self._result.winner

    @property
    def winning_line(self) -> Tuple[int, ...]:
        return self._result.line

    @property
    def is_over(self) -> bool:
        return self._result.terminal

    @property
    def can_undo(self) -> bool:
        return not self.is_over and self._cursor > 0

    @property
    def computer(self) -> Optional[Cell]:
        return None if self.mode is Mode.HUMAN else self.human.opponent

    @property
    def is_ai_turn(self) -> bool:
        return not self.is_over and self.computer is self._to_move

    @property
    def ai_pending(self) -> bool:
        return self._pending is not None

    # ---- commands ----
    def reset(self, n: Any = None, k: Any = None) -> None:
        """New game. n/k default to the current size; they are clamped, never rejected."""
        with self._lock:
            self._cancel_pending()
            if n is not None or k is not None:
                size = clamp_size(n if n is not None else self.n)
                win = clamp_win_length(k, size)
                self.config = GameConfig(size, win, self.mode)
            self._history = [Board(self.n)]
            self._cursor = 0
            self._to_move = FIRST_PLAYER
            self._result = IN_PROGRESS
            logger.debug("new game n=%d k=%d mode=%s", self.n, self.k, self.mode.value)

    def set_mode(self, mode: Any) -> None:
        with self._lock:
            self._cancel_pending()
            self.config = GameConfig(self.n, self.k, parse_mode(mode))

    def apply_move(self, index: int) -> bool:
        """Human move. False (and nothing changes) if the move is not allowed right now."""
        with self._lock:
            if self._pending is not None or self.is_ai_turn:
                logger.debug("move %s ignored, it is the computer's turn", index)
                return False
            return self._apply(index)

    def undo(self) -> bool:
        with self._lock:
            if not self.can_undo:
                return False
            self._cancel_pending()
            self._cursor -= 1
            self._to_move = self._to_move.opponent
            # only a non-terminal position can be undone into, so the result stays IN_PROGRESS
            self._result = IN_PROGRESS
            logger.debug("undo to ply %d", self._cursor)
            return True

    # ---- computer moves ----
    def request_ai_move(self) -> Optional[MoveRequest]:
        """Hand out the one outstanding computer move, or None if it is not the computer's turn."""
        with self._lock:
            if self._pending is not None or not self.is_ai_turn:
                return None
            self._pending = MoveRequest(self.board, self.k, self._to_move, self.mode, self._cursor)
            return self._pending

    def resolve_ai_move(self, request: MoveRequest, index: Optional[int]) -> bool:
        with self._lock:
            if request is not self._pending or request.cancelled:
                logger.debug("stale computer move %s for ply %d discarded", index, request.ply)
                return False
            self._pending = None
            if index is None:
                return False
            return self._apply(index)

    def play_ai_turn(self) -> bool:
        """Compute and play the computer's move on the calling thread."""
        request = self.request_ai_move()
        if request is None:
            return False
        return self.resolve_ai_move(request, request.run(self.rng))

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel.set()
            self._pending = None

    def _apply(self, index: int) -> bool:
        if self.is_over or not isinstance(index, int) or not self.board.is_empty_at(index):
            logger.debug("illegal move %r at ply %d", index, self._cursor)
            return False
        mark = self._to_move
        new_board = self.board.with_move(index, mark)
        del self._history[self._cursor + 1:]
        self._history.append(new_board)
        self._cursor += 1
        self._result = detect_result(new_board, self.k, index)
        if not self._result.terminal:
            self._to_move = mark.opponent
        logger.debug("%s plays %d (ply %d) -> %s", mark.symbol, index, self._cursor, self._result.status.value)
        return True

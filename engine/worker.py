from __future__ import annotations
import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from mnk.board import Board, Cell
from mnk.config import Mode
from engine.policy import SearchCancelled, choose_move

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class MoveRequest:
    """One pending computer move: a frozen snapshot of what the AI should answer."""
    board: Board
    k: int
    player: Cell
    mode: Mode
    ply: int
    cancel: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def run(self, rng: Optional[random.Random] = None) -> Optional[int]:
        return choose_move(self.mode, self.board, self.k, self.player, rng=rng, cancel=self.cancel)


class MoveWorker:
    """
    Runs MoveRequests on daemon threads and reports (request, move) to on_result.
    on_result is called from the worker thread; a GUI should hop back onto its
    own thread before touching widgets. Cancelled requests are dropped silently;
    a search that crashes is reported as move None.
    """

    def __init__(self, on_result: Callable[[MoveRequest, Optional[int]], None],
                 rng: Optional[random.Random] = None):
        self.on_result = on_result
        self.rng = rng
        self._thread: Optional[threading.Thread] = None

    @property
    def busy(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, request: MoveRequest) -> None:
        # a superseded job keeps running until its next cancel check, then exits
        self._thread = threading.Thread(target=self._run, args=(request,), daemon=True)
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        th = self._thread
        if th is not None:
            th.join(timeout)

    def _run(self, request: MoveRequest) -> None:
        try:
            move = request.run(self.rng)
        except SearchCancelled:
            logger.debug("search for ply %d cancelled", request.ply)
            return
        except Exception:
            # report "no move" so the game does not stay stuck waiting on this request
            logger.exception("move search for ply %d failed", request.ply)
            move = None
        if request.cancelled:
            logger.debug("discarding move for ply %d, request was cancelled", request.ply)
            return
        self.on_result(request, move)

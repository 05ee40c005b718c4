from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from mnk.board import Board, Cell, IllegalMove

# Fixed order: horizontal, vertical, diagonal \, anti-diagonal /
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Status(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Result:
    status: Status
    winner: Optional[Cell] = None
    line: Tuple[int, ...] = ()

    @property
    def terminal(self) -> bool:
        return self.status is not Status.IN_PROGRESS


IN_PROGRESS = Result(Status.IN_PROGRESS)
DRAW = Result(Status.DRAW)


def check_win(b: Board, k: int, last_index: Optional[int]) -> Optional[Tuple[Cell, Tuple[int, ...]]]:
    """
    Did the mark at last_index complete k in a row? Returns (mark, line) or None.
    Only the lines through last_index are walked, so this is O(k) per direction.
    """
    if last_index is None:
        return None
    if not b.in_bounds(last_index):
        raise IllegalMove(f"cell {last_index} is off the board")
    player = b.cells[last_index]
    if player is Cell.EMPTY:
        return None

    n = b.n
    r, c = divmod(last_index, n)
    g = b.cells
    for dr, dc in DIRECTIONS:
        forward = []
        for step in range(1, k):
            nr, nc = r + dr*step, c + dc*step
            if not (0 <= nr < n and 0 <= nc < n) or g[nr*n + nc] is not player:
                break
            forward.append(nr*n + nc)
        backward = []
        for step in range(1, k):
            nr, nc = r - dr*step, c - dc*step
            if not (0 <= nr < n and 0 <= nc < n) or g[nr*n + nc] is not player:
                break
            backward.append(nr*n + nc)

        line = backward[::-1] + [last_index] + forward
        # at most k-1 cells on either side, so every window holds last_index
        for s in range(len(line) - k + 1):
            window = line[s:s + k]
            if all(g[i] is player for i in window):
                return player, tuple(window)
    return None


def is_draw(b: Board) -> bool:
    """Board full. Only meaningful after check_win has come back empty."""
    return b.is_full()


def detect_result(b: Board, k: int, last_index: Optional[int]) -> Result:
    win = check_win(b, k, last_index)
    if win is not None:
        mark, line = win
        return Result(Status.WON, mark, line)
    if is_draw(b):
        return DRAW
    return IN_PROGRESS

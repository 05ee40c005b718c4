from __future__ import annotations
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

MIN_SIZE, MAX_SIZE = 3, 8
DEFAULT_SIZE = 3
MIN_WIN = 3


class Cell(IntEnum):
    EMPTY = 0
    X = 1    # moves first
    O = -1

    @property
    def opponent(self) -> "Cell":
        if self is Cell.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Cell(-self)

    @property
    def symbol(self) -> str:
        return SYMBOLS[self]


SYMBOLS = {Cell.EMPTY: ".", Cell.X: "X", Cell.O: "O"}
_PARSE = {".": Cell.EMPTY, "-": Cell.EMPTY, " ": Cell.EMPTY, "X": Cell.X, "O": Cell.O}


class IllegalMove(ValueError):
    """Raised when a mark is placed on an occupied or nonexistent cell."""


class Board:
    """
    Square N x N m,n,k board, stored row-major (index = row*N + col).
    The game keeps boards copy-on-write (with_move); the search mutates a private
    copy in place with place/clear.
    """

    __slots__ = ("n", "cells", "moves_played")

    def __init__(self, n: int = DEFAULT_SIZE, cells: Optional[Iterable[Cell]] = None):
        if not isinstance(n, int) or not MIN_SIZE <= n <= MAX_SIZE:
            raise ValueError(f"board size must be in [{MIN_SIZE}, {MAX_SIZE}], got {n!r}")
        self.n = n
        if cells is None:
            self.cells: List[Cell] = [Cell.EMPTY] * (n * n)
        else:
            self.cells = list(cells)
            if len(self.cells) != n * n:
                raise ValueError(f"expected {n * n} cells, got {len(self.cells)}")
            for v in self.cells:
                if not isinstance(v, Cell):
                    raise ValueError(f"invalid cell value {v!r}")
        self.moves_played = sum(1 for v in self.cells if v is not Cell.EMPTY)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from strings like ["X.O", ".X.", "..O"]."""
        n = len(rows)
        cells = []
        for row in rows:
            if len(row) != n:
                raise ValueError(f"row {row!r} is not {n} wide")
            for ch in row.upper():
                if ch not in _PARSE:
                    raise ValueError(f"invalid cell symbol {ch!r}")
                cells.append(_PARSE[ch])
        return cls(n, cells)

    def copy(self) -> "Board":
        b = Board.__new__(Board)
        b.n = self.n
        b.cells = self.cells[:]
        b.moves_played = self.moves_played
        return b

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.n == other.n and self.cells == other.cells

    def __repr__(self) -> str:
        rows = ["".join(SYMBOLS[v] for v in self.cells[r*self.n:(r+1)*self.n]) for r in range(self.n)]
        return f"Board({rows!r})"

    def index(self, row: int, col: int) -> int:
        return row * self.n + col

    def row_col(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.n)

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self.cells)

    def is_empty_at(self, index: int) -> bool:
        return self.in_bounds(index) and self.cells[index] is Cell.EMPTY

    def empty_cells(self) -> List[int]:
        return [i for i, v in enumerate(self.cells) if v is Cell.EMPTY]

    def is_full(self) -> bool:
        return self.moves_played >= len(self.cells)

    def is_empty(self) -> bool:
        return self.moves_played == 0

    # ---- mutation ----
    def place(self, index: int, mark: Cell) -> None:
        """Set an empty cell in place. Used by the search (mutate, recurse, clear)."""
        if mark is Cell.EMPTY:
            raise IllegalMove("cannot place EMPTY")
        if not self.in_bounds(index):
            raise IllegalMove(f"cell {index} is off the board")
        if self.cells[index] is not Cell.EMPTY:
            raise IllegalMove(f"cell {index} is occupied")
        self.cells[index] = mark
        self.moves_played += 1

    def clear(self, index: int) -> None:
        if self.cells[index] is Cell.EMPTY:
            raise IllegalMove(f"cell {index} is already empty")
        self.cells[index] = Cell.EMPTY
        self.moves_played -= 1

    def with_move(self, index: int, mark: Cell) -> "Board":
        """Return a new board with mark at index; self is left untouched."""
        b = self.copy()
        b.place(index, mark)
        return b

    # ---- Heuristic evaluation (for Minimax) ----
    def evaluate_heuristic(self, for_player: Cell) -> int:
        """
        Centre control only: each own mark earns max(0, 2N - manhattan distance to
        the centre), each opponent mark costs the same. No line counting.
        |score| <= 2 * N**3, which stays far below the search's win threshold.
        """
        n = self.n
        center = (n - 1) / 2
        opp = for_player.opponent
        score = 0
        for i, v in enumerate(self.cells):
            if v is Cell.EMPTY:
                continue
            r, c = divmod(i, n)
            # on even N both offsets end in .5, so the sum is whole
            weight = int(max(0, 2 * n - (abs(r - center) + abs(c - center))))
            if v is for_player:
                score += weight
            elif v is opp:
                score -= weight
        return score

    def printable(self) -> str:
        n = self.n
        return "\n".join(
            " ".join(SYMBOLS[self.cells[r*n + c]] for c in range(n)) for r in range(n)
        )

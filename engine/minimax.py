from __future__ import annotations
from typing import List

from mnk.board import Board, Cell
from mnk.config import Mode
from mnk.rules import check_win

INF = 10**9
# Anything at or past this is a forced result, never a heuristic score.
# Board.evaluate_heuristic stays within 2*N**3 <= 1024, so the two never overlap.
WIN_SCORE = 10_000

BASE_DEPTH = 2


def search_depth(n: int, mode: Mode) -> int:
    depth = BASE_DEPTH
    if n <= 4:
        depth = 4
    if n >= 6:
        depth = 1
    return depth if mode is Mode.HARD else min(depth, 2)


def neighbour_moves(b: Board) -> List[int]:
    """Empty cells touching (Chebyshev 1) an occupied cell; every empty cell on an empty board."""
    empties = b.empty_cells()
    if b.is_empty():
        return empties
    n = b.n
    g = b.cells
    near = []
    for idx in empties:
        r, c = divmod(idx, n)
        found = False
        for rr in range(max(0, r-1), min(n, r+2)):
            for cc in range(max(0, c-1), min(n, c+2)):
                if g[rr*n + cc] is not Cell.EMPTY:
                    found = True
                    break
            if found:
                break
        if found:
            near.append(idx)
    return near or empties


def _minimax(b: Board, k: int, player: Cell, depth: int, maximizing: bool) -> int:
    if depth == 0 or b.is_full():
        return b.evaluate_heuristic(player)

    if maximizing:
        # only our own ply is pruned to the neighbourhood, the reply is searched in full
        best = -INF
        for m in neighbour_moves(b):
            b.place(m, player)
            if check_win(b, k, m):
                score = WIN_SCORE + depth
            else:
                score = _minimax(b, k, player, depth-1, False)
            b.clear(m)
            if score > best:
                best = score
            if best >= WIN_SCORE:
                break
        return best

    opp = player.opponent
    best = INF
    for m in b.empty_cells():
        b.place(m, opp)
        if check_win(b, k, m):
            score = -(WIN_SCORE + depth)
        else:
            score = _minimax(b, k, player, depth-1, True)
        b.clear(m)
        if score < best:
            best = score
        if best <= -WIN_SCORE:
            break
    return best


def search(b: Board, k: int, player: Cell, depth: int, maximizing: bool) -> int:
    """
    Depth-limited minimax score of b from player's point of view.
    maximizing=True means it is player's turn to move on b.
    The caller's board is never touched; recursion mutates one private copy.
    """
    return _minimax(b.copy(), k, player, depth, maximizing)

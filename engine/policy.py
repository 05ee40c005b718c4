from __future__ import annotations
import logging
import random
import threading
from typing import Optional

from mnk.board import Board, Cell
from mnk.config import Mode
from mnk.rules import check_win
from engine.minimax import INF, WIN_SCORE, search, search_depth

logger = logging.getLogger(__name__)


class SearchCancelled(Exception):
    """The move computation was abandoned (game reset, undo or mode change)."""


def winning_move(b: Board, k: int, mark: Cell) -> Optional[int]:
    """First empty cell, in board order, where mark completes k in a row."""
    for m in b.empty_cells():
        b.place(m, mark)
        won = check_win(b, k, m) is not None
        b.clear(m)
        if won:
            return m
    return None


def find_tactic(b: Board, k: int, player: Cell) -> Optional[int]:
    """Immediate win if there is one anywhere, else the first forced block."""
    scratch = b.copy()
    move = winning_move(scratch, k, player)
    if move is not None:
        logger.debug("tactic: %s wins at %d", player.symbol, move)
        return move
    move = winning_move(scratch, k, player.opponent)
    if move is not None:
        logger.debug("tactic: %s blocks at %d", player.symbol, move)
    return move


def choose_move(mode: Mode, b: Board, k: int, player: Cell,
                rng: Optional[random.Random] = None,
                cancel: Optional[threading.Event] = None) -> Optional[int]:
    """
    Pick a cell for player. None only when the board is full.
    Ties between equal search scores are broken by the shuffle drawn from rng,
    so a seeded rng makes the choice reproducible.
    """
    rng = rng or random.Random()
    empties = b.empty_cells()
    if not empties:
        return None

    move = find_tactic(b, k, player)
    if move is not None:
        return move

    if mode is Mode.EASY:
        return rng.choice(empties)

    depth = search_depth(b.n, mode)
    candidates = empties[:]
    rng.shuffle(candidates)
    logger.debug("searching %d candidates at depth %d (mode=%s)", len(candidates), depth, mode.value)

    scratch = b.copy()
    best_move, best_score = candidates[0], -INF
    for m in candidates:
        if cancel is not None and cancel.is_set():
            raise SearchCancelled()
        scratch.place(m, player)
        score = search(scratch, k, player, depth, False)
        scratch.clear(m)
        if score > best_score:
            best_score, best_move = score, m
        if best_score >= WIN_SCORE:
            break
    logger.debug("best move %d score %d", best_move, best_score)
    return best_move

"""
Computer-vs-computer games from the command line.
- Both sides pick moves with engine.policy.choose_move
- Each finished game is printed with its result, then a tally
Handy for checking that a difficulty setting behaves on a given N/K.
"""
from __future__ import annotations
import argparse, logging, random
from collections import Counter
from typing import List, Optional, Tuple

from mnk.board import Board, Cell
from mnk.config import GameConfig, Mode, parse_mode
from mnk.rules import Result, Status, detect_result, IN_PROGRESS
from engine.policy import choose_move

logger = logging.getLogger(__name__)


def self_play_game(cfg: GameConfig, mode_x: Mode, mode_o: Mode,
                   rng: Optional[random.Random] = None) -> Tuple[Board, Result, List[int]]:
    rng = rng or random.Random()
    b = Board(cfg.n)
    player = Cell.X
    result = IN_PROGRESS
    moves = []
    while not result.terminal:
        mode = mode_x if player is Cell.X else mode_o
        move = choose_move(mode, b, cfg.k, player, rng=rng)
        if move is None:
            break
        b = b.with_move(move, player)
        moves.append(move)
        result = detect_result(b, cfg.k, move)
        logger.debug("ply %d: %s -> %d", len(moves), player.symbol, move)
        player = player.opponent
    return b, result, moves


def describe(result: Result) -> str:
    if result.status is Status.WON:
        return f"{result.winner.symbol} wins on {list(result.line)}"
    if result.status is Status.DRAW:
        return "draw"
    return "unfinished"


def run(args) -> Counter:
    cfg = GameConfig.from_raw(args.size, args.win)
    mode_x, mode_o = parse_mode(args.mode_x), parse_mode(args.mode_o)
    if Mode.HUMAN in (mode_x, mode_o):
        raise SystemExit("self-play needs a computer difficulty for both sides")
    rng = random.Random(args.seed)
    tally = Counter()
    for g in range(args.games):
        b, result, moves = self_play_game(cfg, mode_x, mode_o, rng)
        key = result.winner.symbol if result.status is Status.WON else "draw"
        tally[key] += 1
        print(f"[game {g+1}/{args.games}] {len(moves)} plies, {describe(result)}")
        if not args.quiet:
            print(b.printable())
    print(f"N={cfg.n} K={cfg.k} X={mode_x.value} O={mode_o.value}: "
          f"X {tally['X']}  O {tally['O']}  draws {tally['draw']}")
    return tally


def main(argv=None):
    ap = argparse.ArgumentParser(description="m,n,k self-play")
    ap.add_argument("--size", type=str, default="3", help="board side, clamped to [3, 8]")
    ap.add_argument("--win", type=str, default=None, help="marks in a row to win, clamped to [3, size]")
    ap.add_argument("--games", type=int, default=10)
    ap.add_argument("--mode-x", type=str, default="hard", help="easy / medium / hard")
    ap.add_argument("--mode-o", type=str, default="hard", help="easy / medium / hard")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--quiet", action="store_true", help="do not print final boards")
    ap.add_argument("--verbose", action="store_true", help="log every move")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(args)

if __name__ == "__main__":
    main()

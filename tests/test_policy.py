import random
import threading
import unittest
from collections import Counter

from mnk.board import Board, Cell
from mnk.config import GameConfig, Mode
from mnk.rules import Status
from engine.policy import SearchCancelled, choose_move, find_tactic
from engine.selfplay import self_play_game

ALL_MODES = (Mode.EASY, Mode.MEDIUM, Mode.HARD)


class TestTactics(unittest.TestCase):
    def test_takes_the_immediate_win_in_every_mode(self) -> None:
        b = Board.from_rows(["XX.", "OO.", "..."])
        for mode in ALL_MODES:
            self.assertEqual(choose_move(mode, b, 3, Cell.X, rng=random.Random(1)), 2)

    def test_win_beats_an_earlier_block(self) -> None:
        # O could block at 2 first in board order, but winning at 5 comes first
        b = Board.from_rows(["XX.", "OO.", "X.."])
        self.assertEqual(find_tactic(b, 3, Cell.O), 5)
        for mode in ALL_MODES:
            self.assertEqual(choose_move(mode, b, 3, Cell.O, rng=random.Random(2)), 5)

    def test_blocks_when_it_cannot_win(self) -> None:
        b = Board.from_rows(["XX.", ".O.", "..."])
        for mode in ALL_MODES:
            self.assertEqual(choose_move(mode, b, 3, Cell.O, rng=random.Random(3)), 2)

    def test_first_block_in_board_order(self) -> None:
        # X threatens both 2 and 6; the scan returns 2
        b = Board.from_rows(["XX.", "X..", "..O"])
        self.assertEqual(find_tactic(b, 3, Cell.O), 2)

    def test_no_tactic(self) -> None:
        self.assertIsNone(find_tactic(Board(3), 3, Cell.X))
        self.assertIsNone(find_tactic(Board.from_rows(["X..", ".O.", "..."]), 3, Cell.X))

    def test_tactics_on_a_larger_board(self) -> None:
        b = Board(6)
        for i in (14, 15, 16):
            b = b.with_move(i, Cell.X)
        for i in (0, 1, 35):
            b = b.with_move(i, Cell.O)
        move = choose_move(Mode.HARD, b, 4, Cell.X, rng=random.Random(4))
        self.assertIn(move, (12, 13, 17))
        self.assertIn(choose_move(Mode.EASY, b, 4, Cell.O, rng=random.Random(4)), (13, 17))


class TestChooseMove(unittest.TestCase):
    def test_full_board_has_no_move(self) -> None:
        b = Board.from_rows(["XOX", "XOO", "OXX"])
        for mode in ALL_MODES:
            self.assertIsNone(choose_move(mode, b, 3, Cell.X))

    def test_never_picks_an_occupied_cell(self) -> None:
        rng = random.Random(21)
        for _ in range(40):
            n = rng.choice([3, 4, 5, 6])
            k = rng.randint(3, n)
            cells = [Cell.EMPTY] * (n * n)
            for i in rng.sample(range(n * n), rng.randint(0, n * n - 1)):
                cells[i] = rng.choice([Cell.X, Cell.O])
            b = Board(n, cells)
            # hard on 3x3/4x4 searches 4 plies; keep those positions small
            modes = ALL_MODES if n in (3, 6) else (Mode.EASY, Mode.MEDIUM)
            for mode in modes:
                move = choose_move(mode, b, k, rng.choice([Cell.X, Cell.O]), rng=rng)
                self.assertIsNotNone(move)
                self.assertIs(b[move], Cell.EMPTY)

    def test_seeded_choice_is_reproducible(self) -> None:
        b = Board(5).with_move(12, Cell.X)
        a = choose_move(Mode.MEDIUM, b, 4, Cell.O, rng=random.Random(99))
        c = choose_move(Mode.MEDIUM, b, 4, Cell.O, rng=random.Random(99))
        self.assertEqual(a, c)

    def test_easy_is_uniform(self) -> None:
        rng = random.Random(1234)
        b = Board(3)
        counts = Counter(choose_move(Mode.EASY, b, 3, Cell.X, rng=rng) for _ in range(9000))
        self.assertEqual(set(counts), set(range(9)))
        for cell, hits in counts.items():
            # 1000 expected, sd ~30
            self.assertLess(abs(hits - 1000), 150, (cell, hits))

    def test_cancel_stops_the_search(self) -> None:
        cancel = threading.Event()
        cancel.set()
        b = Board.from_rows(["X..", ".O.", "..."])
        with self.assertRaises(SearchCancelled):
            choose_move(Mode.MEDIUM, b, 3, Cell.X, rng=random.Random(0), cancel=cancel)

    def test_cancel_between_candidates(self) -> None:
        class CancelAfterFirst(threading.Event):
            def __init__(self):
                super().__init__()
                self.checks = 0

            def is_set(self):
                self.checks += 1
                return self.checks > 1

        cancel = CancelAfterFirst()
        b = Board.from_rows(["X..", ".O.", "..."])
        with self.assertRaises(SearchCancelled):
            choose_move(Mode.MEDIUM, b, 3, Cell.X, rng=random.Random(0), cancel=cancel)
        self.assertEqual(cancel.checks, 2)

    def test_hard_self_play_on_3x3_finishes(self) -> None:
        cfg = GameConfig.from_raw(3, 3)
        for seed in range(3):
            b, result, moves = self_play_game(cfg, Mode.HARD, Mode.HARD, random.Random(seed))
            self.assertTrue(result.terminal)
            self.assertLessEqual(len(moves), 9)
            self.assertEqual(len(set(moves)), len(moves))
            if result.status is Status.WON:
                self.assertEqual(len(result.line), 3)
                self.assertIn(moves[-1], result.line)
            else:
                self.assertIs(result.status, Status.DRAW)
                self.assertTrue(b.is_full())


if __name__ == "__main__":
    unittest.main()

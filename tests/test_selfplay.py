import contextlib
import io
import random
import unittest

from mnk.config import GameConfig, Mode
from mnk.rules import Status
from engine.selfplay import describe, main, self_play_game


class TestSelfPlay(unittest.TestCase):
    def test_easy_games_on_a_bigger_board_end(self) -> None:
        cfg = GameConfig.from_raw(5, 4)
        rng = random.Random(17)
        for _ in range(5):
            b, result, moves = self_play_game(cfg, Mode.EASY, Mode.EASY, rng)
            self.assertTrue(result.terminal)
            self.assertLessEqual(len(moves), 25)
            if result.status is Status.DRAW:
                self.assertTrue(b.is_full())
                self.assertEqual(describe(result), "draw")
            else:
                self.assertEqual(len(result.line), 4)

    def test_main_prints_a_tally(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(["--games", "2", "--seed", "3", "--quiet", "--mode-x", "easy", "--mode-o", "medium"])
        text = out.getvalue()
        self.assertIn("[game 1/2]", text)
        self.assertIn("[game 2/2]", text)
        self.assertIn("N=3 K=3 X=easy O=medium", text)

    def test_human_mode_is_refused(self) -> None:
        with self.assertRaises(SystemExit):
            main(["--games", "1", "--mode-x", "human"])


if __name__ == "__main__":
    unittest.main()

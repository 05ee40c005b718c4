import unittest

from mnk.config import GameConfig, Mode, clamp_size, clamp_win_length, parse_mode


class TestClamping(unittest.TestCase):
    def test_clamp_size(self) -> None:
        cases = [
            (None, 3), ("abc", 3), ("", 3), (0, 3), (1, 3), (-4, 3), (True, 3),
            (5, 5), ("6", 6), (" 7 ", 7), (4.7, 4), ("4.7", 4),
            (9, 8), (100, 8), (float("inf"), 3), (float("nan"), 3),
        ]
        for value, expected in cases:
            self.assertEqual(clamp_size(value), expected, value)

    def test_clamp_win_length(self) -> None:
        cases = [
            ((None, 5), 5), (("x", 4), 4), ((0, 6), 6), ((2, 5), 3),
            ((7, 5), 5), ((4, 5), 4), (("3", 8), 3),
        ]
        for (value, n), expected in cases:
            self.assertEqual(clamp_win_length(value, n), expected, (value, n))

    def test_parse_mode(self) -> None:
        self.assertIs(parse_mode("HARD"), Mode.HARD)
        self.assertIs(parse_mode(" easy "), Mode.EASY)
        self.assertIs(parse_mode(Mode.MEDIUM), Mode.MEDIUM)
        self.assertIs(parse_mode("bogus"), Mode.HUMAN)
        self.assertIs(parse_mode(None), Mode.HUMAN)

    def test_game_config(self) -> None:
        self.assertEqual(GameConfig(), GameConfig(3, 3, Mode.HUMAN))
        cfg = GameConfig.from_raw("10", "12", "easy")
        self.assertEqual(cfg, GameConfig(8, 8, Mode.EASY))
        self.assertEqual(cfg.as_dict(), {"size": 8, "win": 8, "mode": "easy"})
        self.assertEqual(GameConfig.from_raw(5), GameConfig(5, 5, Mode.HUMAN))


if __name__ == "__main__":
    unittest.main()

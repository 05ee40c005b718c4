from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from mnk.board import DEFAULT_SIZE, MAX_SIZE, MIN_SIZE, MIN_WIN


class Mode(str, Enum):
    HUMAN = "human"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DEFAULT_MODE = Mode.HUMAN


def _as_int(value: Any) -> Optional[int]:
    # "5", 5, 5.9 and "5.9" all read as 5; anything else (or 0) counts as missing
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            parsed = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
    return parsed or None


def clamp_size(value: Any) -> int:
    """Board side in [3, 8]; 3 when missing or not a number."""
    n = _as_int(value)
    if n is None:
        n = DEFAULT_SIZE
    return max(MIN_SIZE, min(MAX_SIZE, n))


def clamp_win_length(value: Any, n: int) -> int:
    """Win length in [3, n]; n when missing or not a number."""
    k = _as_int(value)
    if k is None:
        k = n
    return max(MIN_WIN, min(n, k))


def parse_mode(value: Any) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        return DEFAULT_MODE


@dataclass(frozen=True)
class GameConfig:
    n: int = DEFAULT_SIZE
    k: int = DEFAULT_SIZE
    mode: Mode = DEFAULT_MODE

    @classmethod
    def from_raw(cls, n: Any = None, k: Any = None, mode: Any = None) -> "GameConfig":
        size = clamp_size(n)
        return cls(size, clamp_win_length(k, size), parse_mode(mode))

    def as_dict(self) -> dict:
        return {"size": self.n, "win": self.k, "mode": self.mode.value}

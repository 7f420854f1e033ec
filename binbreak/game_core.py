from __future__ import annotations

import random
from collections.abc import MutableSequence
from dataclasses import dataclass
from enum import Enum

from .bit_modes import BitMode


class Intent(str, Enum):
    """Pre-classified player input. See keybinds.py for the key mapping."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    EXIT = "exit"
    TOGGLE_ANIMATION = "toggle_animation"
    SKIP = "skip"
    HARD_EXIT = "hard_exit"


class GameState(str, Enum):
    ACTIVE = "active"
    RESULT = "result"
    PENDING_GAME_OVER = "pending_game_over"
    GAME_OVER = "game_over"


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """View model for the playing screen (pure data)."""

    bit_mode: BitMode
    state: GameState
    score: int
    streak: int
    max_streak: int
    rounds_played: int
    lives: int
    max_lives: int
    hearts: str
    prev_high_score: int
    new_high_score: bool
    binary_string: str
    candidates: tuple[int, ...]
    selected: int | None
    target_value: int
    outcome: Outcome | None
    points_awarded: int
    time_total_s: float
    time_remaining_s: float


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randrange(self, stop: int) -> int:
        return self._rng.randrange(stop)

    def shuffle(self, seq: MutableSequence[int]) -> None:
        self._rng.shuffle(seq)


def new_seed() -> int:
    return random.SystemRandom().randrange(1, 2**31)

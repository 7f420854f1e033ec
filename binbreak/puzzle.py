from __future__ import annotations

from .bit_modes import BitMode
from .game_core import Outcome, SeededRng

MIN_TIME_S = 5.0
STREAK_TIME_PENALTY_S = 0.5


def time_budget_s(bit_mode: BitMode, streak: int) -> float:
    """Seconds allowed for one puzzle; shrinks with the streak, floored at 5 s."""

    return max(MIN_TIME_S, bit_mode.base_time_s - STREAK_TIME_PENALTY_S * streak)


class Puzzle:
    """One question: a target bit pattern and the candidates shown for it.

    Candidates hold scaled values for unsigned modes and raw bit patterns
    for signed (two's complement) modes, so ``target_value`` is always one of
    ``candidates`` and ``target_raw * scale_factor == target_value``.
    """

    def __init__(self, bit_mode: BitMode, streak: int, rng: SeededRng) -> None:
        if streak < 0:
            raise ValueError("streak must be >= 0")

        self._bit_mode = bit_mode
        scale = 1 if bit_mode.is_signed else bit_mode.scale_factor

        drawn: list[int] = []
        # Rejection sampling: redraw on duplicate.
        while len(drawn) < bit_mode.suggestion_count:
            value = rng.randrange(bit_mode.value_count) * scale
            if value not in drawn:
                drawn.append(value)

        self._target_value = drawn[0]
        self._target_raw = drawn[0] // scale
        rng.shuffle(drawn)
        self._candidates = tuple(drawn)

        self._selected: int | None = self._candidates[0]
        self._time_total = time_budget_s(bit_mode, streak)
        self._time_remaining = self._time_total
        self._outcome: Outcome | None = None
        self.points_awarded = 0
        # The first delta after creation carries state-transition overhead.
        self._skip_first_dt = True

    @property
    def bit_mode(self) -> BitMode:
        return self._bit_mode

    @property
    def target_value(self) -> int:
        return self._target_value

    @property
    def target_raw(self) -> int:
        return self._target_raw

    @property
    def candidates(self) -> tuple[int, ...]:
        return self._candidates

    @property
    def selected(self) -> int | None:
        return self._selected

    @property
    def time_total(self) -> float:
        return self._time_total

    @property
    def time_remaining(self) -> float:
        return self._time_remaining

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    def is_correct(self, candidate: int) -> bool:
        return candidate == self._target_value

    def binary_string(self) -> str:
        width = self._bit_mode.bit_width
        bits = format(self._target_raw, f"0{width}b")
        return " ".join(bits[i : i + 4] for i in range(0, len(bits), 4))

    def advance(self, dt: float) -> None:
        if self._outcome is not None:
            return
        if self._skip_first_dt:
            self._skip_first_dt = False
            return

        self._time_remaining = max(0.0, self._time_remaining - max(0.0, float(dt)))
        if self._time_remaining <= 0.0:
            self._outcome = Outcome.TIMEOUT

    def select_next(self) -> None:
        self._shift_selection(1)

    def select_previous(self) -> None:
        self._shift_selection(-1)

    def submit(self) -> Outcome | None:
        """Lock in the selected candidate. Returns the outcome, or None if unchanged."""

        if self._outcome is not None or self._selected is None:
            return None
        self._outcome = Outcome.CORRECT if self.is_correct(self._selected) else Outcome.INCORRECT
        return self._outcome

    def skip(self) -> None:
        # A skip is scored as a miss, same as running out of time.
        if self._outcome is None:
            self._outcome = Outcome.TIMEOUT

    def _shift_selection(self, delta: int) -> None:
        if self._outcome is not None:
            return
        if self._selected is None:
            if delta > 0:
                self._selected = self._candidates[0]
            return
        idx = self._candidates.index(self._selected)
        self._selected = self._candidates[(idx + delta) % len(self._candidates)]

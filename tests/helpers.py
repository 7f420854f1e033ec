from __future__ import annotations

from binbreak.game_core import Intent
from binbreak.session import Session


class StubRng:
    """Hands out a fixed sequence of raw draws; shuffle reverses in place."""

    def __init__(self, draws: list[int]) -> None:
        self._draws = list(draws)

    def randrange(self, stop: int) -> int:
        value = self._draws.pop(0)
        assert 0 <= value < stop
        return value

    def shuffle(self, seq: list[int]) -> None:
        seq.reverse()


def answer(session: Session, *, correct: bool) -> None:
    """Move the selection onto (or off) the target and confirm."""

    p = session.puzzle
    for _ in range(len(p.candidates)):
        if (p.selected == p.target_value) == correct:
            break
        session.handle_intent(Intent.RIGHT)
    session.handle_intent(Intent.SELECT)

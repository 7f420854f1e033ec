from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from binbreak.app import App, MenuState, PlayingState
from binbreak.bit_modes import EIGHT, Preferences
from binbreak.config import GameConfig
from binbreak.game_core import GameState, Intent, SeededRng
from binbreak.persistence import HighScoreStore
from binbreak.results import game_summary_from_snapshot
from binbreak.screens import StartMenu
from binbreak.session import Session

from .helpers import answer


@dataclass
class FakeClock:
    t: float = 0.0
    sleeps: list[float] = field(default_factory=list)

    def now(self) -> float:
        return self.t

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.t += seconds

    def advance(self, dt: float) -> None:
        self.t += dt


def test_headless_scripted_run_produces_expected_summary(tmp_path: Path) -> None:
    clock = FakeClock()
    store_path = tmp_path / "scores.txt"

    def factory(prefs: Preferences, menu: StartMenu) -> Session:
        return Session(menu.selected_mode(), high_scores=HighScoreStore(store_path), rng=SeededRng(555))

    app = App(clock=clock, config=GameConfig(high_scores_path=store_path), session_factory=factory)
    assert isinstance(app.state, MenuState)
    assert app.state.menu.selected_mode() is EIGHT

    app.handle_intent(Intent.SELECT)
    state = app.state
    assert isinstance(state, PlayingState)
    session = state.session

    # Two correct, then a timeout, then two misses.
    answer(session, correct=True)
    app.handle_intent(Intent.SELECT)
    answer(session, correct=True)
    app.handle_intent(Intent.SELECT)

    app.update(0.0)
    clock.advance(30.0)
    app.update(30.0)
    assert session.state is GameState.RESULT
    app.handle_intent(Intent.SELECT)

    answer(session, correct=False)
    app.handle_intent(Intent.SELECT)
    answer(session, correct=False)
    assert session.state is GameState.PENDING_GAME_OVER
    app.handle_intent(Intent.SELECT)
    assert session.state is GameState.GAME_OVER

    summary = game_summary_from_snapshot(session.snapshot())
    assert summary.final_score == 22
    assert summary.rounds_played == 5
    assert summary.max_streak == 2
    assert summary.lives == 0
    assert summary.new_high_score
    assert summary.prev_high_score == 0
    assert HighScoreStore(store_path).get(EIGHT.high_score_key) == 22

    # Esc from the summary returns to the menu with the same row selected.
    app.handle_intent(Intent.EXIT)
    app.update(0.0)
    assert isinstance(app.state, MenuState)
    assert app.state.menu.selected_index == 4


def test_second_game_sees_first_games_high_score(tmp_path: Path) -> None:
    store_path = tmp_path / "scores.txt"
    first = Session(EIGHT, high_scores=HighScoreStore(store_path), rng=SeededRng(1))
    answer(first, correct=True)

    second = Session(EIGHT, high_scores=HighScoreStore(store_path), rng=SeededRng(2))
    assert second.prev_high_score == 10
    answer(second, correct=True)
    assert not second.new_high_score_reached

from __future__ import annotations

import logging

from .bit_modes import BitMode
from .game_core import GameState, Intent, Outcome, SeededRng, SessionSnapshot
from .persistence import HighScoreStore
from .puzzle import Puzzle

logger = logging.getLogger(__name__)

BASE_POINTS = 10
STREAK_BONUS_POINTS = 2
LIFE_BONUS_EVERY = 5
STARTING_LIVES_CAP = 3


class Session:
    """Score, streak and lives for one play-through of a bit mode.

    State machine:
      ACTIVE -> RESULT -> ACTIVE (confirm deals the next puzzle)
      ACTIVE -> PENDING_GAME_OVER -> GAME_OVER (confirm reveals the summary)
      GAME_OVER -> ACTIVE (confirm restarts with fresh stats)

    Exit is not a state: it raises ``exit_intended`` for the caller to consume.
    """

    def __init__(
        self,
        bit_mode: BitMode,
        *,
        high_scores: HighScoreStore,
        rng: SeededRng,
        max_lives: int = 3,
    ) -> None:
        if max_lives < 1:
            raise ValueError("max_lives must be >= 1")

        self._bit_mode = bit_mode
        self._high_scores = high_scores
        self._rng = rng
        self._max_lives = int(max_lives)

        self._exit_intended = False
        self._reset()

    def _reset(self) -> None:
        self._score = 0
        self._streak = 0
        self._max_streak = 0
        self._rounds_played = 0
        self._lives = min(self._max_lives, STARTING_LIVES_CAP)
        self._state = GameState.ACTIVE
        self._prev_high_score = self._high_scores.get(self._bit_mode.high_score_key)
        self._new_high_score_reached = False
        self._deal_new_puzzle()

    @property
    def bit_mode(self) -> BitMode:
        return self._bit_mode

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def streak(self) -> int:
        return self._streak

    @property
    def max_streak(self) -> int:
        return self._max_streak

    @property
    def rounds_played(self) -> int:
        return self._rounds_played

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def max_lives(self) -> int:
        return self._max_lives

    @property
    def prev_high_score(self) -> int:
        return self._prev_high_score

    @property
    def new_high_score_reached(self) -> bool:
        return self._new_high_score_reached

    @property
    def exit_intended(self) -> bool:
        return self._exit_intended

    def is_timer_running(self) -> bool:
        return self._state is GameState.ACTIVE and self._puzzle.outcome is None

    def lives_hearts(self) -> str:
        full = min(self._lives, self._max_lives)
        return "♥" * full + "·" * (self._max_lives - full)

    def update(self, dt: float) -> None:
        if self._state is GameState.GAME_OVER:
            return
        self._puzzle.advance(dt)
        if self._puzzle.outcome is not None and not self._resolved:
            self.finalize_round()

    def finalize_round(self) -> None:
        outcome = self._puzzle.outcome
        if outcome is None or self._resolved:
            return

        self._rounds_played += 1
        if outcome is Outcome.CORRECT:
            self._streak += 1
            self._max_streak = max(self._max_streak, self._streak)
            points = BASE_POINTS + (self._streak - 1) * STREAK_BONUS_POINTS
            self._score += points
            if self._streak % LIFE_BONUS_EVERY == 0 and self._lives < self._max_lives:
                self._lives += 1
        else:
            self._streak = 0
            points = 0
            if self._lives > 0:
                self._lives -= 1
        self._puzzle.points_awarded = points

        key = self._bit_mode.high_score_key
        stored = self._high_scores.get(key)
        if self._score > stored:
            if not self._new_high_score_reached:
                self._prev_high_score = stored
                logger.info("New high score for %s: %d (was %d)", self._bit_mode.label, self._score, stored)
            self._high_scores.update(key, self._score)
            self._new_high_score_reached = True
            self._high_scores.save()

        # Summary waits for a confirm so the last answer stays visible.
        self._state = GameState.PENDING_GAME_OVER if self._lives == 0 else GameState.RESULT
        self._resolved = True

    def handle_intent(self, intent: Intent) -> None:
        if intent is Intent.EXIT:
            self._exit_intended = True
            return

        if self._state is GameState.GAME_OVER:
            if intent is Intent.SELECT:
                self._reset()
            return

        if self._puzzle.outcome is None:
            self._handle_unresolved(intent)
        else:
            self._handle_resolved(intent)

    def _handle_unresolved(self, intent: Intent) -> None:
        if intent is Intent.RIGHT:
            self._puzzle.select_next()
        elif intent is Intent.LEFT:
            self._puzzle.select_previous()
        elif intent is Intent.SELECT:
            if self._puzzle.submit() is not None:
                self.finalize_round()
        elif intent is Intent.SKIP:
            self._puzzle.skip()
            self.finalize_round()

    def _handle_resolved(self, intent: Intent) -> None:
        if intent is not Intent.SELECT:
            return
        if self._state is GameState.PENDING_GAME_OVER:
            self._state = GameState.GAME_OVER
        elif self._state is GameState.RESULT:
            self._deal_new_puzzle()
            self._state = GameState.ACTIVE

    def _deal_new_puzzle(self) -> None:
        self._puzzle = Puzzle(self._bit_mode, self._streak, self._rng)
        self._resolved = False

    def snapshot(self) -> SessionSnapshot:
        p = self._puzzle
        return SessionSnapshot(
            bit_mode=self._bit_mode,
            state=self._state,
            score=self._score,
            streak=self._streak,
            max_streak=self._max_streak,
            rounds_played=self._rounds_played,
            lives=self._lives,
            max_lives=self._max_lives,
            hearts=self.lives_hearts(),
            prev_high_score=self._prev_high_score,
            new_high_score=self._new_high_score_reached,
            binary_string=p.binary_string(),
            candidates=p.candidates,
            selected=p.selected,
            target_value=p.target_value,
            outcome=p.outcome,
            points_awarded=p.points_awarded,
            time_total_s=p.time_total,
            time_remaining_s=p.time_remaining,
        )

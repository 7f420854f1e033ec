from __future__ import annotations

from dataclasses import dataclass

from .game_core import SessionSnapshot


@dataclass(frozen=True, slots=True)
class GameSummary:
    """End-of-game figures shown on the game-over panel."""

    final_score: int
    prev_high_score: int
    new_high_score: bool
    rounds_played: int
    max_streak: int
    lives: int

    def lines(self) -> list[tuple[str, str]]:
        """``(text, role)`` pairs; the role picks the colour when drawn."""

        out = [
            (f"Final Score: {self.final_score}", "score"),
            (f"Previous High: {self.prev_high_score}", "previous"),
            (f"Rounds Played: {self.rounds_played}", "rounds"),
            (f"Max Streak: {self.max_streak}", "streak"),
        ]
        if self.new_high_score:
            out.insert(1, ("NEW HIGH SCORE!", "new_high"))
        if self.lives == 0:
            out.append(("You lost all your lives.", "lost"))
        out.append(("Press Enter to restart or Esc to exit", "hint"))
        return out


def game_summary_from_snapshot(snap: SessionSnapshot) -> GameSummary:
    return GameSummary(
        final_score=int(snap.score),
        prev_high_score=int(snap.prev_high_score),
        new_high_score=bool(snap.new_high_score),
        rounds_played=int(snap.rounds_played),
        max_streak=int(snap.max_streak),
        lives=int(snap.lives),
    )

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

HIGH_SCORES_PATH_ENV = "BINBREAK_HIGHSCORES_PATH"
MAX_LIVES_ENV = "BINBREAK_MAX_LIVES"
LOG_LEVEL_ENV = "BINBREAK_LOG_LEVEL"

DEFAULT_HIGH_SCORES_FILE = "binbreak_highscores.txt"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Runtime settings for the game shell.

    ``target_frame_s`` is the fixed period of the frame driver (~30 FPS).
    ``max_lives`` caps the life counter; a session starts with
    ``min(max_lives, 3)`` lives.
    """

    max_lives: int = 3
    target_frame_s: float = 0.033
    window_size: tuple[int, int] = (960, 540)
    font_size: int = 20
    high_scores_path: Path = Path(DEFAULT_HIGH_SCORES_FILE)
    log_level: int = logging.WARNING

    def __post_init__(self) -> None:
        if self.max_lives < 1:
            raise ValueError("max_lives must be >= 1")
        if self.target_frame_s <= 0:
            raise ValueError("target_frame_s must be > 0")

    @classmethod
    def from_env(cls) -> "GameConfig":
        explicit = os.environ.get(HIGH_SCORES_PATH_ENV)
        path = Path(explicit).expanduser() if explicit else Path(DEFAULT_HIGH_SCORES_FILE)
        return cls(
            max_lives=_env_int(MAX_LIVES_ENV, 3, lo=1),
            high_scores_path=path,
            log_level=_env_log_level(LOG_LEVEL_ENV, logging.WARNING),
        )


def _env_int(name: str, fallback: int, *, lo: int) -> int:
    raw = os.environ.get(name, "").strip()
    if raw == "":
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= lo else fallback


def _env_log_level(name: str, fallback: int) -> int:
    raw = os.environ.get(name, "").strip().upper()
    if raw == "":
        return fallback
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else fallback

from __future__ import annotations

import logging
from pathlib import Path

from .bit_modes import HIGH_SCORE_KEYS
from .config import GameConfig

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Best score per bit mode, backed by a flat ``key=value`` text file.

    Reads never fail: a missing or unreadable file yields an empty store and
    malformed lines are skipped. Writes are best-effort; on failure the
    in-memory scores stay authoritative for the rest of the session.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._scores: dict[int, int] = {}
        self._load()

    @classmethod
    def default_path(cls) -> Path:
        return GameConfig.from_env().high_scores_path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read high scores from %s: %s", self._path, exc)
            return

        for lineno, line in enumerate(text.splitlines(), start=1):
            key, sep, value = line.partition("=")
            if sep == "":
                logger.debug("Skipping malformed high score line %d: %r", lineno, line)
                continue
            try:
                mode_key = int(key.strip())
                score = int(value.strip())
            except ValueError:
                logger.debug("Skipping malformed high score line %d: %r", lineno, line)
                continue
            if score < 0:
                continue
            self._scores[mode_key] = score

    def save(self) -> bool:
        """Write the catalog keys in file order. Returns False if the write failed."""

        data = "".join(f"{k}={self.get(k)}\n" for k in HIGH_SCORE_KEYS)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(data, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.warning("Could not save high scores to %s: %s", self._path, exc)
            return False
        return True

    def get(self, key: int) -> int:
        return self._scores.get(int(key), 0)

    def update(self, key: int, score: int) -> None:
        if score < 0:
            raise ValueError("score must be >= 0")
        self._scores[int(key)] = int(score)

    def as_dict(self) -> dict[int, int]:
        return dict(self._scores)

from __future__ import annotations

from pathlib import Path

import pytest

from binbreak.persistence import HighScoreStore


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "highscores.txt"


@pytest.fixture
def store(store_path: Path) -> HighScoreStore:
    return HighScoreStore(store_path)

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from binbreak.bit_modes import HIGH_SCORE_KEYS
from binbreak.persistence import HighScoreStore


def test_missing_file_gives_empty_store(store: HighScoreStore) -> None:
    assert store.as_dict() == {}
    assert store.get(8) == 0
    assert not store.path.exists()


def test_save_then_reload(store_path: Path) -> None:
    store = HighScoreStore(store_path)
    store.update(8, 120)
    store.update(16, 7)
    assert store.save() is True

    again = HighScoreStore(store_path)
    assert again.get(8) == 120
    assert again.get(16) == 7
    assert again.get(4) == 0


def test_saved_file_lists_only_catalog_modes_in_order(store: HighScoreStore) -> None:
    store.update(12, 3)
    store.update(99, 1)
    store.save()

    lines = store.path.read_text(encoding="utf-8").splitlines()
    assert lines == [f"{k}={3 if k == 12 else 0}" for k in HIGH_SCORE_KEYS]
    assert not store.path.with_suffix(".txt.tmp").exists()


def test_malformed_lines_are_skipped(store_path: Path) -> None:
    store_path.write_text("4=10\ngarbage\n8=abc\n=5\n12 = 7\n-1\n16=-3\n", encoding="utf-8")
    store = HighScoreStore(store_path)
    assert store.as_dict() == {4: 10, 12: 7}


def test_undecodable_file_is_treated_as_empty(store_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    store_path.write_bytes(b"\xff\xfe4=\x80\n")
    with caplog.at_level(logging.WARNING, logger="binbreak.persistence"):
        store = HighScoreStore(store_path)
    assert store.as_dict() == {}
    assert "Could not read high scores" in caplog.text


def test_failed_save_is_logged_and_reported(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = HighScoreStore(blocker / "scores.txt")
    store.update(4, 5)

    with caplog.at_level(logging.WARNING, logger="binbreak.persistence"):
        assert store.save() is False
    assert "Could not save high scores" in caplog.text
    assert store.get(4) == 5


def test_negative_update_is_rejected(store: HighScoreStore) -> None:
    with pytest.raises(ValueError):
        store.update(4, -1)


def test_default_path_follows_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "nested" / "hs.txt"
    monkeypatch.setenv("BINBREAK_HIGHSCORES_PATH", str(target))
    assert HighScoreStore.default_path() == target

    monkeypatch.delenv("BINBREAK_HIGHSCORES_PATH")
    assert HighScoreStore.default_path() == Path("binbreak_highscores.txt")


def test_save_creates_parent_directories(tmp_path: Path) -> None:
    store = HighScoreStore(tmp_path / "a" / "b" / "hs.txt")
    store.update(8, 1)
    assert store.save()
    assert (tmp_path / "a" / "b" / "hs.txt").read_text(encoding="utf-8").startswith("4=0\n")

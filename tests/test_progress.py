"""Tests for session history persistence."""

from pianohero.models import SessionStats
from pianohero.progress import ScoreStore


def test_empty_store_has_no_best(tmp_path):
    store = ScoreStore(tmp_path / "scores.db")
    assert store.best_score() == 0
    assert store.top_scores() == []
    store.close()


def test_best_and_top_scores(tmp_path):
    store = ScoreStore(tmp_path / "scores.db")
    for score in (300, 1200, 700):
        assert store.save_session(SessionStats(score=score, final_level=1))
    assert store.best_score() == 1200
    top = store.top_scores(limit=2)
    assert [row["score"] for row in top] == [1200, 700]
    assert top[0]["final_level"] == 1
    store.close()


def test_save_after_close_reports_failure(tmp_path):
    store = ScoreStore(tmp_path / "scores.db")
    store.close()
    assert store.save_session(SessionStats(score=10)) is False

from datetime import date, timedelta

import pytest

from models.responses import ReadinessScore, ScoreBreakdown
from models.schemas.score_history import ScoreHistoryEntry
from services.score_history import analyze_progress, upsert_history

TODAY = date(2026, 5, 1)


def _score(overall: int) -> ReadinessScore:
    return ReadinessScore(overall=overall, breakdown=ScoreBreakdown(interview_score=overall))


def _history(scores: list[int], start: date = date(2026, 1, 1)) -> list[ScoreHistoryEntry]:
    return [
        ScoreHistoryEntry(date=(start + timedelta(days=i)).isoformat(), score=score)
        for i, score in enumerate(scores)
    ]


class TestUpsertHistory:
    def test_first_entry(self):
        history = upsert_history(_score(40), [], today=TODAY)
        assert len(history) == 1
        assert history[0].date == "2026-05-01"
        assert history[0].score == 40
        assert history[0].breakdown.interview_score == 40

    def test_same_date_replaces(self):
        history = upsert_history(_score(40), [], today=TODAY)
        history = upsert_history(_score(55), history, today=TODAY)
        assert len(history) == 1
        assert history[0].score == 55

    def test_new_date_appends_in_order(self):
        history = upsert_history(_score(40), [], today=TODAY)
        history = upsert_history(_score(45), history, today=TODAY + timedelta(days=1))
        assert [e.date for e in history] == ["2026-05-01", "2026-05-02"]

    def test_capped_at_ninety(self):
        history: list[ScoreHistoryEntry] = []
        for offset in range(120):
            history = upsert_history(_score(offset % 100), history, today=TODAY + timedelta(days=offset))
        assert len(history) == 90
        dates = [e.date for e in history]
        assert dates == sorted(set(dates))
        assert dates[-1] == (TODAY + timedelta(days=119)).isoformat()

    def test_custom_cap(self):
        history = upsert_history(_score(10), _history([1, 2, 3]), today=TODAY, max_entries=2)
        assert [e.score for e in history] == [3, 10]

    def test_zero_cap_keeps_nothing(self):
        assert upsert_history(_score(10), _history([1, 2]), today=TODAY, max_entries=0) == []

    def test_unsorted_input_sorted(self):
        unsorted = list(reversed(_history([1, 2, 3])))
        history = upsert_history(_score(50), unsorted, today=TODAY)
        assert [e.score for e in history] == [1, 2, 3, 50]

    def test_backfilled_date_lands_in_order(self):
        existing = _history([1, 2], start=TODAY + timedelta(days=1))
        history = upsert_history(_score(50), existing, today=TODAY)
        assert [e.score for e in history] == [50, 1, 2]

    def test_input_not_mutated(self):
        existing = _history([1, 2])
        upsert_history(_score(50), existing, today=TODAY)
        assert len(existing) == 2


class TestAnalyzeProgress:
    def test_empty(self):
        progress = analyze_progress([])
        assert progress.progress == "stable"
        assert progress.recent_trend == "stable"
        assert progress.best_score == 0
        assert progress.avg_weekly_change == 0

    def test_single_entry(self):
        progress = analyze_progress(_history([42]))
        assert progress.best_score == 42
        assert progress.worst_score == 42
        assert progress.progress == "stable"

    def test_improving(self):
        progress = analyze_progress(_history([50, 60]))
        assert progress.progress == "improving"
        assert progress.recent_trend == "up"

    def test_declining(self):
        progress = analyze_progress(_history([60, 50]))
        assert progress.progress == "declining"
        assert progress.recent_trend == "down"

    def test_small_changes_stable(self):
        progress = analyze_progress(_history([50, 52]))
        assert progress.progress == "stable"
        assert progress.recent_trend == "stable"

    def test_weekly_change(self):
        progress = analyze_progress(_history(list(range(15))))
        assert progress.avg_weekly_change == pytest.approx(7.0)
        assert progress.best_score == 14
        assert progress.worst_score == 0

    def test_recent_window_is_last_thirty(self):
        progress = analyze_progress(_history([0] * 10 + [50] * 30))
        assert progress.progress == "improving"
        assert progress.recent_trend == "stable"

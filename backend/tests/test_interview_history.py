from datetime import datetime, timezone

from models.schemas.interview import InterviewAnalysis, InterviewRecord
from services.interview_history import (
    calculate_user_stats,
    completed_interviews,
    parse_timestamp,
    timed_interviews,
)


def _record(id: str, timestamp: str, score: float | None = None, duration: float = 0) -> InterviewRecord:
    analysis = InterviewAnalysis(overall_score=score) if score is not None else None
    return InterviewRecord(id=id, timestamp=timestamp, duration=duration, analysis_result=analysis)


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2026-05-01T09:30:00Z") == datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2026-05-01T09:30:00").tzinfo == timezone.utc

    def test_offset_kept(self):
        parsed = parse_timestamp("2026-05-01T18:30:00+09:00")
        assert parsed == datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)

    def test_unparseable(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None


def test_completed_interviews_sorted_oldest_first():
    interviews = [
        _record("b", "2026-05-03T00:00:00Z", 80),
        _record("pending", "2026-05-02T00:00:00Z"),
        _record("a", "2026-05-01T00:00:00Z", 70),
        _record("bad", "???", 50),
    ]
    assert [i.id for i in completed_interviews(interviews)] == ["bad", "a", "b"]


def test_timed_interviews_skip_bad_timestamps():
    interviews = [_record("a", "2026-05-02T00:00:00Z"), _record("bad", "???"), _record("b", "2026-05-01T00:00:00Z")]
    assert [i.id for _, i in timed_interviews(interviews)] == ["b", "a"]


class TestUserStats:
    def test_no_interviews(self):
        stats = calculate_user_stats([])
        assert stats.total_interviews == 0
        assert stats.average_score == 0
        assert stats.total_practice_time == 0

    def test_scores_from_completed_only(self):
        interviews = [
            _record("a", "2026-05-01T00:00:00Z", 70, duration=600),
            _record("b", "2026-05-02T00:00:00Z", 85, duration=900),
            _record("c", "2026-05-03T00:00:00Z", duration=300),
        ]
        stats = calculate_user_stats(interviews)
        assert stats.total_interviews == 3
        assert stats.average_score == 78
        assert stats.best_score == 85
        assert stats.total_practice_time == 30

    def test_pending_only(self):
        stats = calculate_user_stats([_record("a", "2026-05-01T00:00:00Z", duration=120)])
        assert stats.total_interviews == 1
        assert stats.best_score == 0
        assert stats.total_practice_time == 2

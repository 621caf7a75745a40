"""Tests for the store-backed readiness refresh and record helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from models.schemas.es_content import ESContent
from models.schemas.interview import InterviewAnalysis, InterviewRecord
from models.schemas.profile import UserProfile
from services import readiness_pipeline, storage, user_records

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def _interview(n: int, score: float, days_ago: int) -> InterviewRecord:
    return InterviewRecord(
        id=f"iv{n}",
        user_id="u1",
        timestamp=(NOW - timedelta(days=days_ago)).isoformat(),
        duration=600,
        analysis_result=InterviewAnalysis(overall_score=score),
    )


class TestUserRecords:
    @pytest.mark.asyncio
    async def test_save_interview_upserts_by_id(self, store):
        await user_records.save_interview(store, "u1", _interview(0, 50, 2))
        await user_records.save_interview(store, "u1", _interview(1, 60, 1))
        await user_records.save_interview(store, "u1", _interview(0, 90, 2))
        interviews = await user_records.load_interviews(store, "u1")
        assert len(interviews) == 2
        assert {i.id: i.analysis_result.overall_score for i in interviews} == {"iv0": 90, "iv1": 60}

    @pytest.mark.asyncio
    async def test_invalid_records_skipped(self, store):
        valid = _interview(0, 50, 1).model_dump(mode="json")
        await store.set(storage.interviews_key("u1"), [{"duration": "long"}, valid])
        interviews = await user_records.load_interviews(store, "u1")
        assert [i.id for i in interviews] == ["iv0"]

    @pytest.mark.asyncio
    async def test_non_list_value_ignored(self, store):
        await store.set(storage.interviews_key("u1"), {"oops": True})
        assert await user_records.load_interviews(store, "u1") == []

    @pytest.mark.asyncio
    async def test_invalid_profile_is_none(self, store):
        await store.set(storage.profile_key("u1"), {"graduation_year": "soon"})
        assert await user_records.load_profile(store, "u1") is None

    @pytest.mark.asyncio
    async def test_profile_round_trip(self, store):
        await user_records.save_profile(store, "u1", UserProfile(name="山田"))
        profile = await user_records.load_profile(store, "u1")
        assert profile.name == "山田"

    @pytest.mark.asyncio
    async def test_save_draft_keeps_order(self, store):
        await user_records.save_draft(store, "u1", ESContent(id="es_a", content="一"))
        await user_records.save_draft(store, "u1", ESContent(id="es_b", content="二"))
        await user_records.save_draft(store, "u1", ESContent(id="es_a", content="三"))
        drafts = await user_records.load_drafts(store, "u1")
        assert [(d.id, d.content) for d in drafts] == [("es_a", "三"), ("es_b", "二")]

    @pytest.mark.asyncio
    async def test_users_isolated(self, store):
        await user_records.save_interview(store, "u1", _interview(0, 50, 1))
        assert await user_records.load_interviews(store, "u2") == []


class TestRefreshReadiness:
    @pytest.mark.asyncio
    async def test_empty_user(self, store):
        score, history = await readiness_pipeline.refresh_readiness(store, "u1", now=NOW)
        assert score.overall == 0
        assert score.level == "beginner"
        assert len(history) == 1
        assert history[0].date == "2026-05-01"

    @pytest.mark.asyncio
    async def test_persists_score_and_history(self, store):
        for n, score in enumerate([60, 70, 80, 90, 95]):
            await user_records.save_interview(store, "u1", _interview(n, score, days_ago=(4 - n) * 4))

        score, _ = await readiness_pipeline.refresh_readiness(store, "u1", days_active=21, now=NOW)
        assert score.breakdown.interview_score == 89

        stored = await store.get(storage.readiness_score_key("u1"))
        assert stored["overall"] == score.overall
        history = await user_records.load_history(store, "u1")
        assert [e.score for e in history] == [score.overall]

    @pytest.mark.asyncio
    async def test_same_day_refresh_collapses(self, store):
        await readiness_pipeline.refresh_readiness(store, "u1", now=NOW)
        await user_records.save_interview(store, "u1", _interview(0, 80, 0))
        score, history = await readiness_pipeline.refresh_readiness(store, "u1", now=NOW)
        assert len(history) == 1
        assert history[0].score == score.overall

    @pytest.mark.asyncio
    async def test_trend_against_previous_day(self, store):
        await readiness_pipeline.refresh_readiness(store, "u1", now=NOW - timedelta(days=1))
        for n, value in enumerate([80, 85, 90]):
            await user_records.save_interview(store, "u1", _interview(n, value, days_ago=n * 4))
        score, history = await readiness_pipeline.refresh_readiness(store, "u1", now=NOW)
        assert len(history) == 2
        assert score.trend == "up"
        assert score.weekly_change == score.overall - history[0].score

    @pytest.mark.asyncio
    async def test_progress_and_stats(self, store):
        await user_records.save_interview(store, "u1", _interview(0, 70, 1))
        await user_records.save_interview(store, "u1", _interview(1, 90, 0))
        await readiness_pipeline.refresh_readiness(store, "u1", now=NOW)

        progress = await readiness_pipeline.get_progress(store, "u1")
        assert progress.best_score == progress.worst_score

        stats = await readiness_pipeline.get_user_stats(store, "u1")
        assert stats.total_interviews == 2
        assert stats.average_score == 80
        assert stats.total_practice_time == 20

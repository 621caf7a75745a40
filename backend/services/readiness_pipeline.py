"""Readiness refresh: load inputs, recompute, upsert history, persist.

Flow:
    store ─┬─ interviews
           ├─ assessment          ─> calculate_readiness() ─> ReadinessScore
           ├─ profile                          │
           └─ score history ───────────────────┴─> upsert_history() ─> store

The read-modify-write of the history is not atomic. Two refreshes for
the same user racing each other resolve last-writer-wins.
"""

import asyncio
import logging
from datetime import datetime

from models.responses import ReadinessScore, ScoreProgress, UserStats
from models.schemas.score_history import ScoreHistoryEntry
from services import storage, user_records
from services.interview_history import as_utc, calculate_user_stats
from services.readiness_score import calculate_readiness
from services.score_history import analyze_progress, upsert_history
from services.storage import KeyValueStore

logger = logging.getLogger(__name__)


async def refresh_readiness(
    store: KeyValueStore,
    user_id: str,
    days_active: int | None = None,
    now: datetime | None = None,
) -> tuple[ReadinessScore, list[ScoreHistoryEntry]]:
    """Recompute the user's readiness score and record it in today's history slot."""
    now = as_utc(now)

    interviews, assessment, profile, history = await asyncio.gather(
        user_records.load_interviews(store, user_id),
        user_records.load_assessment(store, user_id),
        user_records.load_profile(store, user_id),
        user_records.load_history(store, user_id),
    )

    score = calculate_readiness(
        interviews,
        assessment=assessment,
        profile=profile,
        history=history,
        days_active=days_active,
        now=now,
    )
    updated_history = upsert_history(score, history, today=now.date())

    await asyncio.gather(
        store.set(storage.readiness_score_key(user_id), score.model_dump(mode="json")),
        user_records.save_history(store, user_id, updated_history),
    )

    logger.info(
        "Readiness for %s: overall=%d level=%s trend=%s",
        user_id, score.overall, score.level, score.trend,
    )
    return score, updated_history


async def get_progress(store: KeyValueStore, user_id: str) -> ScoreProgress:
    return analyze_progress(await user_records.load_history(store, user_id))


async def get_user_stats(store: KeyValueStore, user_id: str) -> UserStats:
    return calculate_user_stats(await user_records.load_interviews(store, user_id))

"""Day-keyed readiness history: upsert, retention and progress analysis."""

import logging
from datetime import date, datetime, timezone

from config import settings
from models.responses import ReadinessScore, ScoreProgress
from models.schemas.score_history import ScoreHistoryEntry

logger = logging.getLogger(__name__)

RECENT_WINDOW = 30
RECENT_TREND_THRESHOLD = 2
PROGRESS_THRESHOLD = 5
WEEK = 7


def upsert_history(
    score: ReadinessScore,
    history: list[ScoreHistoryEntry],
    today: date | None = None,
    max_entries: int | None = None,
) -> list[ScoreHistoryEntry]:
    """Record today's score, replacing any entry for the same date.

    Returns a new list sorted by date and trimmed to the most recent
    max_entries; the input list is left untouched.
    """
    today = today or datetime.now(timezone.utc).date()
    if max_entries is None:
        max_entries = settings.history_max_entries

    by_date = {entry.date: entry for entry in history}
    by_date[today.isoformat()] = ScoreHistoryEntry(
        date=today.isoformat(),
        score=score.overall,
        breakdown=score.breakdown,
    )

    ordered = [by_date[d] for d in sorted(by_date)]
    if len(ordered) > max_entries:
        logger.debug("Evicting %d history entries", len(ordered) - max_entries)
    return ordered[-max_entries:] if max_entries > 0 else []


def analyze_progress(history: list[ScoreHistoryEntry]) -> ScoreProgress:
    if not history:
        return ScoreProgress()

    scores = [entry.score for entry in history]
    best_score = max(scores)
    worst_score = min(scores)

    recent = scores[-RECENT_WINDOW:]
    if len(recent) < 2:
        return ScoreProgress(best_score=best_score, worst_score=worst_score)

    recent_change = recent[-1] - recent[0]
    if recent_change > RECENT_TREND_THRESHOLD:
        recent_trend = "up"
    elif recent_change < -RECENT_TREND_THRESHOLD:
        recent_trend = "down"
    else:
        recent_trend = "stable"

    total_change = scores[-1] - scores[0]
    if total_change > PROGRESS_THRESHOLD:
        progress = "improving"
    elif total_change < -PROGRESS_THRESHOLD:
        progress = "declining"
    else:
        progress = "stable"

    weekly_changes = [scores[i] - scores[i - WEEK] for i in range(WEEK, len(scores), WEEK)]
    avg_weekly_change = sum(weekly_changes) / len(weekly_changes) if weekly_changes else 0.0

    return ScoreProgress(
        progress=progress,
        avg_weekly_change=avg_weekly_change,
        best_score=best_score,
        worst_score=worst_score,
        recent_trend=recent_trend,
    )

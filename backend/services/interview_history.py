"""Helpers over a user's mock-interview records."""

import logging
from datetime import datetime, timezone

from models.responses import UserStats
from models.schemas.interview import InterviewRecord

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC. None if unparseable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable interview timestamp: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def as_utc(value: datetime | None = None) -> datetime:
    """Current time when None; naive datetimes are taken as UTC."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_key(interview: InterviewRecord) -> datetime:
    """Chronological key; records with bad timestamps sort as oldest."""
    return parse_timestamp(interview.timestamp) or _OLDEST


def completed_interviews(interviews: list[InterviewRecord]) -> list[InterviewRecord]:
    """Interviews that carry an analysis result, oldest first."""
    return sorted(
        (i for i in interviews if i.analysis_result is not None),
        key=sort_key,
    )


def timed_interviews(interviews: list[InterviewRecord]) -> list[tuple[datetime, InterviewRecord]]:
    """(timestamp, record) pairs for records with a usable timestamp, oldest first."""
    pairs = []
    for interview in interviews:
        ts = parse_timestamp(interview.timestamp)
        if ts is not None:
            pairs.append((ts, interview))
    pairs.sort(key=lambda pair: pair[0])
    return pairs


def overall_scores(interviews: list[InterviewRecord]) -> list[float]:
    return [i.analysis_result.overall_score for i in interviews if i.analysis_result is not None]


def calculate_user_stats(interviews: list[InterviewRecord]) -> UserStats:
    """Totals shown on the profile page."""
    total_practice_time = round(sum(i.duration for i in interviews) / 60)
    scores = overall_scores(interviews)
    if not scores:
        return UserStats(
            total_interviews=len(interviews),
            total_practice_time=total_practice_time,
        )
    return UserStats(
        total_interviews=len(interviews),
        average_score=round(sum(scores) / len(scores)),
        best_score=round(max(scores)),
        total_practice_time=total_practice_time,
    )

"""Readiness score aggregation.

Six domain scorers turn raw user signals into 0-100 scores, which are
combined with fixed weights into one composite score:

    interviews ──┬─ interview_score ────┐
                 ├─ activity_score ─────┤
                 ├─ consistency_score ──┤
                 └─ improvement_score ──┼─ weighted sum ─> ReadinessScore
    assessment ─── assessment_score ────┤
    profile ────── profile_score ───────┘

Missing inputs map to fixed defaults (0, or 50 for improvement). Weights
are not renormalized when a domain is missing, so users with incomplete
data score lower by construction.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from config import settings
from models.responses import ConfidenceInterval, ReadinessScore, ScoreBreakdown
from models.schemas.assessment import AssessmentResult
from models.schemas.interview import InterviewRecord
from models.schemas.profile import UserProfile
from models.schemas.score_history import ScoreHistoryEntry
from services.interview_history import (
    as_utc,
    completed_interviews,
    overall_scores,
    sort_key,
    timed_interviews,
)
from services.trait_assessment import TRAIT_AXES

logger = logging.getLogger(__name__)

# Combiner weights, keyed by ScoreBreakdown field; they sum to 1.0
DOMAIN_WEIGHTS = MappingProxyType({
    "interview_score": 0.35,
    "assessment_score": 0.25,
    "profile_score": 0.15,
    "activity_score": 0.10,
    "consistency_score": 0.10,
    "improvement_score": 0.05,
})


@dataclass(frozen=True)
class LevelTier:
    threshold: int
    level: str
    label: str
    description: str


# Ordered high to low; the first tier whose threshold is met wins.
LEVEL_TIERS: tuple[LevelTier, ...] = (
    LevelTier(90, "expert", "エキスパート", "企業から強く求められるレベル。複数内定が期待できます。"),
    LevelTier(80, "proficient", "上級者", "多くの企業で高い評価を得られるレベルです。"),
    LevelTier(70, "competent", "中級者", "基本的なスキルが身についており、内定獲得の可能性があります。"),
    LevelTier(50, "developing", "成長中", "改善の余地がありますが、着実に成長しています。"),
    LevelTier(0, "beginner", "初心者", "まずは基礎スキルの習得から始めましょう。"),
)

RECENT_INTERVIEW_COUNT = 5
EXPERIENCE_BONUS_PER_INTERVIEW = 2
EXPERIENCE_BONUS_CAP = 10

MATCH_BONUS_BASELINE = 50
MATCH_BONUS_FACTOR = 0.3

# Profile checklist points (out of 100)
PROFILE_IDENTITY_POINTS = 30
PROFILE_TARGETS_POINTS = 25
PROFILE_NARRATIVE_POINTS = 25
PROFILE_EXTRA_POINTS = 20

# (minimum, points) tiers, highest first
INTERVIEW_COUNT_TIERS: tuple[tuple[int, int], ...] = ((10, 40), (5, 30), (1, 20))
RECENT_COUNT_TIERS: tuple[tuple[int, int], ...] = ((5, 30), (3, 20), (1, 10))
DAYS_ACTIVE_TIERS: tuple[tuple[int, int], ...] = ((21, 30), (14, 20), (7, 10))

IDEAL_GAP_DAYS = 4
GAP_PENALTY_PER_DAY = 10
RECENT_GAP_COUNT = 3
RECENT_GAP_MAX_DAYS = 7
CADENCE_BONUS = 20

IMPROVEMENT_WINDOW = 3
IMPROVEMENT_DEFAULT = 50
IMPROVEMENT_FACTOR = 2

TREND_THRESHOLD = 3

CONFIDENCE_FACTOR = 0.15
CONFIDENCE_MIN_WIDTH = 5
CONFIDENCE_MAX_WIDTH = 15

STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 50

# (breakdown field, strength phrase, weakness phrase)
DOMAIN_FEEDBACK: tuple[tuple[str, str, str], ...] = (
    ("interview_score", "面接スキルが高い", "面接練習が不足"),
    ("assessment_score", "適性が明確", "自己分析が不足"),
    ("profile_score", "プロフィールが充実", "プロフィール情報が不足"),
    ("consistency_score", "継続的に取り組んでいる", "継続性に課題"),
)

SECONDS_PER_DAY = 60 * 60 * 24


def _clamp(value: float) -> int:
    return round(min(100, max(0, value)))


def _tier_points(value: float, tiers: tuple[tuple[int, int], ...]) -> int:
    for minimum, points in tiers:
        if value >= minimum:
            return points
    return 0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ---------------------------------------------------------------------------
# Domain scorers
# ---------------------------------------------------------------------------

def calculate_interview_score(interviews: list[InterviewRecord]) -> int:
    """Mean of the latest completed sessions plus an experience bonus."""
    completed = completed_interviews(interviews)
    if not completed:
        return 0

    recent = sorted(completed, key=sort_key, reverse=True)[:RECENT_INTERVIEW_COUNT]
    average = round(_mean(overall_scores(recent)))
    bonus = min(EXPERIENCE_BONUS_PER_INTERVIEW * len(interviews), EXPERIENCE_BONUS_CAP)
    return _clamp(average + bonus)


def calculate_assessment_score(assessment: AssessmentResult | None) -> int:
    if assessment is None:
        return 0

    average = _mean([getattr(assessment.scores, axis) for axis in TRAIT_AXES])
    best_match = assessment.career_suggestions[0].match_score if assessment.career_suggestions else 0
    bonus = (best_match - MATCH_BONUS_BASELINE) * MATCH_BONUS_FACTOR
    return _clamp(average + bonus)


def calculate_profile_score(profile: UserProfile | None) -> int:
    if profile is None:
        return 0

    score = 0.0
    if profile.name and profile.email and profile.university and profile.faculty:
        score += PROFILE_IDENTITY_POINTS
    if profile.target_industries and profile.target_positions:
        score += PROFILE_TARGETS_POINTS
    if profile.self_pr and profile.student_activities:
        score += PROFILE_NARRATIVE_POINTS

    extras = (
        bool(profile.work_experience),
        bool(profile.skills),
        bool(profile.qualifications),
        bool(profile.portfolio_url or profile.github_url),
    )
    score += PROFILE_EXTRA_POINTS * sum(extras) / len(extras)
    return _clamp(score)


def calculate_activity_score(
    interviews: list[InterviewRecord],
    days_active: int,
    now: datetime | None = None,
) -> int:
    now = as_utc(now)
    window_seconds = settings.recent_activity_days * SECONDS_PER_DAY
    recent_count = sum(
        1 for ts, _ in timed_interviews(interviews)
        if (now - ts).total_seconds() <= window_seconds
    )

    score = (
        _tier_points(len(interviews), INTERVIEW_COUNT_TIERS)
        + _tier_points(recent_count, RECENT_COUNT_TIERS)
        + _tier_points(days_active, DAYS_ACTIVE_TIERS)
    )
    return _clamp(score)


def calculate_consistency_score(interviews: list[InterviewRecord]) -> int:
    """Rewards a steady practice cadence of about IDEAL_GAP_DAYS between sessions."""
    timed = [(ts, i) for ts, i in timed_interviews(interviews) if i.analysis_result is not None]
    if len(timed) < 2:
        return 0

    gaps = [
        (later[0] - earlier[0]).total_seconds() / SECONDS_PER_DAY
        for earlier, later in zip(timed, timed[1:])
    ]
    gap_scores = [max(0.0, 100 - GAP_PENALTY_PER_DAY * abs(gap - IDEAL_GAP_DAYS)) for gap in gaps]
    score = _mean(gap_scores)
    if all(gap <= RECENT_GAP_MAX_DAYS for gap in gaps[-RECENT_GAP_COUNT:]):
        score += CADENCE_BONUS
    return _clamp(score)


def calculate_improvement_score(interviews: list[InterviewRecord]) -> int:
    completed = completed_interviews(interviews)
    if len(completed) < IMPROVEMENT_WINDOW:
        return IMPROVEMENT_DEFAULT

    early = _mean(overall_scores(completed[:IMPROVEMENT_WINDOW]))
    recent = _mean(overall_scores(completed[-IMPROVEMENT_WINDOW:]))
    return _clamp(IMPROVEMENT_DEFAULT + IMPROVEMENT_FACTOR * (recent - early))


# ---------------------------------------------------------------------------
# Combiner and derived fields
# ---------------------------------------------------------------------------

def combine(breakdown: ScoreBreakdown) -> int:
    """Weighted sum of the domain scores, rounded."""
    return round(sum(weight * getattr(breakdown, field) for field, weight in DOMAIN_WEIGHTS.items()))


def classify_level(overall: int) -> LevelTier:
    for tier in LEVEL_TIERS:
        if overall >= tier.threshold:
            return tier
    return LEVEL_TIERS[-1]


def confidence_interval(overall: int) -> ConfidenceInterval:
    half_width = min(CONFIDENCE_MAX_WIDTH, max(CONFIDENCE_MIN_WIDTH, (100 - overall) * CONFIDENCE_FACTOR))
    return ConfidenceInterval(
        min=max(0.0, overall - half_width),
        max=min(100.0, overall + half_width),
    )


def compute_trend(overall: int, history: list[ScoreHistoryEntry]) -> tuple[str, int]:
    """Return (trend, change) against the most recent history entry."""
    if not history:
        return "stable", 0
    change = overall - history[-1].score
    if change >= TREND_THRESHOLD:
        return "up", change
    if change <= -TREND_THRESHOLD:
        return "down", change
    return "stable", change


def _build_feedback(breakdown: ScoreBreakdown) -> tuple[list[str], list[str]]:
    strengths: list[str] = []
    weaknesses: list[str] = []
    for field, strength, weakness in DOMAIN_FEEDBACK:
        value = getattr(breakdown, field)
        if value >= STRENGTH_THRESHOLD:
            strengths.append(strength)
        elif value <= WEAKNESS_THRESHOLD:
            weaknesses.append(weakness)
    return strengths, weaknesses


def _build_recommendations(breakdown: ScoreBreakdown) -> list[str]:
    recs: list[str] = []
    if breakdown.interview_score < 70:
        recs.append("面接練習を増やしましょう")
    if breakdown.assessment_score == 0:
        recs.append("適性診断を受けましょう")
    if breakdown.profile_score < 70:
        recs.append("プロフィールを充実させましょう")
    if breakdown.activity_score < 50:
        recs.append("より頻繁に練習しましょう")
    return recs


def calculate_breakdown(
    interviews: list[InterviewRecord],
    assessment: AssessmentResult | None,
    profile: UserProfile | None,
    days_active: int,
    now: datetime | None = None,
) -> ScoreBreakdown:
    # No signal at all: nothing to assess, every domain stays at 0
    if not interviews and assessment is None and profile is None:
        logger.debug("No interviews, assessment or profile; returning empty breakdown")
        return ScoreBreakdown()

    return ScoreBreakdown(
        interview_score=calculate_interview_score(interviews),
        assessment_score=calculate_assessment_score(assessment),
        profile_score=calculate_profile_score(profile),
        activity_score=calculate_activity_score(interviews, days_active, now),
        consistency_score=calculate_consistency_score(interviews),
        improvement_score=calculate_improvement_score(interviews),
    )


def calculate_readiness(
    interviews: list[InterviewRecord],
    assessment: AssessmentResult | None = None,
    profile: UserProfile | None = None,
    history: list[ScoreHistoryEntry] | None = None,
    days_active: int | None = None,
    now: datetime | None = None,
) -> ReadinessScore:
    """Recompute the composite readiness score from current inputs."""
    now = as_utc(now)
    history = history or []
    if days_active is None:
        days_active = settings.default_days_active

    breakdown = calculate_breakdown(interviews, assessment, profile, days_active, now)
    overall = combine(breakdown)
    tier = classify_level(overall)
    trend, weekly_change = compute_trend(overall, history)
    strengths, weaknesses = _build_feedback(breakdown)

    return ReadinessScore(
        overall=overall,
        breakdown=breakdown,
        level=tier.level,
        level_label=tier.label,
        level_description=tier.description,
        confidence_interval=confidence_interval(overall),
        trend=trend,
        weekly_change=weekly_change,
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=_build_recommendations(breakdown),
        last_updated=now.isoformat(),
    )

from typing import Literal

from pydantic import BaseModel

ReadinessLevel = Literal["beginner", "developing", "competent", "proficient", "expert"]
Trend = Literal["up", "down", "stable"]


class ScoreBreakdown(BaseModel):
    """Six readiness domain scores, each 0-100."""
    interview_score: int = 0
    assessment_score: int = 0
    profile_score: int = 0
    activity_score: int = 0
    consistency_score: int = 0
    improvement_score: int = 0


class ConfidenceInterval(BaseModel):
    min: float = 0.0
    max: float = 0.0


class ReadinessScore(BaseModel):
    overall: int = 0
    breakdown: ScoreBreakdown = ScoreBreakdown()
    level: ReadinessLevel = "beginner"
    level_label: str = ""
    level_description: str = ""
    confidence_interval: ConfidenceInterval = ConfidenceInterval()
    trend: Trend = "stable"
    weekly_change: int = 0
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendations: list[str] = []
    last_updated: str = ""


class ScoreProgress(BaseModel):
    progress: Literal["improving", "declining", "stable"] = "stable"
    avg_weekly_change: float = 0.0
    best_score: int = 0
    worst_score: int = 0
    recent_trend: Trend = "stable"


class UserStats(BaseModel):
    total_interviews: int = 0
    average_score: int = 0
    best_score: int = 0
    total_practice_time: int = 0  # minutes


class RubricScore(BaseModel):
    score: int = 0
    feedback: str = ""


class ESBreakdown(BaseModel):
    structure: RubricScore = RubricScore()
    content: RubricScore = RubricScore()
    logic: RubricScore = RubricScore()
    originality: RubricScore = RubricScore()
    readability: RubricScore = RubricScore()


class KeywordDensity(BaseModel):
    word: str
    count: int
    percentage: float


class SentenceAnalysis(BaseModel):
    average_length: int = 0
    variety_score: int = 0  # stdev of sentence lengths, capped at 100
    complexity_score: int = 0


class ESAnalysis(BaseModel):
    overall_score: int = 0
    breakdown: ESBreakdown = ESBreakdown()
    strengths: list[str] = []
    improvements: list[str] = []
    suggestions: list[str] = []
    keyword_density: list[KeywordDensity] = []
    sentence_analysis: SentenceAnalysis = SentenceAnalysis()
    estimated_read_time: int = 0  # minutes at 500 chars/min


class HealthResponse(BaseModel):
    status: str = "ok"
    store_backend: str = ""


class ProfileStatus(BaseModel):
    completeness: int = 0  # percent of filled fields, required fields weighted double

"""Plain-data records exchanged with the UI and the persistence collaborator."""

from models.schemas.assessment import (
    AssessmentQuestion,
    AssessmentResponse,
    AssessmentResult,
    CareerSuggestion,
    TraitScoreVector,
)
from models.schemas.es_content import ESContent, ESTemplate, ESVersion, Guideline
from models.schemas.interview import InterviewAnalysis, InterviewRecord
from models.schemas.profile import UserProfile
from models.schemas.score_history import ScoreHistoryEntry

__all__ = [
    "AssessmentQuestion",
    "AssessmentResponse",
    "AssessmentResult",
    "CareerSuggestion",
    "TraitScoreVector",
    "ESContent",
    "ESTemplate",
    "ESVersion",
    "Guideline",
    "InterviewAnalysis",
    "InterviewRecord",
    "UserProfile",
    "ScoreHistoryEntry",
]

"""Mock-interview records produced by the interview practice flow."""

from pydantic import BaseModel


class CategoryScore(BaseModel):
    score: float = 0.0
    feedback: str = ""


class InterviewAnalysis(BaseModel):
    """AI grading of one session. Category scores arrive already computed."""
    overall_score: float = 0.0  # 0-100
    categories: dict[str, CategoryScore] = {}
    strengths: list[str] = []
    improvements: list[str] = []
    next_steps: list[str] = []


class InterviewRecord(BaseModel):
    id: str
    user_id: str = ""
    question_id: str = ""
    question: str = ""
    category: str = ""
    duration: float = 0.0  # seconds
    timestamp: str = ""  # ISO-8601
    analysis_result: InterviewAnalysis | None = None  # None until grading completes

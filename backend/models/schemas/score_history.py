"""Day-keyed readiness history entry."""

from pydantic import BaseModel

from models.responses import ScoreBreakdown


class ScoreHistoryEntry(BaseModel):
    date: str  # YYYY-MM-DD, at most one entry per date
    score: int = 0
    breakdown: ScoreBreakdown = ScoreBreakdown()

"""Trait questionnaire contracts: questions, answers, trait vector, careers."""

from typing import Literal

from pydantic import BaseModel, model_validator


class ScaleRange(BaseModel):
    min: int = 1
    max: int = 7
    min_label: str = ""
    max_label: str = ""


class AssessmentQuestion(BaseModel):
    id: str  # "<axis>_<n>"; the prefix selects the trait axis
    text: str
    type: Literal["scale", "single", "multiple"] = "scale"
    category: str = ""
    options: list[str] = []
    scale_range: ScaleRange | None = None


class AssessmentResponse(BaseModel):
    question_id: str
    answer: int | float | str | list[str] | None = None


class TraitScoreVector(BaseModel):
    """Seven trait axes, each 0-100. Unanswered axes sit at the neutral 50."""
    action: int = 50
    thinking: int = 50
    people: int = 50
    things: int = 50
    systems: int = 50
    proactive: int = 50
    reactive: int = 50


class SalaryRange(BaseModel):
    """Annual salary band in units of 10,000 JPY."""
    min: int
    max: int

    @model_validator(mode="after")
    def _check_order(self) -> "SalaryRange":
        if self.min > self.max:
            raise ValueError(f"salary min {self.min} exceeds max {self.max}")
        return self


class CareerSuggestion(BaseModel):
    job_type: str
    industry: str
    match_score: int  # 0-100
    description: str = ""
    required_skills: list[str] = []
    growth_potential: int = 0  # 0-100
    salary_range: SalaryRange


class AssessmentResult(BaseModel):
    id: str = ""
    user_id: str = ""
    completed_at: str = ""
    responses: list[AssessmentResponse] = []
    scores: TraitScoreVector = TraitScoreVector()
    career_suggestions: list[CareerSuggestion] = []
    summary: str = ""

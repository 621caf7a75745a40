from pydantic import BaseModel, Field, field_validator

from models.schemas.assessment import AssessmentResponse
from models.schemas.es_content import ESStatus, ESTemplate


class ScoreAssessmentRequest(BaseModel):
    responses: list[AssessmentResponse] = Field(..., description="Answered questionnaire items")


class AnalyzeESRequest(BaseModel):
    text: str = Field(..., max_length=50000, description="Entry-sheet draft text")
    template_id: str | None = Field(None, description="Id of a built-in ES template")
    template: ESTemplate | None = Field(None, description="Inline template, used when template_id is not given")

    @field_validator("template")
    @classmethod
    def _markers_only(cls, template: ESTemplate | None) -> ESTemplate | None:
        # Regex guidelines are reserved for built-in templates
        if template is not None and any(g.pattern for g in template.guidelines):
            raise ValueError("inline template guidelines may only use markers")
        return template


class CreateESRequest(BaseModel):
    template_id: str
    title: str = ""


class SaveESRequest(BaseModel):
    content: str = Field(..., max_length=50000)
    title: str | None = None
    status: ESStatus | None = None
    analyze: bool = False

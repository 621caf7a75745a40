"""Entry-sheet templates and saved drafts with their version history."""

from typing import Literal

from pydantic import BaseModel

from models.responses import ESAnalysis

ESStatus = Literal["draft", "completed", "submitted"]


class Guideline(BaseModel):
    """A writing guideline plus the text check that decides compliance.

    The guideline is satisfied when any marker occurs in the checked text or
    the regex matches it. A guideline with neither counts as satisfied.
    """
    text: str
    markers: list[str] = []
    pattern: str = ""
    scope: Literal["all", "first_sentence"] = "all"


class ESStructure(BaseModel):
    introduction: str = ""
    body: str = ""
    conclusion: str = ""


class ESExample(BaseModel):
    good: str
    explanation: str = ""


class ESTemplate(BaseModel):
    id: str = "custom"
    title: str = ""
    category: str = "other"  # self-pr, motivation, gakuchika, career-plan, challenge, teamwork, other
    question: str = ""
    word_limit: int = 400
    guidelines: list[Guideline] = []
    structure: ESStructure = ESStructure()
    examples: list[ESExample] = []


class ESVersion(BaseModel):
    """Immutable snapshot of a draft taken before it was overwritten."""
    version: int
    content: str
    timestamp: str
    analysis: ESAnalysis | None = None


class ESContent(BaseModel):
    id: str
    user_id: str = ""
    template_id: str = ""
    title: str = ""
    question: str = ""
    content: str = ""
    word_count: int = 0
    status: ESStatus = "draft"
    analysis: ESAnalysis | None = None
    history: list[ESVersion] = []
    created_at: str = ""
    updated_at: str = ""

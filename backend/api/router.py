from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_kv_store
from config import settings
from models.requests import AnalyzeESRequest, CreateESRequest, SaveESRequest, ScoreAssessmentRequest
from models.responses import (
    ESAnalysis,
    HealthResponse,
    ProfileStatus,
    ReadinessScore,
    ScoreProgress,
    UserStats,
)
from models.schemas.assessment import AssessmentQuestion, AssessmentResult
from models.schemas.es_content import ESContent, ESTemplate
from models.schemas.interview import InterviewRecord
from models.schemas.profile import UserProfile
from models.schemas.score_history import ScoreHistoryEntry
from services import content_quality, es_drafts, readiness_pipeline, trait_assessment, user_records
from services.es_templates import get_template, list_templates
from services.profile_checks import profile_completeness, validate_profile
from services.storage import KeyValueStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_es_length(text: str) -> None:
    if len(text) > settings.max_es_text_chars:
        raise HTTPException(
            status_code=400,
            detail=f"ES text too long (max {settings.max_es_text_chars} chars)",
        )


def _require_template(template_id: str) -> ESTemplate:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Unknown ES template: {template_id}")
    return template


@router.get("/health", response_model=HealthResponse)
async def health(store: KeyValueStore = Depends(get_kv_store)):
    return HealthResponse(status="ok", store_backend=store.backend_name)


# ---------------------------------------------------------------------------
# Trait assessment
# ---------------------------------------------------------------------------

@router.get("/assessment/questions", response_model=list[AssessmentQuestion])
async def assessment_questions():
    return list(trait_assessment.ASSESSMENT_QUESTIONS)


@router.post("/assessment/score", response_model=AssessmentResult)
@limiter.limit(settings.rate_limit)
async def score_assessment(request: Request, body: ScoreAssessmentRequest):
    return trait_assessment.build_result(body.responses)


@router.post("/users/{user_id}/assessment", response_model=AssessmentResult)
async def submit_assessment(
    user_id: str,
    body: ScoreAssessmentRequest,
    store: KeyValueStore = Depends(get_kv_store),
):
    result = trait_assessment.build_result(body.responses, user_id=user_id)
    await user_records.save_assessment(store, user_id, result)
    return result


# ---------------------------------------------------------------------------
# Entry sheets
# ---------------------------------------------------------------------------

@router.get("/es/templates", response_model=list[ESTemplate])
async def es_templates():
    return list_templates()


@router.post("/es/analyze", response_model=ESAnalysis)
@limiter.limit(settings.rate_limit)
async def analyze_es(request: Request, body: AnalyzeESRequest):
    if not body.text.strip():
        raise HTTPException(status_code=400, detail="ES text is empty")
    _check_es_length(body.text)

    if body.template_id:
        template = _require_template(body.template_id)
    else:
        template = body.template or ESTemplate()

    return content_quality.analyze(body.text, template)


@router.get("/users/{user_id}/es", response_model=list[ESContent])
async def list_es(user_id: str, store: KeyValueStore = Depends(get_kv_store)):
    return await user_records.load_drafts(store, user_id)


@router.post("/users/{user_id}/es", response_model=ESContent)
async def create_es(user_id: str, body: CreateESRequest, store: KeyValueStore = Depends(get_kv_store)):
    template = _require_template(body.template_id)
    draft = es_drafts.create_draft(user_id, template, title=body.title)
    await user_records.save_draft(store, user_id, draft)
    return draft


@router.put("/users/{user_id}/es/{es_id}", response_model=ESContent)
async def save_es(
    user_id: str,
    es_id: str,
    body: SaveESRequest,
    store: KeyValueStore = Depends(get_kv_store),
):
    _check_es_length(body.content)

    drafts = await user_records.load_drafts(store, user_id)
    draft = next((d for d in drafts if d.id == es_id), None)
    if draft is None:
        raise HTTPException(status_code=404, detail=f"Unknown ES draft: {es_id}")

    draft = es_drafts.update_draft(draft, body.content, title=body.title, status=body.status)
    if body.analyze:
        # Drafts keep working after a template is retired
        template = get_template(draft.template_id) or ESTemplate(id=draft.template_id, question=draft.question)
        draft = es_drafts.analyze_draft(draft, template)

    await user_records.save_draft(store, user_id, draft)
    return draft


# ---------------------------------------------------------------------------
# Interviews, profile and readiness
# ---------------------------------------------------------------------------

@router.post("/users/{user_id}/interviews", response_model=InterviewRecord)
async def record_interview(
    user_id: str,
    body: InterviewRecord,
    store: KeyValueStore = Depends(get_kv_store),
):
    record = body.model_copy(update={"user_id": user_id})
    await user_records.save_interview(store, user_id, record)
    return record


@router.put("/users/{user_id}/profile", response_model=ProfileStatus)
async def update_profile(
    user_id: str,
    body: UserProfile,
    store: KeyValueStore = Depends(get_kv_store),
):
    errors = validate_profile(body)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    now = datetime.now(timezone.utc).isoformat()
    profile = body.model_copy(update={"updated_at": now, "created_at": body.created_at or now})
    await user_records.save_profile(store, user_id, profile)
    return ProfileStatus(completeness=profile_completeness(profile))


@router.get("/users/{user_id}/readiness", response_model=ReadinessScore)
async def readiness(
    user_id: str,
    days_active: int | None = Query(None, ge=0),
    store: KeyValueStore = Depends(get_kv_store),
):
    score, _ = await readiness_pipeline.refresh_readiness(store, user_id, days_active=days_active)
    return score


@router.get("/users/{user_id}/readiness/history", response_model=list[ScoreHistoryEntry])
async def readiness_history(user_id: str, store: KeyValueStore = Depends(get_kv_store)):
    return await user_records.load_history(store, user_id)


@router.get("/users/{user_id}/readiness/progress", response_model=ScoreProgress)
async def readiness_progress(user_id: str, store: KeyValueStore = Depends(get_kv_store)):
    return await readiness_pipeline.get_progress(store, user_id)


@router.get("/users/{user_id}/stats", response_model=UserStats)
async def user_stats(user_id: str, store: KeyValueStore = Depends(get_kv_store)):
    return await readiness_pipeline.get_user_stats(store, user_id)

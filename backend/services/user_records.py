"""Load and save a user's persisted records through the key-value store.

Stored values that fail validation are logged and skipped, so one bad
record never blocks scoring.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from models.schemas.assessment import AssessmentResult
from models.schemas.es_content import ESContent
from models.schemas.interview import InterviewRecord
from models.schemas.profile import UserProfile
from models.schemas.score_history import ScoreHistoryEntry
from services import storage
from services.storage import KeyValueStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse_one(raw: Any, model: type[M], key: str) -> M | None:
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning("Ignoring invalid %s under %s: %s", model.__name__, key, e)
        return None


def _parse_list(raw: Any, model: type[M], key: str) -> list[M]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Expected a list under %s, got %s", key, type(raw).__name__)
        return []
    items = []
    for entry in raw:
        parsed = _parse_one(entry, model, key)
        if parsed is not None:
            items.append(parsed)
    return items


def _dump_list(items: list[BaseModel]) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


async def load_interviews(store: KeyValueStore, user_id: str) -> list[InterviewRecord]:
    key = storage.interviews_key(user_id)
    return _parse_list(await store.get(key), InterviewRecord, key)


async def save_interview(store: KeyValueStore, user_id: str, record: InterviewRecord) -> list[InterviewRecord]:
    """Insert or replace (by id) one interview record."""
    interviews = [i for i in await load_interviews(store, user_id) if i.id != record.id]
    interviews.append(record)
    await store.set(storage.interviews_key(user_id), _dump_list(interviews))
    return interviews


async def load_assessment(store: KeyValueStore, user_id: str) -> AssessmentResult | None:
    key = storage.assessment_key(user_id)
    return _parse_one(await store.get(key), AssessmentResult, key)


async def save_assessment(store: KeyValueStore, user_id: str, result: AssessmentResult) -> None:
    await store.set(storage.assessment_key(user_id), result.model_dump(mode="json"))


async def load_profile(store: KeyValueStore, user_id: str) -> UserProfile | None:
    key = storage.profile_key(user_id)
    return _parse_one(await store.get(key), UserProfile, key)


async def save_profile(store: KeyValueStore, user_id: str, profile: UserProfile) -> None:
    await store.set(storage.profile_key(user_id), profile.model_dump(mode="json"))


async def load_history(store: KeyValueStore, user_id: str) -> list[ScoreHistoryEntry]:
    key = storage.score_history_key(user_id)
    return _parse_list(await store.get(key), ScoreHistoryEntry, key)


async def save_history(store: KeyValueStore, user_id: str, history: list[ScoreHistoryEntry]) -> None:
    await store.set(storage.score_history_key(user_id), _dump_list(history))


async def load_drafts(store: KeyValueStore, user_id: str) -> list[ESContent]:
    key = storage.es_contents_key(user_id)
    return _parse_list(await store.get(key), ESContent, key)


async def save_draft(store: KeyValueStore, user_id: str, draft: ESContent) -> list[ESContent]:
    """Insert or replace (by id) one ES draft, keeping list order."""
    drafts = await load_drafts(store, user_id)
    for index, existing in enumerate(drafts):
        if existing.id == draft.id:
            drafts[index] = draft
            break
    else:
        drafts.append(draft)
    await store.set(storage.es_contents_key(user_id), _dump_list(drafts))
    return drafts

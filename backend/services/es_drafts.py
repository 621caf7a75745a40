"""ES draft lifecycle. Every change returns a new ESContent.

Overwritten text is kept as a numbered ESVersion snapshot together with
the analysis it had at the time; snapshots are never edited.
"""

import uuid
from datetime import datetime, timezone

from models.schemas.es_content import ESContent, ESStatus, ESTemplate, ESVersion
from services.content_quality import analyze, count_characters


def _now_iso(now: datetime | None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def create_draft(user_id: str, template: ESTemplate, title: str = "", now: datetime | None = None) -> ESContent:
    timestamp = _now_iso(now)
    return ESContent(
        id=f"es_{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        template_id=template.id,
        title=title or template.title,
        question=template.question,
        created_at=timestamp,
        updated_at=timestamp,
    )


def update_draft(
    draft: ESContent,
    content: str,
    title: str | None = None,
    status: ESStatus | None = None,
    now: datetime | None = None,
) -> ESContent:
    """Save new text. A text change snapshots the previous text and its analysis."""
    history = list(draft.history)
    analysis = draft.analysis
    if content != draft.content:
        history.append(ESVersion(
            version=len(history) + 1,
            content=draft.content,
            timestamp=draft.updated_at,
            analysis=draft.analysis,
        ))
        analysis = None  # stale once the text changes

    return draft.model_copy(update={
        "content": content,
        "word_count": count_characters(content),
        "title": draft.title if title is None else title,
        "status": status or draft.status,
        "analysis": analysis,
        "history": history,
        "updated_at": _now_iso(now),
    })


def analyze_draft(draft: ESContent, template: ESTemplate, now: datetime | None = None) -> ESContent:
    """Attach a fresh analysis of the current text and mark the draft completed."""
    return draft.model_copy(update={
        "analysis": analyze(draft.content, template),
        "status": "completed",
        "updated_at": _now_iso(now),
    })

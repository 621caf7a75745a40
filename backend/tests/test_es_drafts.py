from datetime import datetime, timedelta, timezone

from services.es_drafts import analyze_draft, create_draft, update_draft
from services.es_templates import get_template

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
TEMPLATE = get_template("self_pr_basic")


def _draft():
    return create_draft("u1", TEMPLATE, now=NOW)


def test_create_draft():
    draft = _draft()
    assert draft.id.startswith("es_")
    assert draft.user_id == "u1"
    assert draft.template_id == "self_pr_basic"
    assert draft.title == TEMPLATE.title
    assert draft.question == TEMPLATE.question
    assert draft.status == "draft"
    assert draft.history == []
    assert draft.created_at == draft.updated_at == NOW.isoformat()


def test_create_draft_custom_title():
    assert create_draft("u1", TEMPLATE, title="第一志望用").title == "第一志望用"


def test_update_snapshots_previous_text():
    draft = update_draft(_draft(), "私の強みは行動力です。", now=NOW)
    draft = update_draft(draft, "私の強みは粘り強さです。", now=NOW + timedelta(hours=1))

    assert draft.content == "私の強みは粘り強さです。"
    assert draft.word_count == 12
    assert [v.version for v in draft.history] == [1, 2]
    assert draft.history[0].content == ""
    assert draft.history[1].content == "私の強みは行動力です。"
    assert draft.history[1].timestamp == NOW.isoformat()


def test_unchanged_text_adds_no_version():
    draft = update_draft(_draft(), "同じ文章です。", now=NOW)
    draft = update_draft(draft, "同じ文章です。", title="新しいタイトル", now=NOW)
    assert len(draft.history) == 1
    assert draft.title == "新しいタイトル"


def test_update_does_not_mutate_original():
    original = _draft()
    update_draft(original, "新しい本文です。", now=NOW)
    assert original.content == ""
    assert original.history == []


def test_status_update():
    draft = update_draft(_draft(), "本文です。", status="submitted", now=NOW)
    assert draft.status == "submitted"


def test_analyze_marks_completed():
    draft = update_draft(_draft(), "私の強みは粘り強さです。例えば3年間研究を続けました。", now=NOW)
    analyzed = analyze_draft(draft, TEMPLATE, now=NOW)
    assert analyzed.status == "completed"
    assert analyzed.analysis is not None
    assert 0 <= analyzed.analysis.overall_score <= 100


def test_snapshot_keeps_its_analysis():
    draft = update_draft(_draft(), "最初の文章です。", now=NOW)
    draft = analyze_draft(draft, TEMPLATE, now=NOW)
    first_analysis = draft.analysis

    draft = update_draft(draft, "書き直した文章です。", now=NOW + timedelta(days=1))
    assert draft.analysis is None
    assert draft.history[-1].content == "最初の文章です。"
    assert draft.history[-1].analysis == first_analysis

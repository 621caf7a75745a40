"""Trait questionnaire scoring, career suggestion rules and summary text.

Question ids carry their axis as a prefix ("thinking_2" -> thinking).
Scale answers on a 1..N scale are rescaled to 0-100 and averaged per axis;
the proactivity questions also feed an inverted sample into the reactive
axis. Career suggestions come from a fixed table of threshold rules.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType

from config import settings
from models.schemas.assessment import (
    AssessmentQuestion,
    AssessmentResponse,
    AssessmentResult,
    CareerSuggestion,
    SalaryRange,
    ScaleRange,
    TraitScoreVector,
)

logger = logging.getLogger(__name__)

TRAIT_AXES: tuple[str, ...] = (
    "action", "thinking", "people", "things", "systems", "proactive", "reactive",
)

# Question-id prefix -> trait axis
AXIS_PREFIXES = MappingProxyType({
    "action": "action",
    "thinking": "thinking",
    "people": "people",
    "things": "things",
    "systems": "systems",
    "proactivity": "proactive",
})

NEUTRAL_SCORE = 50
STRENGTH_THRESHOLD = 70
MIN_SUGGESTIONS = 3
FALLBACK_MATCH_SCORE = 65

# Summary labels, in presentation order. The reactive axis is never a headline strength.
AXIS_LABELS: tuple[tuple[str, str], ...] = (
    ("action", "高い行動力"),
    ("thinking", "優れた思考力"),
    ("people", "人との関わりを重視"),
    ("things", "技術・モノづくりへの興味"),
    ("systems", "仕組み・組織への関心"),
    ("proactive", "積極的な姿勢"),
)

BALANCED_SUMMARY = "バランス型の適性を持っており、様々な分野で活躍できる可能性があります。"

_SCALE_1_7 = dict(min=1, max=7)

ASSESSMENT_QUESTIONS: tuple[AssessmentQuestion, ...] = (
    AssessmentQuestion(
        id="action_1",
        text="新しいプロジェクトや課題に取り組む時、あなたはどのように行動しますか？",
        type="scale",
        category="action",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="慎重に計画を立ててから行動する",
                               max_label="まず行動してから調整する"),
    ),
    AssessmentQuestion(
        id="action_2",
        text="チームでの役割として最も自然に感じるのは？",
        type="single",
        category="action",
        options=["リーダーとして方向性を示す", "アイデアを提案する", "実行・推進する",
                 "サポート・調整する", "分析・改善提案する"],
    ),
    AssessmentQuestion(
        id="action_3",
        text="困難な状況に直面した時の対処法は？",
        type="scale",
        category="action",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="一人で解決策を考える",
                               max_label="チームで相談しながら解決する"),
    ),
    AssessmentQuestion(
        id="thinking_1",
        text="複雑な問題を解決する時、あなたのアプローチは？",
        type="single",
        category="thinking",
        options=["全体像を把握してから詳細を検討", "具体例から一般化していく",
                 "既存の事例と比較検討する", "数値・データで分析する", "直感を重視して判断する"],
    ),
    AssessmentQuestion(
        id="thinking_2",
        text="学習や仕事で最も集中できるのは？",
        type="scale",
        category="thinking",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="理論・概念の理解",
                               max_label="実践・実務での応用"),
    ),
    AssessmentQuestion(
        id="thinking_3",
        text="意思決定をする際に最も重視するのは？",
        type="multiple",
        category="thinking",
        options=["論理的な根拠", "過去の経験・実績", "将来への影響", "関係者への配慮",
                 "直感・第六感", "リスクの最小化"],
    ),
    AssessmentQuestion(
        id="people_1",
        text="人と関わる活動の中で最もやりがいを感じるのは？",
        type="single",
        category="interest",
        options=["人の成長をサポートする", "チームをまとめる", "新しい人との出会い",
                 "人の悩みを聞く・解決する", "人に何かを教える・伝える"],
    ),
    AssessmentQuestion(
        id="people_2",
        text="コミュニケーションで得意なのは？",
        type="scale",
        category="interest",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="1対1の深い対話",
                               max_label="多人数での発表・司会"),
    ),
    AssessmentQuestion(
        id="things_1",
        text="モノづくりや技術に関する活動で興味があるのは？",
        type="multiple",
        category="interest",
        options=["プログラミング・アプリ開発", "デザイン・クリエイティブ", "機械・ハードウェア",
                 "建築・インフラ", "研究・実験", "データ分析・統計"],
    ),
    AssessmentQuestion(
        id="things_2",
        text="技術的な課題に取り組む時の姿勢は？",
        type="scale",
        category="interest",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="既存技術の改良・最適化",
                               max_label="新技術の創造・開発"),
    ),
    AssessmentQuestion(
        id="systems_1",
        text="組織や仕組みに関わる活動で興味があるのは？",
        type="single",
        category="interest",
        options=["業務プロセスの改善", "組織運営・マネジメント", "企画・戦略立案",
                 "ルール・制度設計", "データ分析・意思決定支援"],
    ),
    AssessmentQuestion(
        id="systems_2",
        text="問題のある仕組みを見つけた時の行動は？",
        type="scale",
        category="interest",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="個別に対処する",
                               max_label="根本的な仕組みを変える"),
    ),
    AssessmentQuestion(
        id="proactivity_1",
        text="新しい環境や変化に対するあなたの反応は？",
        type="scale",
        category="personality",
        scale_range=ScaleRange(**_SCALE_1_7, min_label="慎重に様子を見る",
                               max_label="積極的に新しいことに挑戦する"),
    ),
    AssessmentQuestion(
        id="proactivity_2",
        text="仕事や学習での理想的なスタイルは？",
        type="single",
        category="personality",
        options=["明確な指示に従って確実に実行", "大枠の目標に向けて自由に取り組む",
                 "チームで協力しながら進める", "専門性を活かして独立して作業", "状況に応じて柔軟に対応"],
    ),
)

_QUESTIONS_BY_ID = MappingProxyType({q.id: q for q in ASSESSMENT_QUESTIONS})


@dataclass(frozen=True)
class CareerRule:
    """One row of the career table. Fires when every (axis, threshold) holds."""
    conditions: tuple[tuple[str, int], ...]
    job_type: str
    industry: str
    description: str
    required_skills: tuple[str, ...]
    growth_potential: int
    salary_min: int
    salary_max: int

    def matches(self, vector: TraitScoreVector) -> bool:
        return all(getattr(vector, axis) >= threshold for axis, threshold in self.conditions)

    def to_suggestion(self, match_score: int) -> CareerSuggestion:
        return CareerSuggestion(
            job_type=self.job_type,
            industry=self.industry,
            match_score=match_score,
            description=self.description,
            required_skills=list(self.required_skills),
            growth_potential=self.growth_potential,
            salary_range=SalaryRange(min=self.salary_min, max=self.salary_max),
        )


# Rules are independent: several may fire and job types may repeat.
CAREER_RULES: tuple[CareerRule, ...] = (
    CareerRule(
        conditions=(("thinking", 70), ("things", 70)),
        job_type="エンジニア・開発職",
        industry="IT・テクノロジー",
        description="論理的思考力と技術への興味を活かせる職種です。",
        required_skills=("プログラミング", "論理的思考", "問題解決"),
        growth_potential=95, salary_min=400, salary_max=1200,
    ),
    CareerRule(
        conditions=(("people", 70), ("action", 70)),
        job_type="営業・マーケティング",
        industry="各種業界",
        description="コミュニケーション能力と行動力を活かせる職種です。",
        required_skills=("コミュニケーション", "行動力", "提案力"),
        growth_potential=85, salary_min=350, salary_max=1000,
    ),
    CareerRule(
        conditions=(("systems", 70), ("thinking", 70)),
        job_type="コンサルタント・企画職",
        industry="コンサルティング・事業会社",
        description="組織や仕組みを最適化する思考力を活かせる職種です。",
        required_skills=("戦略思考", "分析力", "提案力"),
        growth_potential=90, salary_min=450, salary_max=1500,
    ),
    # Extends the base five-rule table so strong action + thinking profiles get a direct match
    CareerRule(
        conditions=(("action", 70), ("thinking", 70)),
        job_type="事業開発・プロジェクトマネージャー",
        industry="事業会社・スタートアップ",
        description="自ら考え、素早く動いて事業を前に進める職種です。",
        required_skills=("推進力", "論理的思考", "意思決定"),
        growth_potential=90, salary_min=400, salary_max=1300,
    ),
    CareerRule(
        conditions=(("people", 70), ("reactive", 60)),
        job_type="人事・教育・サポート",
        industry="各種業界",
        description="人をサポートし、成長を支援することに適性があります。",
        required_skills=("傾聴力", "支援力", "チームワーク"),
        growth_potential=80, salary_min=320, salary_max=800,
    ),
    CareerRule(
        conditions=(("things", 60), ("people", 60)),
        job_type="デザイナー・クリエイター",
        industry="クリエイティブ・メディア",
        description="クリエイティブな表現で人に価値を提供する職種です。",
        required_skills=("デザインスキル", "クリエイティビティ", "ユーザー理解"),
        growth_potential=75, salary_min=300, salary_max=900,
    ),
)

# Generic suggestions used to top the list up to MIN_SUGGESTIONS, in order.
FALLBACK_RULES: tuple[CareerRule, ...] = (
    CareerRule(
        conditions=(),
        job_type="総合職・一般事務",
        industry="各種業界",
        description="様々な業務に対応できる汎用性の高い職種です。",
        required_skills=("基礎業務スキル", "適応力", "コミュニケーション"),
        growth_potential=70, salary_min=280, salary_max=600,
    ),
    CareerRule(
        conditions=(),
        job_type="カスタマーサクセス・カスタマーサポート",
        industry="IT・サービス",
        description="顧客の課題に寄り添い、継続的な価値提供を支える職種です。",
        required_skills=("傾聴力", "課題整理", "コミュニケーション"),
        growth_potential=70, salary_min=300, salary_max=650,
    ),
    CareerRule(
        conditions=(),
        job_type="公務員・団体職員",
        industry="公務・非営利",
        description="安定した環境で社会基盤を支える職種です。",
        required_skills=("事務処理能力", "協調性", "責任感"),
        growth_potential=60, salary_min=300, salary_max=700,
    ),
)


def _scale_max(question_id: str) -> int:
    question = _QUESTIONS_BY_ID.get(question_id)
    if question is not None and question.scale_range is not None:
        return question.scale_range.max
    return settings.assessment_scale_max


def _scale_value(answer, scale_max: int) -> float:
    """Return the answer as a value on 1..scale_max; midpoint when not numeric."""
    midpoint = (scale_max + 1) / 2
    if isinstance(answer, bool) or not isinstance(answer, (int, float)):
        return midpoint
    if math.isnan(answer):
        return midpoint
    return min(max(float(answer), 1.0), float(scale_max))


def _mean_or_neutral(samples: list[float]) -> int:
    if not samples:
        return NEUTRAL_SCORE
    return min(100, max(0, round(sum(samples) / len(samples))))


def score_responses(responses: list[AssessmentResponse]) -> TraitScoreVector:
    """Convert questionnaire answers into a 7-axis trait vector."""
    samples: dict[str, list[float]] = {axis: [] for axis in TRAIT_AXES}

    for response in responses:
        prefix = response.question_id.split("_", 1)[0]
        axis = AXIS_PREFIXES.get(prefix)
        if axis is None:
            logger.debug("Skipping response for unknown question id %r", response.question_id)
            continue

        scale_max = _scale_max(response.question_id)
        value = _scale_value(response.answer, scale_max)
        samples[axis].append(value * 100 / scale_max)
        if axis == "proactive":
            samples["reactive"].append((scale_max + 1 - value) * 100 / scale_max)

    return TraitScoreVector(**{axis: _mean_or_neutral(samples[axis]) for axis in TRAIT_AXES})


def suggest_careers(vector: TraitScoreVector) -> list[CareerSuggestion]:
    """Apply the career rule table; always returns at least MIN_SUGGESTIONS entries."""
    suggestions: list[CareerSuggestion] = []
    for rule in CAREER_RULES:
        if not rule.matches(vector):
            continue
        values = [getattr(vector, axis) for axis, _ in rule.conditions]
        suggestions.append(rule.to_suggestion(round(sum(values) / len(values))))
        logger.debug("Career rule fired: %s", rule.job_type)

    for fallback in FALLBACK_RULES:
        if len(suggestions) >= MIN_SUGGESTIONS:
            break
        suggestions.append(fallback.to_suggestion(FALLBACK_MATCH_SCORE))

    return sorted(suggestions, key=lambda s: s.match_score, reverse=True)


def summarize(vector: TraitScoreVector) -> str:
    strengths = [label for axis, label in AXIS_LABELS if getattr(vector, axis) >= STRENGTH_THRESHOLD]
    if not strengths:
        return BALANCED_SUMMARY
    joined = "」「".join(strengths)
    return f"あなたの主な強みは「{joined}」です。これらの特性を活かせる職種での活躍が期待できます。"


def build_result(
    responses: list[AssessmentResponse],
    user_id: str = "",
    completed_at: datetime | None = None,
) -> AssessmentResult:
    """Score a completed questionnaire into a storable AssessmentResult."""
    scores = score_responses(responses)
    completed_at = completed_at or datetime.now(timezone.utc)
    return AssessmentResult(
        id=f"assessment_{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        completed_at=completed_at.isoformat(),
        responses=list(responses),
        scores=scores,
        career_suggestions=suggest_careers(scores),
        summary=summarize(scores),
    )

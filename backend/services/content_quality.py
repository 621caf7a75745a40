"""Rule-based entry-sheet (ES) critique.

Scores a draft against five independent rubrics, then derives feedback,
strengths/improvements, a suggestion checklist and lexical statistics.

Segmentation is Japanese-aware rather than word-tokenized:
    - "word count" is the number of non-whitespace characters
    - sentences end at 。！？
    - paragraphs are separated by blank lines

analyze() is a pure function of (text, template).
"""

import logging
import math
import re
from collections import Counter
from types import MappingProxyType

import numpy as np

from models.responses import (
    ESAnalysis,
    ESBreakdown,
    KeywordDensity,
    RubricScore,
    SentenceAnalysis,
)
from models.schemas.es_content import ESTemplate, Guideline

logger = logging.getLogger(__name__)

# Rubric weights for the overall score; they sum to 1.0
RUBRIC_WEIGHTS = MappingProxyType({
    "structure": 0.25,
    "content": 0.30,
    "logic": 0.20,
    "originality": 0.10,
    "readability": 0.15,
})

SENTENCE_SPLIT_RE = re.compile(r"[。！？]")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_WHITESPACE_RE = re.compile(r"\s+")
_DIGIT_RE = re.compile(r"\d")
_LATIN_RE = re.compile(r"[A-Za-z]")
_KEYWORD_STRIP_RE = re.compile(r"[。、！？\s]")

# Structure
DECLARATIVE_ENDINGS: tuple[str, ...] = ("です。", "ます。")
EXAMPLE_MARKERS: tuple[str, ...] = ("例えば", "具体的に", "実際に")

# Content
GUIDELINE_CREDIT = 35

# Logic
CONNECTIVES: tuple[str, ...] = ("そして", "また", "しかし", "そのため", "その結果", "つまり")

# Originality
STOCK_PHRASES: tuple[str, ...] = ("頑張りたい", "成長したい", "貢献したい", "やりがい", "魅力的")
STOCK_PHRASE_PENALTY = 5
ORIGINALITY_FLOOR = 30

# Keyword density
KEYWORD_WINDOW = 2
KEYWORD_MIN_COUNT = 2
KEYWORD_TOP_N = 10

READ_SPEED_CHARS_PER_MIN = 500

STRENGTH_THRESHOLD = 80
IMPROVEMENT_THRESHOLD = 60

STRENGTH_LABELS = MappingProxyType({
    "structure": "文章構成が優秀",
    "content": "内容が充実",
    "logic": "論理性が高い",
    "originality": "独自性がある",
    "readability": "読みやすい文章",
})

IMPROVEMENT_LABELS = MappingProxyType({
    "structure": "文章構成の改善",
    "content": "内容の充実化",
    "logic": "論理性の向上",
    "originality": "独自性の強化",
    "readability": "読みやすさの改善",
})

SPECIFIC_EPISODE_MARKER = "具体的"
COMPANY_MARKERS: tuple[str, ...] = ("御社", "貴社")


def _clamp(value: float, low: float = 0, high: float = 100) -> int:
    return round(min(high, max(low, value)))


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------

def count_characters(text: str) -> int:
    """ES "word count": non-whitespace characters."""
    return len(_WHITESPACE_RE.sub("", text))


def split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def split_paragraphs(text: str) -> list[str]:
    return [p for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def _mean_length(parts: list[str]) -> float:
    if not parts:
        return 0.0
    return float(np.mean([len(p) for p in parts]))


# ---------------------------------------------------------------------------
# Guideline predicates
# ---------------------------------------------------------------------------

def guideline_satisfied(text: str, guideline: Guideline) -> bool:
    if not guideline.markers and not guideline.pattern:
        return True

    target = text
    if guideline.scope == "first_sentence":
        target = SENTENCE_SPLIT_RE.split(text)[0]

    if any(marker in target for marker in guideline.markers):
        return True
    if guideline.pattern:
        try:
            return re.search(guideline.pattern, target) is not None
        except re.error as e:
            logger.warning("Invalid guideline pattern %r: %s", guideline.pattern, e)
    return False


# ---------------------------------------------------------------------------
# Rubric scorers
# ---------------------------------------------------------------------------

def score_structure(text: str, paragraphs: list[str]) -> int:
    score = 50
    if 3 <= len(paragraphs) <= 5:
        score += 20
    elif len(paragraphs) >= 2:
        score += 10
    if any(ending in text for ending in DECLARATIVE_ENDINGS):
        score += 15
    if any(marker in text for marker in EXAMPLE_MARKERS):
        score += 15
    return _clamp(score)


def score_content(text: str, template: ESTemplate, word_count: int) -> int:
    score = 40.0
    ratio = word_count / template.word_limit if template.word_limit > 0 else 0.0
    if 0.8 <= ratio <= 1.2:
        score += 25
    elif 0.6 <= ratio <= 1.4:
        score += 15
    elif ratio >= 0.4:
        score += 5

    if template.guidelines:
        satisfied = sum(1 for g in template.guidelines if guideline_satisfied(text, g))
        score += GUIDELINE_CREDIT * satisfied / len(template.guidelines)
    return _clamp(score)


def score_logic(text: str, sentences: list[str]) -> int:
    score = 60
    connector_count = sum(1 for c in CONNECTIVES if c in text)
    score += min(connector_count * 5, 20)

    avg_length = _mean_length(sentences)
    if 20 <= avg_length <= 60:
        score += 20
    elif avg_length >= 10:
        score += 10
    return _clamp(score)


def score_originality(text: str) -> int:
    score = 70
    score -= STOCK_PHRASE_PENALTY * sum(text.count(phrase) for phrase in STOCK_PHRASES)
    # Digits and Latin script as concreteness proxies (figures, proper nouns)
    if _DIGIT_RE.search(text):
        score += 15
    if _LATIN_RE.search(text):
        score += 10
    return _clamp(score, low=ORIGINALITY_FLOOR)


def score_readability(sentences: list[str], paragraphs: list[str]) -> int:
    score = 50
    if sentences and float(np.var([len(s) for s in sentences])) > 100:
        score += 25
    if paragraphs and 50 <= _mean_length(paragraphs) <= 200:
        score += 25
    return _clamp(score)


# ---------------------------------------------------------------------------
# Lexical statistics
# ---------------------------------------------------------------------------

def keyword_density(text: str) -> list[KeywordDensity]:
    """Frequency of 2-character sliding windows, a lexical proxy, not a tokenizer."""
    compact = _KEYWORD_STRIP_RE.sub("", text)
    windows = [compact[i:i + KEYWORD_WINDOW] for i in range(len(compact) - KEYWORD_WINDOW + 1)]
    if not windows:
        return []

    total = len(windows)
    ranked = [(w, c) for w, c in Counter(windows).most_common() if c >= KEYWORD_MIN_COUNT]
    return [
        KeywordDensity(word=word, count=count, percentage=round(count / total * 100, 1))
        for word, count in ranked[:KEYWORD_TOP_N]
    ]


def analyze_sentences(sentences: list[str]) -> SentenceAnalysis:
    if not sentences:
        return SentenceAnalysis()
    lengths = [len(s) for s in sentences]
    average = float(np.mean(lengths))
    stdev = float(np.std(lengths))
    return SentenceAnalysis(
        average_length=round(average),
        variety_score=round(min(stdev, 100)),
        complexity_score=round(min(average * 2, 100)),
    )


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

def _structure_feedback(score: int) -> str:
    if score >= 80:
        return "文章の構成がよく整理されており、読みやすい構造になっています。"
    if score >= 60:
        return "基本的な構成はできていますが、段落分けをもう少し工夫すると良いでしょう。"
    return "文章の構成を見直し、序論・本論・結論を明確に分けることをお勧めします。"


def _content_feedback(score: int, word_count: int, word_limit: int) -> str:
    ratio = word_count / word_limit if word_limit > 0 else 0.0
    if score >= 80:
        return "内容が充実しており、文字数も適切です。"
    if ratio < 0.8:
        return f"文字数が不足しています（{word_count}/{word_limit}文字）。もう少し詳しく記述しましょう。"
    if ratio > 1.2:
        return f"文字数が多すぎます（{word_count}/{word_limit}文字）。要点を絞って簡潔にまとめましょう。"
    return "内容をもう少し具体的に記述すると良いでしょう。"


def _logic_feedback(score: int) -> str:
    if score >= 80:
        return "論理的な構成で、話の流れが明確です。"
    if score >= 60:
        return "基本的な論理性はありますが、接続詞を使ってより明確にしましょう。"
    return "論理の流れを整理し、因果関係を明確にすることをお勧めします。"


def _originality_feedback(score: int) -> str:
    if score >= 80:
        return "独自性があり、印象に残る内容です。"
    if score >= 60:
        return "基本的な内容はできていますが、より具体的なエピソードがあると良いでしょう。"
    return "一般的な表現が多いため、具体的な体験や数字を交えてオリジナリティを高めましょう。"


def _readability_feedback(score: int, average_length: int) -> str:
    if score >= 80:
        return "読みやすく、適切な文の長さです。"
    if average_length > 60:
        return "文が長すぎる傾向があります。短い文に分割することをお勧めします。"
    if average_length < 20:
        return "文が短すぎる傾向があります。もう少し詳しく記述しましょう。"
    return "文の長さにもう少しバリエーションを持たせると読みやすくなります。"


def _build_suggestions(text: str, word_count: int, template: ESTemplate) -> list[str]:
    suggestions: list[str] = []
    if SPECIFIC_EPISODE_MARKER not in text:
        suggestions.append("具体的なエピソードや事例を追加してください")
    if not _DIGIT_RE.search(text):
        suggestions.append("数字を使って成果を定量化してください")
    if word_count < template.word_limit * 0.8:
        suggestions.append("指定文字数に近づくよう、内容を詳しく記述してください")
    if not any(marker in text for marker in COMPANY_MARKERS):
        suggestions.append("企業への言及を含めて志望度をアピールしてください")
    return suggestions


def compute_overall(breakdown: ESBreakdown) -> int:
    """Weighted sum of rubric scores, rounded."""
    return round(sum(
        weight * getattr(breakdown, rubric).score
        for rubric, weight in RUBRIC_WEIGHTS.items()
    ))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def analyze(text: str, template: ESTemplate) -> ESAnalysis:
    """Score an ES draft against the template. Deterministic for equal inputs."""
    word_count = count_characters(text)
    sentences = split_sentences(text)
    paragraphs = split_paragraphs(text)
    sentence_analysis = analyze_sentences(sentences)

    structure = score_structure(text, paragraphs)
    content = score_content(text, template, word_count)
    logic = score_logic(text, sentences)
    originality = score_originality(text)
    readability = score_readability(sentences, paragraphs)

    breakdown = ESBreakdown(
        structure=RubricScore(score=structure, feedback=_structure_feedback(structure)),
        content=RubricScore(
            score=content,
            feedback=_content_feedback(content, word_count, template.word_limit),
        ),
        logic=RubricScore(score=logic, feedback=_logic_feedback(logic)),
        originality=RubricScore(score=originality, feedback=_originality_feedback(originality)),
        readability=RubricScore(
            score=readability,
            feedback=_readability_feedback(readability, sentence_analysis.average_length),
        ),
    )

    rubric_scores = {rubric: getattr(breakdown, rubric).score for rubric in RUBRIC_WEIGHTS}
    strengths = [STRENGTH_LABELS[r] for r, s in rubric_scores.items() if s >= STRENGTH_THRESHOLD]
    improvements = [IMPROVEMENT_LABELS[r] for r, s in rubric_scores.items() if s < IMPROVEMENT_THRESHOLD]

    return ESAnalysis(
        overall_score=compute_overall(breakdown),
        breakdown=breakdown,
        strengths=strengths,
        improvements=improvements,
        suggestions=_build_suggestions(text, word_count, template),
        keyword_density=keyword_density(text),
        sentence_analysis=sentence_analysis,
        estimated_read_time=math.ceil(word_count / READ_SPEED_CHARS_PER_MIN),
    )

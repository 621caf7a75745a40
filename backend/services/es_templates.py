"""Built-in entry-sheet (ES) question templates.

Each guideline carries the text check used by the content rubric in
services.content_quality.
"""

import logging
from types import MappingProxyType

from models.schemas.es_content import ESExample, ESStructure, ESTemplate, Guideline

logger = logging.getLogger(__name__)

_NUMBERS = r"\d+"

ES_TEMPLATES: tuple[ESTemplate, ...] = (
    ESTemplate(
        id="self_pr_basic",
        title="基本的な自己PR",
        category="self-pr",
        question="あなたの長所について、具体的なエピソードを交えて教えてください。",
        word_limit=400,
        guidelines=[
            Guideline(text="結論を最初に述べる", markers=["は", "です", "ます"], scope="first_sentence"),
            Guideline(text="具体的なエピソードを盛り込む", markers=["例えば", "具体的", "実際", "経験"]),
            Guideline(text="数字で成果を表現する", pattern=_NUMBERS),
            Guideline(text="企業でどう活かせるかを述べる", markers=["活かし", "貢献", "役立"]),
        ],
        structure=ESStructure(
            introduction="結論：私の長所は○○です。",
            body="具体例：学生時代に○○に取り組み、○○という成果を上げました。",
            conclusion="活用：この長所を御社の○○で活かしたいと考えています。",
        ),
        examples=[
            ESExample(
                good=(
                    "私の長所は、困難な状況でも諦めずに解決策を見つける行動力です。"
                    "大学のプロジェクトで、メンバー間の意見対立により作業が停滞した際、"
                    "私が中心となって個別面談を実施し、全員の意見を整理・統合することで、"
                    "期限内にプロジェクトを成功させました。その結果、最優秀賞を受賞し、"
                    "チームの結束も深まりました。この行動力を御社の営業職で活かし、"
                    "お客様の課題解決に貢献したいと考えています。"
                ),
                explanation="結論→具体例→成果→活用という構成で、数字や具体的な行動が明記されている良い例です。",
            ),
        ],
    ),
    ESTemplate(
        id="motivation_basic",
        title="志望動機",
        category="motivation",
        question="当社を志望する理由を教えてください。",
        word_limit=400,
        guidelines=[
            Guideline(text="企業研究の成果を盛り込む", markers=["御社", "貴社", "理念", "事業"]),
            Guideline(text="自分の価値観との合致点を述べる", markers=["共感", "価値観", "合致"]),
            Guideline(text="具体的な職種・部門に言及する", markers=["職", "部門", "部署", "エンジニア", "営業", "企画"]),
            Guideline(text="将来のビジョンを含める", markers=["将来", "ビジョン", "目指", "実現"]),
        ],
        structure=ESStructure(
            introduction="志望理由：御社を志望する理由は○○です。",
            body="根拠：御社の○○という特徴が、私の○○という価値観と合致するためです。",
            conclusion="展望：御社で○○として活躍し、○○を実現したいと考えています。",
        ),
        examples=[
            ESExample(
                good=(
                    "私が御社を志望する理由は、「テクノロジーで社会課題を解決する」という企業理念に"
                    "強く共感したからです。大学での研究を通じて、IT技術が持つ社会変革の可能性を実感し、"
                    "私も技術を通じて人々の生活を豊かにしたいと考えるようになりました。"
                    "特に御社の○○事業は、私が関心を持つ高齢化社会の課題解決に直結しており、"
                    "エンジニアとして技術開発に携わりたいと強く思います。将来的には、自らがリーダーと"
                    "なって新しいサービスを企画・開発し、より多くの人に価値を提供したいと考えています。"
                ),
                explanation="企業理念への共感、自身の経験との関連、具体的な事業への言及、将来ビジョンが含まれた良い例です。",
            ),
        ],
    ),
    ESTemplate(
        id="gakuchika_basic",
        title="学生時代に力を入れたこと",
        category="gakuchika",
        question="学生時代に最も力を入れて取り組んだことについて教えてください。",
        word_limit=500,
        guidelines=[
            Guideline(text="STAR法（状況・課題・行動・結果）を使う", markers=["状況", "結果", "成果"]),
            Guideline(text="困難や課題を具体的に述べる", markers=["困難", "課題", "問題"]),
            Guideline(text="自分の役割と行動を明確にする", markers=["私は", "役割", "担当"]),
            Guideline(text="定量的な成果を示す", pattern=_NUMBERS),
        ],
        structure=ESStructure(
            introduction="取組み：私が最も力を入れたのは○○です。",
            body="状況・課題：○○という状況で、○○という課題がありました。行動：私は○○を行い、○○という結果を得ました。",
            conclusion="学び：この経験から○○を学び、社会人になっても活かしたいと考えています。",
        ),
        examples=[
            ESExample(
                good=(
                    "私が最も力を入れたのは、アルバイト先の飲食店での売上向上施策です。"
                    "コロナ禍でお客様が激減し、月間売上が前年比40%減という深刻な状況でした。"
                    "私は店長に提案し、SNSマーケティングとテイクアウトサービスの導入を担当しました。"
                    "InstagramとTwitterで毎日の特別メニューを発信し、フォロワーを0から3000人まで"
                    "増やすことで、テイクアウト利用者が月間200件に達しました。結果、3ヶ月で売上を"
                    "前年比80%まで回復させることができました。この経験から、現状分析と改善提案の"
                    "重要性を学び、御社でも積極的に課題発見・解決に取り組みたいと考えています。"
                ),
                explanation="STAR法に沿って具体的な数字を交えながら、行動と成果が明確に示されている優れた例です。",
            ),
        ],
    ),
    ESTemplate(
        id="career_plan_basic",
        title="キャリアプラン",
        category="career-plan",
        question="入社後のキャリアプランについて教えてください。",
        word_limit=350,
        guidelines=[
            Guideline(text="短期・中期・長期に分けて述べる", markers=["短期", "中期", "長期", "年目", "年後"]),
            Guideline(text="企業の事業内容と関連づける", markers=["御社", "貴社", "事業"]),
            Guideline(text="具体的な目標を設定する", markers=["目標"], pattern=r"\d+年"),
            Guideline(text="学習・成長への意欲を示す", markers=["学び", "学ん", "習得", "成長"]),
        ],
        structure=ESStructure(
            introduction="目標：私のキャリア目標は○○です。",
            body="段階：短期（1-3年）で○○、中期（3-5年）で○○、長期（5-10年）で○○を目指します。",
            conclusion="貢献：これらの経験を通じて、御社の○○に貢献したいと考えています。",
        ),
    ),
    ESTemplate(
        id="teamwork_basic",
        title="チームワーク経験",
        category="teamwork",
        question="チームで取り組んだ経験について、あなたの役割と貢献を教えてください。",
        word_limit=400,
        guidelines=[
            Guideline(text="チーム構成と目標を明確にする", markers=["チーム", "メンバー"], pattern=r"\d+人"),
            Guideline(text="自分の具体的な役割を述べる", markers=["役割", "担当", "私は"]),
            Guideline(text="チーム内での課題と解決策を示す", markers=["課題", "解決", "対立"]),
            Guideline(text="協働の成果を定量化する", pattern=_NUMBERS),
        ],
        structure=ESStructure(
            introduction="チーム：○人チームで○○に取り組みました。",
            body="役割・課題：私は○○として、○○という課題解決に貢献しました。",
            conclusion="成果：結果として○○を達成し、チームワークの重要性を実感しました。",
        ),
    ),
)

_TEMPLATES_BY_ID = MappingProxyType({t.id: t for t in ES_TEMPLATES})


def get_template(template_id: str) -> ESTemplate | None:
    template = _TEMPLATES_BY_ID.get(template_id)
    if template is None:
        logger.warning("Unknown ES template id: %s", template_id)
    return template


def list_templates() -> list[ESTemplate]:
    return list(ES_TEMPLATES)

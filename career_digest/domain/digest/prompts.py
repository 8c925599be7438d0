from career_digest.core.config import settings
from career_digest.domain.digest.schemas import CANDIDATE_TITLE_MAX_LENGTH, RawActivity
from career_digest.domain.enums import AchievementCategory, Significance, enum_values

NO_ACTIVITY_SUMMARY = "今日の活動データがありません。"

DAILY_SUMMARY_PROMPT = """あなたは職務経歴書作成のアシスタントです。
エンジニアの1日の活動データを分析し、職務経歴書に記載できる実績候補を抽出してください。

## 重要ルール
1. **匿名化**: 会社固有のプロジェクト名、コードネーム、チケット番号、社内用語は一般的な表現に置き換える
   - 例: "Project Phoenix" → "社内基幹システム刷新プロジェクト"
   - 例: "JIRA-1234" → 削除
2. **リポジトリの一般化**: リポジトリ名をそのまま出力せず、役割の説明に置き換える
   - 例: "acme/matching-api" → "求人マッチングAPI"
   - 置き換えた説明は repoRole に入れる
3. **構造**: 「何を」「どのように」「どんな成果/インパクト」の構造で記述
4. **技術キーワード**: プログラミング言語、フレームワーク名は正確に残す
5. **除外**: typo修正、README更新等の些末な活動は除外
6. **統合**: 同じリポジトリ内の関連する活動は1つの実績にまとめる
7. **言語**: 日本語で出力

## 活動データ
{activity_list}{manual_section}

## 出力形式
以下のJSONオブジェクトを1つだけ出力してください:
{{
  "dailySummary": "今日の活動の概要（3-5行）",
  "repoSummaries": [
    {{ "repoRole": "リポジトリの役割の説明", "summary": "そのリポジトリでの活動の要約（1-2文）" }}
  ],
  "achievementCandidates": [
    {{
      "title": "実績の短いタイトル（{title_max}文字以内）",
      "description": "職務経歴書に記載できる形式の実績文（2-3文）",
      "category": "{categories}",
      "repoRole": "リポジトリの役割の説明",
      "technologies": ["React", "TypeScript"],
      "significance": "{significances}"
    }}
  ]
}}

活動がない場合や些末な内容のみの場合は、achievementCandidatesを空配列にしてください。"""

MANUAL_NOTES_SECTION = "\n\n## 手動メモ\n{manual_notes}"


def format_activity(activity: RawActivity, body_max_length: int | None = None) -> str:
    """활동 1건을 프롬프트 항목으로 변환"""
    if body_max_length is None:
        body_max_length = settings.activity_body_max_length

    line = f"- [{activity.activity_type.value}] {activity.title}"
    if activity.body:
        line += f"\n  詳細: {activity.body[:body_max_length]}"
    repo = activity.metadata.get("repo")
    if repo:
        line += f"\n  リポジトリ: {repo}"
    return line


def build_daily_summary_prompt(activities: list[RawActivity], manual_notes: str | None = None) -> str:
    activity_list = "\n\n".join(format_activity(a) for a in activities) or "なし"
    manual_section = MANUAL_NOTES_SECTION.format(manual_notes=manual_notes) if manual_notes else ""

    return DAILY_SUMMARY_PROMPT.format(
        activity_list=activity_list,
        manual_section=manual_section,
        title_max=CANDIDATE_TITLE_MAX_LENGTH,
        categories=enum_values(AchievementCategory),
        significances=enum_values(Significance),
    )

import json
from datetime import date

from career_digest.domain.document.schemas import ResumePromptInput
from career_digest.domain.enums import DocumentFormat

FORMAT_LABELS = {
    DocumentFormat.REVERSE_CHRONOLOGICAL: "逆編年体",
    DocumentFormat.CHRONOLOGICAL: "編年体",
    DocumentFormat.CAREER_BASED: "キャリア",
}

RESUME_PROMPT = """あなたは日本の職務経歴書作成の専門家です。
以下のデータを基に、{format_label}形式の職務経歴書コンテンツを生成してください。

## 重要ルール
1. 日本の転職市場で通用するフォーマットに従う
2. 具体的な数値（チーム規模、期間等）がデータにあれば含める
3. 「何を」「どのように」「どんな成果」の構造で実績を記述
4. 技術スタック名は正確に記載
5. 匿名化済みのデータなのでそのまま使用してよい
6. 職務経歴の各社について、提供された実績データから適切なプロジェクトにまとめる{target_rule}

## プロフィールデータ
氏名: {name}{profile_extra}

## 職務経歴データ
{work_histories}

## 実績データ
{achievements}

## スキルデータ
{skills}

## 出力形式
以下のJSON形式で出力してください。各フィールドは日本語で記述してください:
{{
  "title": "職務経歴書",
  "date": "{date_str}",
  "name": "{name}",
  "summary": "職務要約（3-5行で経歴の概要を記述）",
  "skills": [
    {{ "category": "カテゴリ名", "items": ["スキル名1", "スキル名2"] }}
  ],
  "workHistories": [
    {{
      "companyName": "会社名",
      "period": "YYYY年MM月 ～ YYYY年MM月",
      "employmentType": "雇用形態",
      "position": "役職",
      "department": "部署",
      "companyDescription": "会社概要（1文）",
      "projects": [
        {{
          "name": "プロジェクト名",
          "period": "YYYY年MM月 ～ YYYY年MM月",
          "role": "担当役割",
          "teamSize": "チーム規模",
          "description": "プロジェクト概要",
          "achievements": ["実績1（具体的に）", "実績2"],
          "technologies": ["技術1", "技術2"]
        }}
      ]
    }}
  ],
  "selfPR": "自己PR（3-5行）"
}}

JSONのみ出力してください。"""


def format_document_date(today: date | None = None) -> str:
    """YYYY年M月D日"""
    today = today or date.today()
    return f"{today.year}年{today.month}月{today.day}日"


def _to_json(items: list) -> str:
    return json.dumps(
        [item.model_dump(by_alias=True) for item in items], ensure_ascii=False, indent=2
    )


def build_resume_prompt(prompt_input: ResumePromptInput, today: date | None = None) -> str:
    profile = prompt_input.profile
    name = f"{profile.last_name} {profile.first_name}".strip()

    profile_extra = ""
    if profile.summary:
        profile_extra += f"\n職務要約: {profile.summary}"
    if profile.self_introduction:
        profile_extra += f"\n自己紹介: {profile.self_introduction}"

    target_rule = ""
    if prompt_input.target_company:
        target = prompt_input.target_company
        if prompt_input.target_position:
            target += f" ({prompt_input.target_position})"
        target_rule = f"\n7. 応募先: {target} に合わせた強調ポイントを選択"

    return RESUME_PROMPT.format(
        format_label=FORMAT_LABELS[prompt_input.format],
        target_rule=target_rule,
        name=name,
        profile_extra=profile_extra,
        work_histories=_to_json(prompt_input.work_histories),
        achievements=_to_json(prompt_input.achievements),
        skills=_to_json(prompt_input.skills),
        date_str=format_document_date(today),
    )

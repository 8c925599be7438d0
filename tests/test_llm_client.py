"""LLM 클라이언트 테스트"""

import json
from unittest.mock import patch

import pytest
from langchain_core.messages import HumanMessage

from career_digest.core.exceptions import GenerationParseError, LLMError
from career_digest.domain.digest.prompts import NO_ACTIVITY_SUMMARY
from career_digest.domain.digest.schemas import DailySummaryResult
from career_digest.domain.document.schemas import (
    AchievementInput,
    ProfileInput,
    ResumePromptInput,
)
from career_digest.domain.enums import AchievementCategory, DocumentFormat, Significance
from career_digest.infra.llm.client import (
    _message_text,
    generate_resume_document,
    parse_model_output,
    strip_code_fence,
    summarize_activities,
)


class TestStripCodeFence:
    """strip_code_fence 함수 테스트"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('```json\n{"a": 1}\n```', '{"a": 1}'),
            ('```\n{"a": 1}\n```', '{"a": 1}'),
            ('  {"a": 1}  ', '{"a": 1}'),
            ('설명입니다\n```json\n{"a": 1}\n```\n끝', '{"a": 1}'),
        ],
    )
    def test_strip(self, text, expected):
        assert strip_code_fence(text) == expected


class TestMessageText:
    """프로바이더별 content 형식 변환"""

    def test_plain_string(self):
        assert _message_text("hello") == "hello"

    def test_content_blocks(self):
        content = [{"type": "text", "text": "{\"a\""}, {"type": "text", "text": ": 1}"}]
        assert _message_text(content) == '{"a": 1}'


class TestParseModelOutput:
    """parse_model_output 함수 테스트"""

    def test_valid_payload(self, sample_summary_payload):
        result = parse_model_output(json.dumps(sample_summary_payload), DailySummaryResult)

        assert result.daily_summary.startswith("決済Webhook")
        candidate = result.achievement_candidates[0]
        assert candidate.category == AchievementCategory.DEVELOPMENT
        assert candidate.significance == Significance.HIGH
        assert candidate.repo_role == "決済API"

    def test_not_json(self):
        with pytest.raises(GenerationParseError):
            parse_model_output("すみません、できません", DailySummaryResult)

    def test_missing_required_field(self, sample_summary_payload):
        del sample_summary_payload["achievementCandidates"]
        with pytest.raises(GenerationParseError):
            parse_model_output(json.dumps(sample_summary_payload), DailySummaryResult)

    def test_unknown_category(self, sample_summary_payload):
        sample_summary_payload["achievementCandidates"][0]["category"] = "marketing"
        with pytest.raises(GenerationParseError):
            parse_model_output(json.dumps(sample_summary_payload), DailySummaryResult)

    def test_title_too_long(self, sample_summary_payload):
        sample_summary_payload["achievementCandidates"][0]["title"] = "あ" * 21
        with pytest.raises(GenerationParseError):
            parse_model_output(json.dumps(sample_summary_payload), DailySummaryResult)

    def test_empty_description(self, sample_summary_payload):
        sample_summary_payload["achievementCandidates"][0]["description"] = ""
        with pytest.raises(GenerationParseError):
            parse_model_output(json.dumps(sample_summary_payload), DailySummaryResult)


class TestSummarizeActivities:
    """summarize_activities 함수 테스트"""

    @pytest.mark.asyncio
    async def test_empty_input_skips_llm(self):
        """활동과 메모가 모두 없으면 LLM을 호출하지 않음"""
        with patch("career_digest.infra.llm.client.get_generator_client") as mock_factory:
            result = await summarize_activities([], None)

        mock_factory.assert_not_called()
        assert result.daily_summary == NO_ACTIVITY_SUMMARY
        assert result.achievement_candidates == []

    @pytest.mark.asyncio
    async def test_blank_notes_also_skip_llm(self):
        with patch("career_digest.infra.llm.client.get_generator_client") as mock_factory:
            result = await summarize_activities([], "")

        mock_factory.assert_not_called()
        assert result.daily_summary == NO_ACTIVITY_SUMMARY

    @pytest.mark.asyncio
    async def test_fenced_reply_is_parsed(self, mock_llm, sample_activities, sample_summary_payload):
        mock_llm.reply("```json\n" + json.dumps(sample_summary_payload, ensure_ascii=False) + "\n```")

        result = await summarize_activities(sample_activities, session_id="s-1")

        assert len(result.achievement_candidates) == 1
        assert result.repo_summaries[0].repo_role == "決済API"

        messages = mock_llm.ainvoke.call_args.args[0]
        assert isinstance(messages[0], HumanMessage)
        assert "Add retry to payment webhook" in messages[0].content
        config = mock_llm.ainvoke.call_args.kwargs["config"]
        assert config["metadata"]["langfuse_session_id"] == "s-1"

    @pytest.mark.asyncio
    async def test_manual_notes_only_calls_llm(self, mock_llm, sample_summary_payload):
        mock_llm.reply_json(sample_summary_payload)

        await summarize_activities([], "設計レビューを実施")

        prompt = mock_llm.ainvoke.call_args.args[0][0].content
        assert "設計レビューを実施" in prompt
        assert "## 手動メモ" in prompt

    @pytest.mark.asyncio
    async def test_invalid_reply_raises_parse_error(self, mock_llm, sample_activities):
        """검증 실패 시 폴백 없이 예외"""
        mock_llm.reply('{"dailySummary": "x"}')

        with pytest.raises(GenerationParseError):
            await summarize_activities(sample_activities)

    @pytest.mark.asyncio
    async def test_provider_failure_raises_llm_error(self, mock_llm, sample_activities):
        mock_llm.ainvoke.side_effect = TimeoutError("timed out")

        with pytest.raises(LLMError) as exc_info:
            await summarize_activities(sample_activities)

        assert exc_info.value.detail == "TimeoutError"


class TestGenerateResumeDocument:
    """generate_resume_document 함수 테스트"""

    @pytest.fixture
    def prompt_input(self) -> ResumePromptInput:
        return ResumePromptInput(
            format=DocumentFormat.REVERSE_CHRONOLOGICAL,
            profile=ProfileInput(last_name="山田", first_name="太郎"),
            achievements=[
                AchievementInput(
                    title="Webhook再送処理の実装",
                    description="再送処理を実装",
                    category="development",
                    technologies=["Python"],
                    period="2025-03",
                    project_name="決済基盤刷新",
                )
            ],
        )

    @pytest.mark.asyncio
    async def test_returns_structured_content(self, mock_llm, prompt_input, sample_document_payload):
        mock_llm.reply_json(sample_document_payload)

        content = await generate_resume_document(prompt_input)

        assert content.name == "山田 太郎"
        assert content.work_histories[0].projects[0].team_size == "5名"
        assert content.self_pr.startswith("信頼性")

        tags = mock_llm.ainvoke.call_args.kwargs["config"]["metadata"]["langfuse_tags"]
        assert "document" in tags

    @pytest.mark.asyncio
    async def test_missing_fields_raise_parse_error(self, mock_llm, prompt_input):
        mock_llm.reply_json({"title": "職務経歴書"})

        with pytest.raises(GenerationParseError):
            await generate_resume_document(prompt_input)

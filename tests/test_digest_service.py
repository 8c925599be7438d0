"""수집 파이프라인 서비스 테스트"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from career_digest.core.exceptions import GenerationParseError, GitHubAPIError, LLMError
from career_digest.domain.digest.prompts import NO_ACTIVITY_SUMMARY
from career_digest.domain.digest.schemas import RepoActivityResult
from career_digest.domain.digest.service import collect_daily_digest, today_utc
from career_digest.domain.enums import (
    ActivityType,
    CandidateStatus,
    ConnectionStatus,
    DigestStatus,
)
from career_digest.infra.db.models import AchievementCandidate, DailyDigest

DATE = "2025-03-01"
COLLECTOR = "career_digest.domain.digest.service.collect_github_activities"


def _results(activities, failed_repo: str | None = None) -> list[RepoActivityResult]:
    results = [
        RepoActivityResult(repo="acme/svc", category=ActivityType.PR_MERGED, activities=activities)
    ]
    if failed_repo:
        results.append(
            RepoActivityResult(
                repo=failed_repo, category=ActivityType.PR_REVIEWED, error="HTTPStatusError"
            )
        )
    return results


class TestCollectDailyDigest:
    """collect_daily_digest 테스트"""

    @pytest.mark.asyncio
    async def test_no_connection_and_no_notes_skips_llm(self, session, user_id, mock_llm):
        outcome = await collect_daily_digest(session, user_id, date=DATE)

        mock_llm.ainvoke.assert_not_called()
        assert outcome.digest.summary_text == NO_ACTIVITY_SUMMARY
        assert outcome.digest.status == DigestStatus.READY
        assert outcome.digest.activity_count == 0
        assert outcome.candidates == []

    @pytest.mark.asyncio
    async def test_manual_notes_without_connection(
        self, session, user_id, mock_llm, sample_summary_payload
    ):
        mock_llm.reply_json(sample_summary_payload)

        outcome = await collect_daily_digest(session, user_id, date=DATE, manual_notes="設計レビュー")

        mock_llm.ainvoke.assert_awaited_once()
        assert outcome.digest.activity_count == 0
        assert len(outcome.candidates) == 1

    @pytest.mark.asyncio
    async def test_collects_selected_repositories(
        self,
        session,
        user_id,
        github_connection,
        mock_llm,
        sample_activities,
        sample_summary_payload,
    ):
        mock_llm.reply_json(sample_summary_payload)
        with patch(COLLECTOR, new=AsyncMock(return_value=_results(sample_activities))) as collector:
            outcome = await collect_daily_digest(session, user_id, date=DATE)

        collector.assert_awaited_once_with("ghp_test", ["acme/svc"], DATE)
        assert outcome.digest.activity_count == 2
        assert outcome.digest.status == DigestStatus.READY
        assert outcome.digest.repo_summaries == [
            {"repoRole": "決済API", "summary": "Webhook再送処理を実装した。"}
        ]

        candidate = outcome.candidates[0]
        assert candidate.status == CandidateStatus.PENDING
        assert candidate.repo_role == "決済API"
        assert candidate.technologies == ["Python", "FastAPI"]

        session.refresh(github_connection)
        assert github_connection.last_sync_at is not None

    @pytest.mark.asyncio
    async def test_inactive_connection_is_not_collected(
        self, session, user_id, github_connection, mock_llm
    ):
        github_connection.status = ConnectionStatus.ERROR
        session.add(github_connection)
        session.commit()

        with patch(COLLECTOR, new=AsyncMock()) as collector:
            outcome = await collect_daily_digest(session, user_id, date=DATE)

        collector.assert_not_awaited()
        assert outcome.digest.activity_count == 0

    @pytest.mark.asyncio
    async def test_partial_failures_become_warnings(
        self,
        session,
        user_id,
        github_connection,
        mock_llm,
        sample_activities,
        sample_summary_payload,
    ):
        mock_llm.reply_json(sample_summary_payload)
        results = _results(sample_activities, failed_repo="acme/svc")
        with patch(COLLECTOR, new=AsyncMock(return_value=results)):
            outcome = await collect_daily_digest(session, user_id, date=DATE)

        assert len(outcome.warnings) == 1
        assert outcome.warnings[0].category == ActivityType.PR_REVIEWED
        assert outcome.digest.status == DigestStatus.READY

    @pytest.mark.asyncio
    async def test_github_auth_failure_writes_nothing(
        self, session, user_id, github_connection, mock_llm
    ):
        with patch(COLLECTOR, new=AsyncMock(side_effect=GitHubAPIError(detail="HTTP 401"))):
            with pytest.raises(GitHubAPIError):
                await collect_daily_digest(session, user_id, date=DATE)

        assert session.exec(select(DailyDigest)).all() == []

    @pytest.mark.asyncio
    async def test_recollection_is_idempotent(
        self, session, user_id, mock_llm, sample_summary_payload
    ):
        """같은 날짜 재수집은 다이제스트 1건, pending 후보는 교체"""
        mock_llm.reply_json(sample_summary_payload)

        first = await collect_daily_digest(session, user_id, date=DATE, manual_notes="メモ")
        second = await collect_daily_digest(session, user_id, date=DATE, manual_notes="メモ")

        assert first.digest.id == second.digest.id
        assert len(session.exec(select(DailyDigest)).all()) == 1
        pending = session.exec(
            select(AchievementCandidate).where(
                AchievementCandidate.status == CandidateStatus.PENDING
            )
        ).all()
        assert len(pending) == 1

    @pytest.mark.parametrize(
        "configure",
        [
            lambda llm: llm.reply("not json at all"),
            lambda llm: setattr(llm.ainvoke, "side_effect", RuntimeError("provider down")),
        ],
        ids=["parse-failure", "provider-failure"],
    )
    @pytest.mark.asyncio
    async def test_summarize_failure_rolls_back_to_collecting(
        self, session, user_id, mock_llm, configure
    ):
        configure(mock_llm)

        with pytest.raises((GenerationParseError, LLMError)):
            await collect_daily_digest(session, user_id, date=DATE, manual_notes="メモ")

        digest = session.exec(select(DailyDigest)).one()
        assert digest.status == DigestStatus.COLLECTING
        assert digest.summary_text is None
        assert session.exec(select(AchievementCandidate)).all() == []

    @pytest.mark.asyncio
    async def test_save_failure_after_summary_rolls_back_to_collecting(
        self, session, user_id, mock_llm, sample_summary_payload
    ):
        """요약 성공 후 저장 실패 시 collecting 복귀, 기존 pending 후보 유지"""
        mock_llm.reply_json(sample_summary_payload)
        first = await collect_daily_digest(session, user_id, date=DATE, manual_notes="メモ")
        previous_ids = {c.id for c in first.candidates}

        with patch.object(session, "add_all", side_effect=SQLAlchemyError("db down")):
            with pytest.raises(SQLAlchemyError):
                await collect_daily_digest(session, user_id, date=DATE, manual_notes="メモ")

        digest = session.exec(select(DailyDigest)).one()
        assert digest.status == DigestStatus.COLLECTING
        candidates = session.exec(select(AchievementCandidate)).all()
        assert {c.id for c in candidates} == previous_ids

    @pytest.mark.asyncio
    async def test_default_date_is_today_utc(self, session, user_id, mock_llm):
        outcome = await collect_daily_digest(session, user_id)

        assert outcome.digest.date == today_utc()

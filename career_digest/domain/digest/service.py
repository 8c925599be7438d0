from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from career_digest.core.exceptions import GenerationParseError, LLMError
from career_digest.core.logging import get_logger
from career_digest.domain.connection.service import load_active_github_config, mark_synced
from career_digest.domain.digest.schemas import RawActivity, RepoActivityResult
from career_digest.domain.enums import DigestStatus
from career_digest.infra.db.models import AchievementCandidate, DailyDigest
from career_digest.infra.db.repositories import DigestRepository
from career_digest.infra.github.client import (
    collect_github_activities,
    failed_results,
    flatten_activities,
)
from career_digest.infra.llm.client import summarize_activities

logger = get_logger(__name__)


@dataclass
class CollectOutcome:
    digest: DailyDigest
    candidates: list[AchievementCandidate]
    warnings: list[RepoActivityResult] = field(default_factory=list)


def today_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


async def gather_activities(
    session: Session, user_id: str, date: str
) -> tuple[list[RawActivity], list[RepoActivityResult]]:
    """선택된 레포지토리의 하루 활동 수집

    active GitHub 연결이 없거나 선택된 레포지토리가 없으면 빈 결과
    """
    config = load_active_github_config(session, user_id)
    if config is None or not config.selected_repos:
        logger.info("GitHub 수집 대상 없음 date=%s", date)
        return [], []

    results = await collect_github_activities(config.token, config.selected_repos, date)
    mark_synced(session, user_id)
    return flatten_activities(results), failed_results(results)


async def collect_daily_digest(
    session: Session,
    user_id: str,
    date: str | None = None,
    manual_notes: str | None = None,
) -> CollectOutcome:
    """하루치 활동 수집 → 요약 → 후보 저장

    같은 날짜로 다시 호출하면 다이제스트 1건을 갱신하고
    아직 검토되지 않은 후보는 새 후보로 교체된다.
    요약 또는 결과 저장이 실패하면 다이제스트는 collecting 상태로 돌아가고
    예외가 전파된다.
    """
    date = date or today_utc()
    activities, warnings = await gather_activities(session, user_id, date)

    repository = DigestRepository(session)
    digest = repository.upsert_for_collection(user_id, date, len(activities))
    digest = repository.set_status(digest, DigestStatus.SUMMARIZING)

    try:
        result = await summarize_activities(
            activities, manual_notes, session_id=f"digest-{digest.id}"
        )
        candidates = repository.complete(digest, result)
    except (LLMError, GenerationParseError, SQLAlchemyError) as e:
        repository.set_status(digest, DigestStatus.COLLECTING)
        logger.warning("요약 실패, 다이제스트 롤백 date=%s error=%s", date, type(e).__name__)
        raise

    logger.info(
        "다이제스트 완료 date=%s activities=%d candidates=%d warnings=%d",
        date,
        len(activities),
        len(candidates),
        len(warnings),
    )
    return CollectOutcome(digest=digest, candidates=candidates, warnings=warnings)


def list_digests(session: Session, user_id: str, limit: int = 30) -> list[DailyDigest]:
    return DigestRepository(session).list_recent(user_id, limit)


def list_pending_candidates(
    session: Session, user_id: str
) -> list[tuple[AchievementCandidate, str]]:
    return DigestRepository(session).list_pending_candidates(user_id)

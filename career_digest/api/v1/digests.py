from fastapi import APIRouter, Request

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    AchievementResponse,
    CandidateResponse,
    CollectRequest,
    CollectResponse,
    CollectWarning,
    DigestResponse,
    ReviewRequest,
    ReviewResult,
)
from career_digest.core.config import settings
from career_digest.core.limiter import limiter
from career_digest.core.logging import get_logger
from career_digest.domain.achievement.service import review_candidate
from career_digest.domain.digest.service import (
    collect_daily_digest,
    list_digests,
    list_pending_candidates,
)

router = APIRouter(tags=["digest"])
logger = get_logger(__name__)


@router.post("/collect", response_model=CollectResponse)
@limiter.limit(settings.collect_rate_limit)
async def collect(
    request: Request, payload: CollectRequest, session: SessionDep, user_id: UserIdDep
) -> CollectResponse:
    """하루치 활동 수집 후 요약과 실적 후보 생성"""
    outcome = await collect_daily_digest(
        session, user_id, date=payload.date, manual_notes=payload.manual_notes
    )
    return CollectResponse(
        digest=DigestResponse.model_validate(outcome.digest),
        candidates=[CandidateResponse.model_validate(c) for c in outcome.candidates],
        warnings=[
            CollectWarning(repo=w.repo, category=w.category, error=w.error or "")
            for w in outcome.warnings
        ],
    )


@router.get("/digests", response_model=list[DigestResponse])
async def get_digests(session: SessionDep, user_id: UserIdDep) -> list[DigestResponse]:
    return [DigestResponse.model_validate(d) for d in list_digests(session, user_id)]


@router.get("/candidates", response_model=list[CandidateResponse])
async def get_candidates(session: SessionDep, user_id: UserIdDep) -> list[CandidateResponse]:
    """검토 대기 후보 목록 (다이제스트 날짜 포함)"""
    return [
        CandidateResponse.model_validate(candidate).model_copy(update={"digest_date": date})
        for candidate, date in list_pending_candidates(session, user_id)
    ]


@router.patch("/candidates", response_model=AchievementResponse | ReviewResult)
async def patch_candidate(
    payload: ReviewRequest, session: SessionDep, user_id: UserIdDep
) -> AchievementResponse | ReviewResult:
    """후보 승인(실적 생성) 또는 거절"""
    achievement = review_candidate(
        session,
        user_id,
        payload.candidate_id,
        payload.action,
        edited_title=payload.edited_title,
        edited_description=payload.edited_description,
    )
    if achievement is None:
        return ReviewResult(success=True)
    return AchievementResponse.model_validate(achievement)

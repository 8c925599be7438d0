import uuid

from fastapi import APIRouter

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    ProfileResponse,
    ProfileUpdate,
    ReviewResult,
    SkillCreate,
    SkillResponse,
    WorkHistoryCreate,
    WorkHistoryResponse,
)
from career_digest.domain.profile import service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(session: SessionDep, user_id: UserIdDep) -> ProfileResponse:
    """프로필 조회, 미등록이면 exists=false인 빈 프로필"""
    profile = service.get_profile(session, user_id)
    if profile is None:
        return ProfileResponse(exists=False)
    return ProfileResponse.model_validate(profile)


@router.put("", response_model=ProfileResponse)
async def put_profile(payload: ProfileUpdate, session: SessionDep, user_id: UserIdDep) -> ProfileResponse:
    profile = service.upsert_profile(session, user_id, payload.model_dump())
    return ProfileResponse.model_validate(profile)


@router.get("/work-histories", response_model=list[WorkHistoryResponse])
async def get_work_histories(session: SessionDep, user_id: UserIdDep) -> list[WorkHistoryResponse]:
    return [WorkHistoryResponse.model_validate(w) for w in service.list_work_histories(session, user_id)]


@router.post("/work-histories", response_model=WorkHistoryResponse, status_code=201)
async def post_work_history(
    payload: WorkHistoryCreate, session: SessionDep, user_id: UserIdDep
) -> WorkHistoryResponse:
    work_history = service.add_work_history(session, user_id, payload.model_dump())
    return WorkHistoryResponse.model_validate(work_history)


@router.delete("/work-histories/{work_history_id}", response_model=ReviewResult)
async def remove_work_history(
    work_history_id: uuid.UUID, session: SessionDep, user_id: UserIdDep
) -> ReviewResult:
    service.delete_work_history(session, user_id, work_history_id)
    return ReviewResult(success=True)


@router.get("/skills", response_model=list[SkillResponse])
async def get_skills(session: SessionDep, user_id: UserIdDep) -> list[SkillResponse]:
    return [SkillResponse.model_validate(s) for s in service.list_skills(session, user_id)]


@router.post("/skills", response_model=SkillResponse, status_code=201)
async def post_skill(payload: SkillCreate, session: SessionDep, user_id: UserIdDep) -> SkillResponse:
    return SkillResponse.model_validate(service.add_skill(session, user_id, payload.model_dump()))


@router.delete("/skills/{skill_id}", response_model=ReviewResult)
async def remove_skill(skill_id: uuid.UUID, session: SessionDep, user_id: UserIdDep) -> ReviewResult:
    service.delete_skill(session, user_id, skill_id)
    return ReviewResult(success=True)

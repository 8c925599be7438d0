import uuid

from fastapi import APIRouter, Query

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    AchievementCreate,
    AchievementResponse,
    AchievementUpdate,
    ReviewResult,
)
from career_digest.domain.achievement.service import (
    create_achievement,
    delete_achievement,
    list_achievements,
    update_achievement,
)
from career_digest.domain.enums import AchievementCategory

router = APIRouter(prefix="/achievements", tags=["achievements"])

# null로 덮어쓸 수 없는 컬럼
REQUIRED_FIELDS = {"title", "description", "category", "technologies", "sort_order"}


@router.get("", response_model=list[AchievementResponse])
async def get_achievements(
    session: SessionDep,
    user_id: UserIdDep,
    category: AchievementCategory | None = None,
    period: str | None = Query(default=None, max_length=10),
    project_id: uuid.UUID | None = Query(default=None, alias="projectId"),
) -> list[AchievementResponse]:
    achievements = list_achievements(
        session, user_id, category=category, period=period, project_id=project_id
    )
    return [AchievementResponse.model_validate(a) for a in achievements]


@router.post("", response_model=AchievementResponse, status_code=201)
async def post_achievement(
    payload: AchievementCreate, session: SessionDep, user_id: UserIdDep
) -> AchievementResponse:
    achievement = create_achievement(session, user_id, payload.model_dump())
    return AchievementResponse.model_validate(achievement)


@router.patch("/{achievement_id}", response_model=AchievementResponse)
async def patch_achievement(
    achievement_id: uuid.UUID,
    payload: AchievementUpdate,
    session: SessionDep,
    user_id: UserIdDep,
) -> AchievementResponse:
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    achievement = update_achievement(session, user_id, achievement_id, changes)
    return AchievementResponse.model_validate(achievement)


@router.delete("/{achievement_id}", response_model=ReviewResult)
async def remove_achievement(
    achievement_id: uuid.UUID, session: SessionDep, user_id: UserIdDep
) -> ReviewResult:
    delete_achievement(session, user_id, achievement_id)
    return ReviewResult(success=True)

import uuid

from fastapi import APIRouter

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    ReviewResult,
)
from career_digest.domain.achievement.service import (
    create_project,
    delete_project,
    list_projects,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def get_projects(session: SessionDep, user_id: UserIdDep) -> list[ProjectResponse]:
    return [ProjectResponse.model_validate(p) for p in list_projects(session, user_id)]


@router.post("", response_model=ProjectResponse, status_code=201)
async def post_project(
    payload: ProjectCreate, session: SessionDep, user_id: UserIdDep
) -> ProjectResponse:
    return ProjectResponse.model_validate(create_project(session, user_id, payload.model_dump()))


@router.patch("/{project_id}", response_model=ProjectResponse)
async def patch_project(
    project_id: uuid.UUID, payload: ProjectUpdate, session: SessionDep, user_id: UserIdDep
) -> ProjectResponse:
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name", "") is None:
        del changes["name"]
    return ProjectResponse.model_validate(update_project(session, user_id, project_id, changes))


@router.delete("/{project_id}", response_model=ReviewResult)
async def remove_project(project_id: uuid.UUID, session: SessionDep, user_id: UserIdDep) -> ReviewResult:
    """프로젝트 삭제, 연결된 실적은 유지"""
    delete_project(session, user_id, project_id)
    return ReviewResult(success=True)

from fastapi import APIRouter

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    ConnectionTestResponse,
    GitHubTokenRequest,
    RepoToggleRequest,
    RepoToggleResponse,
)
from career_digest.domain.connection.schemas import GitHubConnectionView
from career_digest.domain.connection.service import (
    connect_github,
    get_github_connection,
    toggle_repository,
    verify_github_connection,
)

router = APIRouter(prefix="/settings/github", tags=["settings"])


@router.get("", response_model=GitHubConnectionView)
async def get_connection(session: SessionDep, user_id: UserIdDep) -> GitHubConnectionView:
    """연결 상태와 레포지토리 선택 목록 (토큰은 반환하지 않음)"""
    return get_github_connection(session, user_id)


@router.post("", response_model=GitHubConnectionView)
async def save_token(
    payload: GitHubTokenRequest, session: SessionDep, user_id: UserIdDep
) -> GitHubConnectionView:
    return await connect_github(session, user_id, payload.token)


@router.put("/repos", response_model=RepoToggleResponse)
async def toggle_repo(
    payload: RepoToggleRequest, session: SessionDep, user_id: UserIdDep
) -> RepoToggleResponse:
    repo = toggle_repository(session, user_id, payload.repo_full_name)
    return RepoToggleResponse(full_name=repo.full_name, selected=repo.selected)


@router.post("/test", response_model=ConnectionTestResponse)
async def check_connection(session: SessionDep, user_id: UserIdDep) -> ConnectionTestResponse:
    username = await verify_github_connection(session, user_id)
    return ConnectionTestResponse(username=username)

"""GitHub 연결 설정 API 스키마"""

from pydantic import Field

from career_digest.api.v1.schemas.base import CamelModel


class GitHubTokenRequest(CamelModel):
    token: str = Field(min_length=1)


class RepoToggleRequest(CamelModel):
    repo_full_name: str = Field(min_length=1)


class RepoToggleResponse(CamelModel):
    success: bool = True
    full_name: str
    selected: bool


class ConnectionTestResponse(CamelModel):
    username: str

from pydantic import BaseModel, ConfigDict, Field

GITHUB_SERVICE = "github"


class GitHubRepo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    selected: bool = False


class GitHubConfig(BaseModel):
    """암호화되어 저장되는 GitHub 연결 설정"""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    username: str
    repos: list[GitHubRepo] = Field(default_factory=list)

    @property
    def selected_repos(self) -> list[str]:
        return [repo.full_name for repo in self.repos if repo.selected]


class GitHubConnectionView(BaseModel):
    """토큰을 제외한 연결 상태"""

    model_config = ConfigDict(populate_by_name=True)

    connected: bool
    username: str | None = None
    repos: list[GitHubRepo] = Field(default_factory=list)

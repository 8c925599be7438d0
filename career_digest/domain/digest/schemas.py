from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from career_digest.domain.enums import ActivityType, AchievementCategory, Significance

CANDIDATE_TITLE_MAX_LENGTH = 20


class RawActivity(BaseModel):
    """수집된 활동 1건. 저장하지 않음"""

    source: Literal["github"] = "github"
    activity_type: ActivityType
    title: str
    body: str = ""
    external_url: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class RepoActivityResult(BaseModel):
    """레포지토리 x 카테고리 단위 수집 결과"""

    repo: str
    category: ActivityType
    activities: list[RawActivity] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CandidateOutput(BaseModel):
    """LLM이 제안한 실적 후보"""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=CANDIDATE_TITLE_MAX_LENGTH)
    description: str = Field(min_length=1)
    category: AchievementCategory
    repo_role: str | None = Field(default=None, alias="repoRole")
    technologies: list[str]
    significance: Significance


class RepoSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_role: str = Field(alias="repoRole")
    summary: str


class DailySummaryResult(BaseModel):
    """일일 요약 LLM 출력"""

    model_config = ConfigDict(populate_by_name=True)

    daily_summary: str = Field(min_length=1, alias="dailySummary")
    repo_summaries: list[RepoSummary] = Field(default_factory=list, alias="repoSummaries")
    achievement_candidates: list[CandidateOutput] = Field(alias="achievementCandidates")

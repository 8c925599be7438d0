"""수집 / 다이제스트 / 후보 API 스키마"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from career_digest.api.v1.schemas.base import (
    DATE_PATTERN,
    CamelModel,
    blank_to_none,
    ensure_calendar_date,
)
from career_digest.domain.enums import (
    AchievementCategory,
    ActivityType,
    CandidateStatus,
    DigestStatus,
    ReviewAction,
    Significance,
)


class CollectRequest(CamelModel):
    """수집 요청. date 미지정 시 오늘(UTC)"""

    date: str | None = Field(default=None, pattern=DATE_PATTERN)
    manual_notes: str | None = Field(default=None, max_length=5000)

    @field_validator("date", "manual_notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("date")
    @classmethod
    def _real_date(cls, v):
        return ensure_calendar_date(v)


class DigestResponse(CamelModel):
    id: uuid.UUID
    date: str
    activity_count: int
    summary: str | None = Field(default=None, validation_alias="summary_text")
    repo_summaries: list[dict[str, Any]] = Field(default_factory=list)
    status: DigestStatus
    created_at: datetime
    updated_at: datetime

    @field_validator("repo_summaries", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class CandidateResponse(CamelModel):
    id: uuid.UUID
    digest_id: uuid.UUID
    title: str
    description: str
    category: AchievementCategory
    repo_role: str | None = None
    technologies: list[str] = Field(default_factory=list)
    significance: Significance
    status: CandidateStatus
    created_at: datetime
    digest_date: str | None = None


class CollectWarning(CamelModel):
    """부분 실패한 레포지토리/카테고리"""

    repo: str
    category: ActivityType
    error: str


class CollectResponse(CamelModel):
    digest: DigestResponse
    candidates: list[CandidateResponse]
    warnings: list[CollectWarning] = Field(default_factory=list)


class ReviewRequest(CamelModel):
    candidate_id: uuid.UUID
    action: ReviewAction
    edited_title: str | None = Field(default=None, max_length=100)
    edited_description: str | None = Field(default=None, max_length=2000)

    @field_validator("edited_title", "edited_description", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ReviewResult(CamelModel):
    success: bool = True

"""실적 / 프로젝트 API 스키마"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from career_digest.api.v1.schemas.base import (
    PERIOD_PATTERN,
    YEAR_MONTH_PATTERN,
    CamelModel,
    blank_to_none,
)
from career_digest.domain.enums import AchievementCategory


class AchievementCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    category: AchievementCategory
    technologies: list[str] = Field(default_factory=list)
    period: str | None = Field(default=None, pattern=PERIOD_PATTERN)
    project_id: uuid.UUID | None = None
    sort_order: int = 0

    @field_validator("period", "project_id", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class AchievementUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    category: AchievementCategory | None = None
    technologies: list[str] | None = None
    period: str | None = Field(default=None, pattern=PERIOD_PATTERN)
    project_id: uuid.UUID | None = None
    sort_order: int | None = None

    @field_validator("period", "project_id", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class AchievementResponse(CamelModel):
    id: uuid.UUID
    candidate_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    title: str
    description: str
    category: AchievementCategory
    technologies: list[str] = Field(default_factory=list)
    period: str | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    start_date: str | None = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    end_date: str | None = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    description: str | None = Field(default=None, max_length=5000)
    role: str | None = Field(default=None, max_length=200)
    team_size: str | None = Field(default=None, max_length=50)

    @field_validator("company", "start_date", "end_date", "description", "role", "team_size", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProjectUpdate(ProjectCreate):
    name: str | None = Field(default=None, min_length=1, max_length=200)


class ProjectResponse(CamelModel):
    id: uuid.UUID
    name: str
    company: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    role: str | None = None
    team_size: str | None = None
    created_at: datetime
    updated_at: datetime

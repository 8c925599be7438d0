"""프로필 / 직력 / 스킬 API 스키마"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from career_digest.api.v1.schemas.base import YEAR_MONTH_PATTERN, CamelModel, blank_to_none


class ProfileUpdate(CamelModel):
    last_name: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=50)
    last_name_kana: str | None = Field(default=None, max_length=50)
    first_name_kana: str | None = Field(default=None, max_length=50)
    birth_date: str | None = None
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=500)
    self_introduction: str | None = Field(default=None, max_length=5000)
    summary: str | None = Field(default=None, max_length=5000)

    @field_validator(
        "last_name_kana",
        "first_name_kana",
        "birth_date",
        "email",
        "phone",
        "address",
        "self_introduction",
        "summary",
        mode="before",
    )
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProfileResponse(CamelModel):
    exists: bool = True
    last_name: str = ""
    first_name: str = ""
    last_name_kana: str | None = None
    first_name_kana: str | None = None
    birth_date: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    self_introduction: str | None = None
    summary: str | None = None


class WorkHistoryCreate(CamelModel):
    company_name: str = Field(min_length=1, max_length=200)
    company_description: str | None = Field(default=None, max_length=2000)
    employment_type: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=200)
    department: str | None = Field(default=None, max_length=200)
    start_date: str = Field(pattern=YEAR_MONTH_PATTERN)
    end_date: str | None = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    is_current: bool = False
    responsibilities: str | None = Field(default=None, max_length=5000)
    sort_order: int = 0

    @field_validator(
        "company_description",
        "employment_type",
        "position",
        "department",
        "end_date",
        "responsibilities",
        mode="before",
    )
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class WorkHistoryResponse(CamelModel):
    id: uuid.UUID
    company_name: str
    company_description: str | None = None
    employment_type: str | None = None
    position: str | None = None
    department: str | None = None
    start_date: str
    end_date: str | None = None
    is_current: bool
    responsibilities: str | None = None
    sort_order: int
    created_at: datetime


class SkillCreate(CamelModel):
    category: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=200)
    level: str | None = None
    years_of_experience: int | None = Field(default=None, ge=0, le=50)
    sort_order: int = 0

    @field_validator("level", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class SkillResponse(CamelModel):
    id: uuid.UUID
    category: str
    name: str
    level: str | None = None
    years_of_experience: int | None = None
    sort_order: int

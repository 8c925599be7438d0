"""
SQLModel 테이블 정의

user_id는 상위 인증 계층이 넘겨주는 식별자 문자열
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from career_digest.domain.enums import (
    AchievementCategory,
    CandidateStatus,
    ConnectionStatus,
    DigestStatus,
    DocumentFormat,
    DocumentStatus,
    DocumentType,
    Significance,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampModel(SQLModel):
    """created_at / updated_at 공통 필드"""

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_column_kwargs={"onupdate": utcnow},
    )


class ServiceConnection(TimestampModel, table=True):
    __tablename__ = "service_connections"
    __table_args__ = (UniqueConstraint("user_id", "service", name="uix_connection_user_service"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    service: str = Field(nullable=False)
    label: str = Field(nullable=False)
    # AES-256-GCM 암호화된 JSON {token, username, repos}
    encrypted_config: str = Field(nullable=False)
    status: ConnectionStatus = Field(default=ConnectionStatus.ACTIVE, nullable=False)
    last_sync_at: Optional[datetime] = None


class DailyDigest(TimestampModel, table=True):
    __tablename__ = "daily_digests"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uix_digest_user_date"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    # YYYY-MM-DD
    date: str = Field(nullable=False)
    activity_count: int = Field(default=0, nullable=False)
    summary_text: Optional[str] = None
    repo_summaries: Optional[list[dict[str, Any]]] = Field(default=None, sa_column=Column(JSON))
    status: DigestStatus = Field(default=DigestStatus.COLLECTING, nullable=False)

    candidates: list["AchievementCandidate"] = Relationship(
        back_populates="digest",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class AchievementCandidate(SQLModel, table=True):
    __tablename__ = "achievement_candidates"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    digest_id: uuid.UUID = Field(
        foreign_key="daily_digests.id", index=True, nullable=False, ondelete="CASCADE"
    )
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    category: AchievementCategory = Field(nullable=False)
    repo_role: Optional[str] = None
    technologies: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    significance: Significance = Field(default=Significance.MEDIUM, nullable=False)
    status: CandidateStatus = Field(default=CandidateStatus.PENDING, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)

    digest: Optional[DailyDigest] = Relationship(back_populates="candidates")


class Project(TimestampModel, table=True):
    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    name: str = Field(nullable=False)
    company: Optional[str] = None
    # YYYY-MM
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    role: Optional[str] = None
    team_size: Optional[str] = None


class Achievement(TimestampModel, table=True):
    __tablename__ = "achievements"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    candidate_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="achievement_candidates.id", ondelete="SET NULL"
    )
    project_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="projects.id", index=True, ondelete="SET NULL"
    )
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    category: AchievementCategory = Field(nullable=False)
    technologies: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    # YYYY-MM 또는 YYYY-MM-DD
    period: Optional[str] = None
    sort_order: int = Field(default=0, nullable=False)


class Profile(TimestampModel, table=True):
    __tablename__ = "profiles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(unique=True, nullable=False)
    last_name: str = Field(default="", nullable=False)
    first_name: str = Field(default="", nullable=False)
    last_name_kana: Optional[str] = None
    first_name_kana: Optional[str] = None
    birth_date: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    self_introduction: Optional[str] = None
    summary: Optional[str] = None


class WorkHistory(TimestampModel, table=True):
    __tablename__ = "work_histories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    profile_id: uuid.UUID = Field(
        foreign_key="profiles.id", index=True, nullable=False, ondelete="CASCADE"
    )
    company_name: str = Field(nullable=False)
    company_description: Optional[str] = None
    employment_type: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    # YYYY-MM
    start_date: str = Field(nullable=False)
    end_date: Optional[str] = None
    is_current: bool = Field(default=False)
    responsibilities: Optional[str] = None
    sort_order: int = Field(default=0, nullable=False)


class Skill(TimestampModel, table=True):
    __tablename__ = "skills"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    profile_id: uuid.UUID = Field(
        foreign_key="profiles.id", index=True, nullable=False, ondelete="CASCADE"
    )
    category: str = Field(nullable=False)
    name: str = Field(nullable=False)
    level: Optional[str] = None
    years_of_experience: Optional[int] = None
    sort_order: int = Field(default=0, nullable=False)


class GeneratedDocument(TimestampModel, table=True):
    __tablename__ = "generated_documents"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    type: DocumentType = Field(default=DocumentType.SHOKUMUKEIREKISHO, nullable=False)
    title: str = Field(nullable=False)
    format: DocumentFormat = Field(nullable=False)
    content: dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))
    target_company: Optional[str] = None
    target_position: Optional[str] = None
    version: int = Field(default=1, nullable=False)
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT, nullable=False)

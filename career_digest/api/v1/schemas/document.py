"""문서 생성 / 관리 API 스키마"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from career_digest.api.v1.schemas.base import CamelModel, blank_to_none
from career_digest.domain.document.schemas import ShokumukeirekishoContent
from career_digest.domain.enums import DocumentFormat, DocumentStatus, DocumentType


class GenerateDocumentRequest(CamelModel):
    format: DocumentFormat
    achievement_ids: list[uuid.UUID] = Field(min_length=1)
    target_company: str | None = Field(default=None, max_length=200)
    target_position: str | None = Field(default=None, max_length=200)

    @field_validator("target_company", "target_position", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class DocumentUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: ShokumukeirekishoContent | None = None
    status: DocumentStatus | None = None


class DocumentSummary(CamelModel):
    id: uuid.UUID
    type: DocumentType
    title: str
    format: DocumentFormat
    target_company: str | None = None
    target_position: str | None = None
    version: int
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime


class DocumentResponse(DocumentSummary):
    content: dict[str, Any]

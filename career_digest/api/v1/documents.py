import uuid

from fastapi import APIRouter, Request

from career_digest.api.deps import SessionDep, UserIdDep
from career_digest.api.v1.schemas import (
    DocumentResponse,
    DocumentSummary,
    DocumentUpdate,
    GenerateDocumentRequest,
    ReviewResult,
)
from career_digest.core.config import settings
from career_digest.core.limiter import limiter
from career_digest.domain.document.service import (
    delete_document,
    generate_document,
    get_document,
    list_documents,
    update_document,
)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/generate", response_model=DocumentResponse, status_code=201)
@limiter.limit(settings.generate_rate_limit)
async def generate(
    request: Request, payload: GenerateDocumentRequest, session: SessionDep, user_id: UserIdDep
) -> DocumentResponse:
    """선택한 실적으로 職務経歴書 생성 후 draft 저장"""
    document = await generate_document(
        session,
        user_id,
        payload.format,
        payload.achievement_ids,
        target_company=payload.target_company,
        target_position=payload.target_position,
    )
    return DocumentResponse.model_validate(document)


@router.get("", response_model=list[DocumentSummary])
async def get_documents(session: SessionDep, user_id: UserIdDep) -> list[DocumentSummary]:
    return [DocumentSummary.model_validate(d) for d in list_documents(session, user_id)]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_one(document_id: uuid.UUID, session: SessionDep, user_id: UserIdDep) -> DocumentResponse:
    return DocumentResponse.model_validate(get_document(session, user_id, document_id))


@router.patch("/{document_id}", response_model=DocumentResponse)
async def patch_document(
    document_id: uuid.UUID, payload: DocumentUpdate, session: SessionDep, user_id: UserIdDep
) -> DocumentResponse:
    """제목/본문/상태 수정, 본문 변경 시 version 증가"""
    changes = {}
    if payload.title is not None:
        changes["title"] = payload.title
    if payload.content is not None:
        changes["content"] = payload.content.model_dump(by_alias=True)
    if payload.status is not None:
        changes["status"] = payload.status
    return DocumentResponse.model_validate(update_document(session, user_id, document_id, changes))


@router.delete("/{document_id}", response_model=ReviewResult)
async def remove_document(document_id: uuid.UUID, session: SessionDep, user_id: UserIdDep) -> ReviewResult:
    delete_document(session, user_id, document_id)
    return ReviewResult(success=True)

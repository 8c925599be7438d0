import uuid
from typing import Any

from sqlmodel import Session

from career_digest.core.exceptions import ConflictError, NotFoundError, ValidationError
from career_digest.core.logging import get_logger
from career_digest.domain.document.schemas import (
    AchievementInput,
    ProfileInput,
    ResumePromptInput,
    SkillInput,
    WorkHistoryInput,
)
from career_digest.domain.enums import DocumentFormat, DocumentStatus, DocumentType
from career_digest.infra.db.models import GeneratedDocument
from career_digest.infra.db.repositories import (
    AchievementRepository,
    DocumentRepository,
    ProfileRepository,
)
from career_digest.infra.llm.client import generate_resume_document

logger = get_logger(__name__)

DOCUMENT_TITLE = "職務経歴書"


def document_title(target_company: str | None) -> str:
    return f"{DOCUMENT_TITLE} - {target_company}" if target_company else DOCUMENT_TITLE


def build_prompt_input(
    session: Session,
    user_id: str,
    document_format: DocumentFormat,
    achievement_ids: list[uuid.UUID],
    target_company: str | None = None,
    target_position: str | None = None,
) -> ResumePromptInput:
    """생성 입력 조립

    Raises:
        ValidationError: 실적 미선택 또는 프로필(성) 미등록
    """
    if not achievement_ids:
        raise ValidationError(message="フォーマットと実績を選択してください")

    profile_repository = ProfileRepository(session)
    profile = profile_repository.get_by_user(user_id)
    if profile is None or not profile.last_name:
        raise ValidationError(message="先にプロフィールを登録してください")

    rows = AchievementRepository(session).list_by_ids(user_id, achievement_ids)
    if not rows:
        raise ValidationError(message="選択された実績が見つかりません")

    return ResumePromptInput(
        format=document_format,
        profile=ProfileInput(
            last_name=profile.last_name,
            first_name=profile.first_name,
            summary=profile.summary,
            self_introduction=profile.self_introduction,
        ),
        work_histories=[
            WorkHistoryInput(
                company_name=wh.company_name,
                company_description=wh.company_description,
                employment_type=wh.employment_type,
                position=wh.position,
                department=wh.department,
                start_date=wh.start_date,
                end_date=wh.end_date,
                is_current=wh.is_current,
                responsibilities=wh.responsibilities,
            )
            for wh in profile_repository.list_work_histories(profile.id)
        ],
        achievements=[
            AchievementInput(
                title=a.title,
                description=a.description,
                category=a.category.value,
                technologies=a.technologies,
                period=a.period,
                project_name=project_name,
            )
            for a, project_name in rows
        ],
        skills=[
            SkillInput(
                category=s.category,
                name=s.name,
                level=s.level,
                years_of_experience=s.years_of_experience,
            )
            for s in profile_repository.list_skills(profile.id)
        ],
        target_company=target_company or None,
        target_position=target_position or None,
    )


async def generate_document(
    session: Session,
    user_id: str,
    document_format: DocumentFormat,
    achievement_ids: list[uuid.UUID],
    target_company: str | None = None,
    target_position: str | None = None,
) -> GeneratedDocument:
    """職務経歴書 생성 후 draft로 저장

    LLM 호출이나 응답 검증이 실패하면 아무것도 저장하지 않는다.
    """
    prompt_input = build_prompt_input(
        session, user_id, document_format, achievement_ids, target_company, target_position
    )
    content = await generate_resume_document(prompt_input, session_id=f"document-{user_id}")

    document = GeneratedDocument(
        user_id=user_id,
        type=DocumentType.SHOKUMUKEIREKISHO,
        title=document_title(prompt_input.target_company),
        format=document_format,
        content=content.model_dump(by_alias=True),
        target_company=prompt_input.target_company,
        target_position=prompt_input.target_position,
        status=DocumentStatus.DRAFT,
    )
    saved = DocumentRepository(session).create(document)
    logger.info(
        "문서 저장 document_id=%s achievements=%d", saved.id, len(prompt_input.achievements)
    )
    return saved


def get_document(session: Session, user_id: str, document_id: uuid.UUID) -> GeneratedDocument:
    document = DocumentRepository(session).get_for_user(document_id, user_id)
    if document is None:
        raise NotFoundError(message="書類が見つかりません")
    return document


def list_documents(session: Session, user_id: str) -> list[GeneratedDocument]:
    return DocumentRepository(session).list_for_user(user_id)


def update_document(
    session: Session, user_id: str, document_id: uuid.UUID, changes: dict[str, Any]
) -> GeneratedDocument:
    """제목/본문/상태 수정

    본문이 바뀌면 version 증가, finalized 문서를 draft로 되돌릴 수 없다.
    """
    document = get_document(session, user_id, document_id)

    if (
        changes.get("status") == DocumentStatus.DRAFT
        and document.status == DocumentStatus.FINALIZED
    ):
        raise ConflictError("確定済みの書類は下書きに戻せません")

    if "content" in changes and changes["content"] != document.content:
        changes["version"] = document.version + 1

    return DocumentRepository(session).update(document, changes)


def delete_document(session: Session, user_id: str, document_id: uuid.UUID) -> None:
    document = get_document(session, user_id, document_id)
    DocumentRepository(session).delete(document)

import uuid
from typing import Any

from sqlmodel import Session

from career_digest.core.exceptions import ConflictError, NotFoundError
from career_digest.core.logging import get_logger
from career_digest.domain.enums import AchievementCategory, ReviewAction
from career_digest.infra.db.models import Achievement, Project
from career_digest.infra.db.repositories import (
    AchievementRepository,
    DigestRepository,
    ProjectRepository,
)

logger = get_logger(__name__)

ALREADY_REVIEWED_MESSAGE = "この候補は既に処理済みです"


def review_candidate(
    session: Session,
    user_id: str,
    candidate_id: uuid.UUID,
    action: ReviewAction,
    edited_title: str | None = None,
    edited_description: str | None = None,
) -> Achievement | None:
    """후보 승인/거절

    승인 시 실적 1건을 만들어 반환하고, 거절 시 None을 반환한다.
    pending이 아닌 후보는 ConflictError, 다른 사용자의 후보는 NotFoundError.
    """
    repository = DigestRepository(session)
    found = repository.get_candidate_for_user(candidate_id, user_id)
    if found is None:
        raise NotFoundError(message="候補が見つかりません")
    candidate, digest = found

    if action == ReviewAction.REJECT:
        if not repository.reject_candidate(candidate):
            raise ConflictError(ALREADY_REVIEWED_MESSAGE)
        logger.info("후보 거절 candidate_id=%s", candidate_id)
        return None

    edited = bool(edited_title or edited_description)
    achievement = Achievement(
        user_id=user_id,
        candidate_id=candidate.id,
        title=edited_title or candidate.title,
        description=edited_description or candidate.description,
        category=candidate.category,
        technologies=list(candidate.technologies or []),
        period=digest.date[:7],
    )
    created = repository.accept_candidate(candidate, achievement, edited=edited)
    if created is None:
        raise ConflictError(ALREADY_REVIEWED_MESSAGE)

    logger.info("후보 승인 candidate_id=%s edited=%s", candidate_id, edited)
    return created


def _require_project(session: Session, user_id: str, project_id: uuid.UUID | None) -> None:
    if project_id is not None and ProjectRepository(session).get_for_user(project_id, user_id) is None:
        raise NotFoundError(message="プロジェクトが見つかりません")


def list_achievements(
    session: Session,
    user_id: str,
    category: AchievementCategory | None = None,
    period: str | None = None,
    project_id: uuid.UUID | None = None,
) -> list[Achievement]:
    return AchievementRepository(session).list_for_user(
        user_id, category=category, period=period, project_id=project_id
    )


def create_achievement(session: Session, user_id: str, data: dict[str, Any]) -> Achievement:
    """수동 실적 등록"""
    _require_project(session, user_id, data.get("project_id"))
    return AchievementRepository(session).create(Achievement(user_id=user_id, **data))


def update_achievement(
    session: Session, user_id: str, achievement_id: uuid.UUID, changes: dict[str, Any]
) -> Achievement:
    repository = AchievementRepository(session)
    achievement = repository.get_for_user(achievement_id, user_id)
    if achievement is None:
        raise NotFoundError(message="実績が見つかりません")
    if "project_id" in changes:
        _require_project(session, user_id, changes["project_id"])
    return repository.update(achievement, changes)


def delete_achievement(session: Session, user_id: str, achievement_id: uuid.UUID) -> None:
    repository = AchievementRepository(session)
    achievement = repository.get_for_user(achievement_id, user_id)
    if achievement is None:
        raise NotFoundError(message="実績が見つかりません")
    repository.delete(achievement)


def list_projects(session: Session, user_id: str) -> list[Project]:
    return ProjectRepository(session).list_for_user(user_id)


def create_project(session: Session, user_id: str, data: dict[str, Any]) -> Project:
    return ProjectRepository(session).create(Project(user_id=user_id, **data))


def update_project(
    session: Session, user_id: str, project_id: uuid.UUID, changes: dict[str, Any]
) -> Project:
    repository = ProjectRepository(session)
    project = repository.get_for_user(project_id, user_id)
    if project is None:
        raise NotFoundError(message="プロジェクトが見つかりません")
    return repository.update(project, changes)


def delete_project(session: Session, user_id: str, project_id: uuid.UUID) -> None:
    """프로젝트 삭제, 소속 실적은 남고 프로젝트 연결만 해제된다"""
    repository = ProjectRepository(session)
    project = repository.get_for_user(project_id, user_id)
    if project is None:
        raise NotFoundError(message="プロジェクトが見つかりません")
    repository.delete(project)

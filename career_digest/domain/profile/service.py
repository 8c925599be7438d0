import uuid
from typing import Any

from sqlmodel import Session

from career_digest.core.exceptions import NotFoundError
from career_digest.infra.db.models import Profile, Skill, WorkHistory
from career_digest.infra.db.repositories import ProfileRepository


def get_profile(session: Session, user_id: str) -> Profile | None:
    return ProfileRepository(session).get_by_user(user_id)


def upsert_profile(session: Session, user_id: str, data: dict[str, Any]) -> Profile:
    repository = ProfileRepository(session)
    return repository.update(repository.get_or_create(user_id), data)


def list_work_histories(session: Session, user_id: str) -> list[WorkHistory]:
    profile = get_profile(session, user_id)
    if profile is None:
        return []
    return ProfileRepository(session).list_work_histories(profile.id)


def add_work_history(session: Session, user_id: str, data: dict[str, Any]) -> WorkHistory:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    return repository.add_work_history(WorkHistory(profile_id=profile.id, **data))


def delete_work_history(session: Session, user_id: str, work_history_id: uuid.UUID) -> None:
    repository = ProfileRepository(session)
    profile = repository.get_by_user(user_id)
    item = repository.get_work_history(profile.id, work_history_id) if profile else None
    if item is None:
        raise NotFoundError(message="職歴が見つかりません")
    repository.delete(item)


def list_skills(session: Session, user_id: str) -> list[Skill]:
    profile = get_profile(session, user_id)
    if profile is None:
        return []
    return ProfileRepository(session).list_skills(profile.id)


def add_skill(session: Session, user_id: str, data: dict[str, Any]) -> Skill:
    repository = ProfileRepository(session)
    profile = repository.get_or_create(user_id)
    return repository.add_skill(Skill(profile_id=profile.id, **data))


def delete_skill(session: Session, user_id: str, skill_id: uuid.UUID) -> None:
    repository = ProfileRepository(session)
    profile = repository.get_by_user(user_id)
    item = repository.get_skill(profile.id, skill_id) if profile else None
    if item is None:
        raise NotFoundError(message="スキルが見つかりません")
    repository.delete(item)

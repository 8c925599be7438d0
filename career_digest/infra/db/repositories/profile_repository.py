"""
프로필 / 직력 / 스킬 Repository
"""

import uuid
from typing import Any

from sqlmodel import Session, col, select

from career_digest.infra.db.models import Profile, Skill, WorkHistory


class ProfileRepository:
    """profiles, work_histories, skills 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: str) -> Profile | None:
        return self.session.exec(select(Profile).where(Profile.user_id == user_id)).first()

    def get_or_create(self, user_id: str) -> Profile:
        """프로필이 없으면 빈 프로필 생성"""
        profile = self.get_by_user(user_id)
        if profile is None:
            profile = Profile(user_id=user_id)
            self.session.add(profile)
            self.session.commit()
            self.session.refresh(profile)
        return profile

    def update(self, profile: Profile, changes: dict[str, Any]) -> Profile:
        for key, value in changes.items():
            setattr(profile, key, value)
        self.session.add(profile)
        self.session.commit()
        self.session.refresh(profile)
        return profile

    def list_work_histories(self, profile_id: uuid.UUID) -> list[WorkHistory]:
        statement = (
            select(WorkHistory)
            .where(WorkHistory.profile_id == profile_id)
            .order_by(col(WorkHistory.sort_order).asc(), col(WorkHistory.start_date).desc())
        )
        return list(self.session.exec(statement).all())

    def add_work_history(self, work_history: WorkHistory) -> WorkHistory:
        self.session.add(work_history)
        self.session.commit()
        self.session.refresh(work_history)
        return work_history

    def get_work_history(self, profile_id: uuid.UUID, work_history_id: uuid.UUID) -> WorkHistory | None:
        statement = select(WorkHistory).where(
            WorkHistory.id == work_history_id, WorkHistory.profile_id == profile_id
        )
        return self.session.exec(statement).first()

    def list_skills(self, profile_id: uuid.UUID) -> list[Skill]:
        statement = (
            select(Skill)
            .where(Skill.profile_id == profile_id)
            .order_by(col(Skill.category).asc(), col(Skill.sort_order).asc())
        )
        return list(self.session.exec(statement).all())

    def add_skill(self, skill: Skill) -> Skill:
        self.session.add(skill)
        self.session.commit()
        self.session.refresh(skill)
        return skill

    def get_skill(self, profile_id: uuid.UUID, skill_id: uuid.UUID) -> Skill | None:
        statement = select(Skill).where(Skill.id == skill_id, Skill.profile_id == profile_id)
        return self.session.exec(statement).first()

    def delete(self, item: WorkHistory | Skill) -> None:
        self.session.delete(item)
        self.session.commit()

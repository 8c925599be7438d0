"""
실적 / 프로젝트 Repository
"""

import uuid
from typing import Any

from sqlalchemy import update
from sqlmodel import Session, col, select

from career_digest.domain.enums import AchievementCategory
from career_digest.infra.db.models import Achievement, Project


class AchievementRepository:
    """achievements 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, achievement: Achievement) -> Achievement:
        self.session.add(achievement)
        self.session.commit()
        self.session.refresh(achievement)
        return achievement

    def get_for_user(self, achievement_id: uuid.UUID, user_id: str) -> Achievement | None:
        statement = select(Achievement).where(
            Achievement.id == achievement_id, Achievement.user_id == user_id
        )
        return self.session.exec(statement).first()

    def list_for_user(
        self,
        user_id: str,
        category: AchievementCategory | None = None,
        period: str | None = None,
        project_id: uuid.UUID | None = None,
    ) -> list[Achievement]:
        """사용자 실적 목록

        period는 접두 일치 (예: "2025" 는 2025년 전체)
        정렬: sort_order 오름차순, 생성일 내림차순
        """
        statement = select(Achievement).where(Achievement.user_id == user_id)
        if category is not None:
            statement = statement.where(Achievement.category == category)
        if period:
            statement = statement.where(col(Achievement.period).startswith(period))
        if project_id is not None:
            statement = statement.where(Achievement.project_id == project_id)
        statement = statement.order_by(
            col(Achievement.sort_order).asc(), col(Achievement.created_at).desc()
        )
        return list(self.session.exec(statement).all())

    def list_by_ids(
        self, user_id: str, achievement_ids: list[uuid.UUID]
    ) -> list[tuple[Achievement, str | None]]:
        """소유한 실적만 프로젝트명과 함께 조회 (요청 순서 유지)"""
        if not achievement_ids:
            return []
        statement = (
            select(Achievement, Project.name)
            .join(Project, Achievement.project_id == Project.id, isouter=True)
            .where(Achievement.user_id == user_id, col(Achievement.id).in_(achievement_ids))
        )
        rows = {achievement.id: (achievement, name) for achievement, name in self.session.exec(statement).all()}
        return [rows[i] for i in achievement_ids if i in rows]

    def update(self, achievement: Achievement, changes: dict[str, Any]) -> Achievement:
        for key, value in changes.items():
            setattr(achievement, key, value)
        self.session.add(achievement)
        self.session.commit()
        self.session.refresh(achievement)
        return achievement

    def delete(self, achievement: Achievement) -> None:
        self.session.delete(achievement)
        self.session.commit()


class ProjectRepository:
    """projects 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, project: Project) -> Project:
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    def get_for_user(self, project_id: uuid.UUID, user_id: str) -> Project | None:
        statement = select(Project).where(Project.id == project_id, Project.user_id == user_id)
        return self.session.exec(statement).first()

    def list_for_user(self, user_id: str) -> list[Project]:
        statement = (
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(col(Project.start_date).desc(), col(Project.created_at).desc())
        )
        return list(self.session.exec(statement).all())

    def update(self, project: Project, changes: dict[str, Any]) -> Project:
        for key, value in changes.items():
            setattr(project, key, value)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    def delete(self, project: Project) -> None:
        """프로젝트 삭제, 소속 실적은 프로젝트 연결만 해제"""
        table = Achievement.__table__
        self.session.connection().execute(
            update(table).where(table.c.project_id == project.id).values(project_id=None)
        )
        self.session.delete(project)
        self.session.commit()

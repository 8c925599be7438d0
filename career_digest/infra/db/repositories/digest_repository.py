"""
일일 다이제스트 / 실적 후보 Repository
"""

import uuid

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from career_digest.domain.digest.schemas import CandidateOutput, DailySummaryResult
from career_digest.domain.enums import CandidateStatus, DigestStatus
from career_digest.infra.db.models import Achievement, AchievementCandidate, DailyDigest, utcnow


def _dialect_insert(dialect_name: str):
    """ON CONFLICT를 지원하는 방언별 insert 반환"""
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(f"upsert를 지원하지 않는 DB: {dialect_name}")
    return insert


class DigestRepository:
    """daily_digests, achievement_candidates 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str, date: str) -> DailyDigest | None:
        statement = select(DailyDigest).where(
            DailyDigest.user_id == user_id, DailyDigest.date == date
        )
        return self.session.exec(statement).first()

    def upsert_for_collection(self, user_id: str, date: str, activity_count: int) -> DailyDigest:
        """(user_id, date) 기준 원자적 insert-or-update

        새 행이면 collecting 상태로 생성하고, 기존 행이면 활동 수와 상태를 덮어쓴다.
        """
        insert = _dialect_insert(self.session.get_bind().dialect.name)
        now = utcnow()
        statement = (
            insert(DailyDigest.__table__)
            .values(
                id=uuid.uuid4(),
                user_id=user_id,
                date=date,
                activity_count=activity_count,
                status=DigestStatus.COLLECTING,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_update(
                index_elements=["user_id", "date"],
                set_={
                    "activity_count": activity_count,
                    "status": DigestStatus.COLLECTING,
                    "updated_at": now,
                },
            )
        )
        self.session.connection().execute(statement)
        self.session.commit()

        reload = (
            select(DailyDigest)
            .where(DailyDigest.user_id == user_id, DailyDigest.date == date)
            .execution_options(populate_existing=True)
        )
        return self.session.exec(reload).one()

    def set_status(self, digest: DailyDigest, status: DigestStatus) -> DailyDigest:
        digest.status = status
        self.session.add(digest)
        self.session.commit()
        self.session.refresh(digest)
        return digest

    def complete(self, digest: DailyDigest, result: DailySummaryResult) -> list[AchievementCandidate]:
        """요약 저장, ready 전이, 후보 저장을 한 트랜잭션으로 처리

        이전 수집에서 남은 pending 후보는 새 후보로 교체된다.
        DB 오류 시 트랜잭션을 되돌리고 예외를 전파한다.
        """
        candidates = [self._to_candidate(digest.id, c) for c in result.achievement_candidates]
        try:
            self.session.connection().execute(
                delete(AchievementCandidate.__table__).where(
                    AchievementCandidate.__table__.c.digest_id == digest.id,
                    AchievementCandidate.__table__.c.status == CandidateStatus.PENDING,
                )
            )

            digest.summary_text = result.daily_summary
            digest.repo_summaries = [s.model_dump(by_alias=True) for s in result.repo_summaries]
            digest.status = DigestStatus.READY
            self.session.add(digest)
            self.session.add_all(candidates)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        for candidate in candidates:
            self.session.refresh(candidate)
        self.session.refresh(digest)
        return candidates

    @staticmethod
    def _to_candidate(digest_id: uuid.UUID, output: CandidateOutput) -> AchievementCandidate:
        return AchievementCandidate(
            digest_id=digest_id,
            title=output.title,
            description=output.description,
            category=output.category,
            repo_role=output.repo_role,
            technologies=list(output.technologies),
            significance=output.significance,
            status=CandidateStatus.PENDING,
        )

    def list_recent(self, user_id: str, limit: int = 30) -> list[DailyDigest]:
        statement = (
            select(DailyDigest)
            .where(DailyDigest.user_id == user_id)
            .order_by(col(DailyDigest.date).desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def list_pending_candidates(self, user_id: str) -> list[tuple[AchievementCandidate, str]]:
        """사용자의 pending 후보와 소속 다이제스트 날짜"""
        statement = (
            select(AchievementCandidate, DailyDigest.date)
            .join(DailyDigest, AchievementCandidate.digest_id == DailyDigest.id)
            .where(
                DailyDigest.user_id == user_id,
                AchievementCandidate.status == CandidateStatus.PENDING,
            )
            .order_by(col(AchievementCandidate.created_at).desc())
        )
        return [(candidate, date) for candidate, date in self.session.exec(statement).all()]

    def get_candidate_for_user(
        self, candidate_id: uuid.UUID, user_id: str
    ) -> tuple[AchievementCandidate, DailyDigest] | None:
        """소속 다이제스트의 소유자가 user_id인 후보만 조회"""
        statement = (
            select(AchievementCandidate, DailyDigest)
            .join(DailyDigest, AchievementCandidate.digest_id == DailyDigest.id)
            .where(AchievementCandidate.id == candidate_id, DailyDigest.user_id == user_id)
        )
        row = self.session.exec(statement).first()
        if row is None:
            return None
        candidate, digest = row
        return candidate, digest

    def _transition_from_pending(self, candidate_id: uuid.UUID, status: CandidateStatus) -> bool:
        """pending인 경우에만 상태 변경, 변경 여부 반환"""
        table = AchievementCandidate.__table__
        result = self.session.connection().execute(
            update(table)
            .where(table.c.id == candidate_id, table.c.status == CandidateStatus.PENDING)
            .values(status=status)
        )
        return result.rowcount == 1

    def reject_candidate(self, candidate: AchievementCandidate) -> bool:
        """pending 후보를 rejected로 전이, 이미 처리된 후보면 False"""
        if not self._transition_from_pending(candidate.id, CandidateStatus.REJECTED):
            self.session.rollback()
            return False
        self.session.commit()
        self.session.refresh(candidate)
        return True

    def accept_candidate(
        self, candidate: AchievementCandidate, achievement: Achievement, edited: bool
    ) -> Achievement | None:
        """후보 상태 전이와 실적 생성을 한 트랜잭션으로 처리

        이미 처리된 후보면 아무것도 쓰지 않고 None 반환
        """
        status = CandidateStatus.EDITED if edited else CandidateStatus.ACCEPTED
        if not self._transition_from_pending(candidate.id, status):
            self.session.rollback()
            return None

        self.session.add(achievement)
        self.session.commit()
        self.session.refresh(achievement)
        self.session.refresh(candidate)
        return achievement

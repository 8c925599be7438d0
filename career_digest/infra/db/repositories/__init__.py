from career_digest.infra.db.repositories.achievement_repository import (
    AchievementRepository,
    ProjectRepository,
)
from career_digest.infra.db.repositories.connection_repository import ConnectionRepository
from career_digest.infra.db.repositories.digest_repository import DigestRepository
from career_digest.infra.db.repositories.document_repository import DocumentRepository
from career_digest.infra.db.repositories.profile_repository import ProfileRepository

__all__ = [
    "AchievementRepository",
    "ConnectionRepository",
    "DigestRepository",
    "DocumentRepository",
    "ProfileRepository",
    "ProjectRepository",
]

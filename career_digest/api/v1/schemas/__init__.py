from career_digest.api.v1.schemas.achievement import (
    AchievementCreate,
    AchievementResponse,
    AchievementUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from career_digest.api.v1.schemas.digest import (
    CandidateResponse,
    CollectRequest,
    CollectResponse,
    CollectWarning,
    DigestResponse,
    ReviewRequest,
    ReviewResult,
)
from career_digest.api.v1.schemas.document import (
    DocumentResponse,
    DocumentSummary,
    DocumentUpdate,
    GenerateDocumentRequest,
)
from career_digest.api.v1.schemas.profile import (
    ProfileResponse,
    ProfileUpdate,
    SkillCreate,
    SkillResponse,
    WorkHistoryCreate,
    WorkHistoryResponse,
)
from career_digest.api.v1.schemas.settings import (
    ConnectionTestResponse,
    GitHubTokenRequest,
    RepoToggleRequest,
    RepoToggleResponse,
)

__all__ = [
    "AchievementCreate",
    "AchievementResponse",
    "AchievementUpdate",
    "CandidateResponse",
    "CollectRequest",
    "CollectResponse",
    "CollectWarning",
    "ConnectionTestResponse",
    "DigestResponse",
    "DocumentResponse",
    "DocumentSummary",
    "DocumentUpdate",
    "GenerateDocumentRequest",
    "GitHubTokenRequest",
    "ProfileResponse",
    "ProfileUpdate",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "RepoToggleRequest",
    "RepoToggleResponse",
    "ReviewRequest",
    "ReviewResult",
    "SkillCreate",
    "SkillResponse",
    "WorkHistoryCreate",
    "WorkHistoryResponse",
]

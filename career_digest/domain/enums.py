"""도메인 공용 열거형

DB 모델, 요청 검증, LLM 출력 검증, 프롬프트가 모두 이 정의를 참조한다.
"""

from enum import Enum


class ActivityType(str, Enum):
    PR_MERGED = "pr_merged"
    PR_REVIEWED = "pr_reviewed"
    ISSUE_CLOSED = "issue_closed"
    COMMIT = "commit"


class AchievementCategory(str, Enum):
    DEVELOPMENT = "development"
    REVIEW = "review"
    BUGFIX = "bugfix"
    DESIGN = "design"
    DOCUMENTATION = "documentation"
    COMMUNICATION = "communication"
    LEADERSHIP = "leadership"


class Significance(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DigestStatus(str, Enum):
    COLLECTING = "collecting"
    SUMMARIZING = "summarizing"
    READY = "ready"
    # 선언만 되어 있고 이 서비스는 할당하지 않음
    REVIEWED = "reviewed"


class CandidateStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EDITED = "edited"


class ReviewAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class ConnectionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class DocumentType(str, Enum):
    SHOKUMUKEIREKISHO = "shokumukeirekisho"


class DocumentFormat(str, Enum):
    REVERSE_CHRONOLOGICAL = "reverse_chronological"
    CHRONOLOGICAL = "chronological"
    CAREER_BASED = "career_based"


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    FINALIZED = "finalized"


def enum_values(enum_cls: type[Enum], sep: str = " | ") -> str:
    """프롬프트용 허용값 문자열"""
    return sep.join(member.value for member in enum_cls)

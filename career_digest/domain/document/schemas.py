from pydantic import BaseModel, ConfigDict, Field

from career_digest.domain.enums import DocumentFormat


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SkillGroup(_CamelModel):
    category: str
    items: list[str]


class DocumentProject(_CamelModel):
    name: str
    period: str
    role: str
    team_size: str = Field(alias="teamSize")
    description: str
    achievements: list[str]
    technologies: list[str]


class DocumentWorkHistory(_CamelModel):
    company_name: str = Field(alias="companyName")
    period: str
    employment_type: str = Field(alias="employmentType")
    position: str
    department: str
    company_description: str = Field(alias="companyDescription")
    projects: list[DocumentProject]


class ShokumukeirekishoContent(_CamelModel):
    """職務経歴書 본문 구조"""

    title: str
    date: str
    name: str
    summary: str
    skills: list[SkillGroup]
    work_histories: list[DocumentWorkHistory] = Field(alias="workHistories")
    self_pr: str = Field(alias="selfPR")


class ProfileInput(_CamelModel):
    last_name: str = Field(alias="lastName")
    first_name: str = Field(alias="firstName")
    summary: str | None = None
    self_introduction: str | None = Field(default=None, alias="selfIntroduction")


class WorkHistoryInput(_CamelModel):
    company_name: str = Field(alias="companyName")
    company_description: str | None = Field(default=None, alias="companyDescription")
    employment_type: str | None = Field(default=None, alias="employmentType")
    position: str | None = None
    department: str | None = None
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    is_current: bool | None = Field(default=None, alias="isCurrent")
    responsibilities: str | None = None


class AchievementInput(_CamelModel):
    title: str
    description: str
    category: str
    technologies: list[str] | None = None
    period: str | None = None
    project_name: str | None = Field(default=None, alias="projectName")


class SkillInput(_CamelModel):
    category: str
    name: str
    level: str | None = None
    years_of_experience: int | None = Field(default=None, alias="yearsOfExperience")


class ResumePromptInput(BaseModel):
    """이력서 생성 프롬프트 입력"""

    format: DocumentFormat
    profile: ProfileInput
    work_histories: list[WorkHistoryInput] = Field(default_factory=list)
    achievements: list[AchievementInput]
    skills: list[SkillInput] = Field(default_factory=list)
    target_company: str | None = None
    target_position: str | None = None

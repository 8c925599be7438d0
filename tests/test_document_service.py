"""職務経歴書 생성/수정 서비스 테스트"""

import pytest
from sqlmodel import select

from career_digest.core.exceptions import (
    ConflictError,
    GenerationParseError,
    NotFoundError,
    ValidationError,
)
from career_digest.domain.document.service import (
    DOCUMENT_TITLE,
    build_prompt_input,
    delete_document,
    generate_document,
    list_documents,
    update_document,
)
from career_digest.domain.enums import (
    AchievementCategory,
    DocumentFormat,
    DocumentStatus,
    DocumentType,
)
from career_digest.domain.profile.service import add_skill, add_work_history, upsert_profile
from career_digest.infra.db.models import Achievement, GeneratedDocument, Project
from career_digest.infra.db.repositories import AchievementRepository, ProjectRepository


@pytest.fixture
def profile(session, user_id):
    profile = upsert_profile(session, user_id, {"last_name": "山田", "first_name": "太郎"})
    add_work_history(
        session,
        user_id,
        {"company_name": "株式会社サンプル", "start_date": "2020-04", "is_current": True},
    )
    add_skill(session, user_id, {"category": "言語", "name": "Python", "years_of_experience": 5})
    return profile


@pytest.fixture
def achievement(session, user_id) -> Achievement:
    project = ProjectRepository(session).create(Project(user_id=user_id, name="決済基盤刷新"))
    return AchievementRepository(session).create(
        Achievement(
            user_id=user_id,
            project_id=project.id,
            title="Webhook再送処理の実装",
            description="再送処理を実装",
            category=AchievementCategory.DEVELOPMENT,
            technologies=["Python"],
            period="2025-03",
        )
    )


@pytest.fixture
def foreign_achievement(session, other_user_id) -> Achievement:
    return AchievementRepository(session).create(
        Achievement(
            user_id=other_user_id,
            title="他人の実績",
            description="見えてはいけない",
            category=AchievementCategory.COMMUNICATION,
        )
    )


class TestBuildPromptInput:
    """생성 입력 조립 테스트"""

    def test_collects_profile_history_skills_and_achievements(
        self, session, user_id, profile, achievement
    ):
        prompt_input = build_prompt_input(
            session, user_id, DocumentFormat.CHRONOLOGICAL, [achievement.id], "ACME", "SRE"
        )

        assert prompt_input.profile.last_name == "山田"
        assert prompt_input.work_histories[0].company_name == "株式会社サンプル"
        assert prompt_input.skills[0].name == "Python"
        assert prompt_input.achievements[0].project_name == "決済基盤刷新"
        assert prompt_input.achievements[0].category == "development"
        assert prompt_input.target_company == "ACME"

    def test_empty_selection(self, session, user_id, profile):
        with pytest.raises(ValidationError):
            build_prompt_input(session, user_id, DocumentFormat.CAREER_BASED, [])

    def test_requires_profile(self, session, user_id, achievement):
        with pytest.raises(ValidationError) as exc_info:
            build_prompt_input(session, user_id, DocumentFormat.CAREER_BASED, [achievement.id])

        assert exc_info.value.message == "先にプロフィールを登録してください"

    def test_requires_last_name(self, session, user_id, achievement):
        upsert_profile(session, user_id, {"last_name": "", "first_name": "太郎"})

        with pytest.raises(ValidationError):
            build_prompt_input(session, user_id, DocumentFormat.CAREER_BASED, [achievement.id])

    def test_foreign_achievements_are_excluded(
        self, session, user_id, profile, achievement, foreign_achievement
    ):
        prompt_input = build_prompt_input(
            session,
            user_id,
            DocumentFormat.CAREER_BASED,
            [foreign_achievement.id, achievement.id],
        )

        assert [a.title for a in prompt_input.achievements] == ["Webhook再送処理の実装"]

    def test_only_foreign_achievements(self, session, user_id, profile, foreign_achievement):
        with pytest.raises(ValidationError):
            build_prompt_input(
                session, user_id, DocumentFormat.CAREER_BASED, [foreign_achievement.id]
            )


class TestGenerateDocument:
    """generate_document 테스트"""

    @pytest.mark.asyncio
    async def test_saves_draft(
        self, session, user_id, profile, achievement, mock_llm, sample_document_payload
    ):
        mock_llm.reply_json(sample_document_payload)

        document = await generate_document(
            session, user_id, DocumentFormat.REVERSE_CHRONOLOGICAL, [achievement.id]
        )

        assert document.type == DocumentType.SHOKUMUKEIREKISHO
        assert document.title == DOCUMENT_TITLE
        assert document.status == DocumentStatus.DRAFT
        assert document.version == 1
        assert document.content["selfPR"] == sample_document_payload["selfPR"]
        assert document.content["workHistories"][0]["projects"][0]["teamSize"] == "5名"

    @pytest.mark.asyncio
    async def test_title_includes_company(
        self, session, user_id, profile, achievement, mock_llm, sample_document_payload
    ):
        mock_llm.reply_json(sample_document_payload)

        document = await generate_document(
            session,
            user_id,
            DocumentFormat.CAREER_BASED,
            [achievement.id],
            target_company="ACME",
        )

        assert document.title == "職務経歴書 - ACME"
        assert document.target_company == "ACME"

    @pytest.mark.asyncio
    async def test_prompt_uses_selected_achievements(
        self, session, user_id, profile, achievement, mock_llm, sample_document_payload
    ):
        mock_llm.reply_json(sample_document_payload)

        await generate_document(session, user_id, DocumentFormat.CHRONOLOGICAL, [achievement.id])

        prompt = mock_llm.ainvoke.call_args.args[0][0].content
        assert "Webhook再送処理の実装" in prompt
        assert "決済基盤刷新" in prompt

    @pytest.mark.asyncio
    async def test_parse_failure_persists_nothing(
        self, session, user_id, profile, achievement, mock_llm
    ):
        mock_llm.reply('{"title": "職務経歴書"}')

        with pytest.raises(GenerationParseError):
            await generate_document(
                session, user_id, DocumentFormat.CAREER_BASED, [achievement.id]
            )

        assert session.exec(select(GeneratedDocument)).all() == []

    @pytest.mark.asyncio
    async def test_precondition_failure_skips_llm(self, session, user_id, achievement, mock_llm):
        with pytest.raises(ValidationError):
            await generate_document(
                session, user_id, DocumentFormat.CAREER_BASED, [achievement.id]
            )

        mock_llm.ainvoke.assert_not_called()


class TestUpdateDocument:
    """update_document / delete_document 테스트"""

    @pytest.fixture
    def document(self, session, user_id, sample_document_payload) -> GeneratedDocument:
        document = GeneratedDocument(
            user_id=user_id,
            title=DOCUMENT_TITLE,
            format=DocumentFormat.CAREER_BASED,
            content=sample_document_payload,
        )
        session.add(document)
        session.commit()
        session.refresh(document)
        return document

    def test_title_change_keeps_version(self, session, user_id, document):
        updated = update_document(session, user_id, document.id, {"title": "新しい題名"})

        assert updated.title == "新しい題名"
        assert updated.version == 1

    def test_content_change_bumps_version(
        self, session, user_id, document, sample_document_payload
    ):
        content = dict(sample_document_payload, selfPR="書き直した自己PR")

        updated = update_document(session, user_id, document.id, {"content": content})

        assert updated.version == 2
        assert updated.content["selfPR"] == "書き直した自己PR"

    def test_same_content_keeps_version(
        self, session, user_id, document, sample_document_payload
    ):
        updated = update_document(
            session, user_id, document.id, {"content": dict(sample_document_payload)}
        )

        assert updated.version == 1

    def test_finalized_cannot_return_to_draft(self, session, user_id, document):
        update_document(session, user_id, document.id, {"status": DocumentStatus.FINALIZED})

        with pytest.raises(ConflictError):
            update_document(session, user_id, document.id, {"status": DocumentStatus.DRAFT})

    def test_other_user_cannot_touch(self, session, other_user_id, document):
        with pytest.raises(NotFoundError):
            update_document(session, other_user_id, document.id, {"title": "x"})
        with pytest.raises(NotFoundError):
            delete_document(session, other_user_id, document.id)

    def test_delete(self, session, user_id, document):
        delete_document(session, user_id, document.id)

        assert list_documents(session, user_id) == []

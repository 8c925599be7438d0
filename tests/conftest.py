"""테스트 공통 fixture"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from langchain_core.messages import AIMessage
from sqlmodel import Session

from career_digest.core.config import settings
from career_digest.core.crypto import encrypt_json
from career_digest.core.limiter import limiter
from career_digest.domain.connection.schemas import GITHUB_SERVICE, GitHubConfig, GitHubRepo
from career_digest.domain.digest.schemas import RawActivity
from career_digest.domain.enums import ActivityType, ConnectionStatus
from career_digest.infra.db.models import ServiceConnection
from career_digest.infra.db.session import build_engine, create_tables, get_session
from career_digest.main import app

TEST_ENCRYPTION_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def other_user_id() -> str:
    return OTHER_USER_ID


@pytest.fixture
def user_headers() -> dict[str, str]:
    """인증 프록시가 넘기는 사용자 헤더"""
    return {"X-User-Id": USER_ID}


@pytest.fixture
def other_user_headers() -> dict[str, str]:
    return {"X-User-Id": OTHER_USER_ID}


@pytest.fixture(autouse=True)
def encryption_key(monkeypatch):
    """테스트용 고정 암호화 키"""
    monkeypatch.setattr(settings, "encryption_key", TEST_ENCRYPTION_KEY)
    return TEST_ENCRYPTION_KEY


@pytest.fixture(autouse=True)
def disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def engine():
    """테스트마다 새 메모리 DB"""
    test_engine = build_engine("sqlite://", echo=False)
    create_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def async_client(session):
    """메모리 DB 세션을 주입한 비동기 HTTP 클라이언트"""

    def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    transport = ASGITransport(app=app)
    yield AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.clear()


@pytest.fixture
def sample_activities() -> list[RawActivity]:
    """테스트용 수집 활동"""
    return [
        RawActivity(
            activity_type=ActivityType.PR_MERGED,
            title="Add retry to payment webhook",
            body="Retries failed webhook deliveries with exponential backoff",
            external_url="https://github.com/acme/svc/pull/12",
            metadata={"number": 12, "repo": "acme/svc", "labels": ["feature"]},
        ),
        RawActivity(
            activity_type=ActivityType.ISSUE_CLOSED,
            title="Webhook timeouts in production",
            body="",
            external_url="https://github.com/acme/svc/issues/8",
            metadata={"number": 8, "repo": "acme/svc", "labels": []},
        ),
    ]


@pytest.fixture
def sample_summary_payload() -> dict:
    """LLM 일일 요약 응답 예시"""
    return {
        "dailySummary": "決済Webhookの信頼性改善に取り組んだ。",
        "repoSummaries": [
            {"repoRole": "決済API", "summary": "Webhook再送処理を実装した。"}
        ],
        "achievementCandidates": [
            {
                "title": "Webhook再送処理の実装",
                "description": "決済Webhookに指数バックオフ付き再送を実装し、取りこぼしを削減した。",
                "category": "development",
                "repoRole": "決済API",
                "technologies": ["Python", "FastAPI"],
                "significance": "high",
            }
        ],
    }


@pytest.fixture
def sample_document_payload() -> dict:
    """LLM 職務経歴書 응답 예시"""
    return {
        "title": "職務経歴書",
        "date": "2025年3月1日",
        "name": "山田 太郎",
        "summary": "Webバックエンド開発に5年従事。",
        "skills": [{"category": "言語", "items": ["Python", "TypeScript"]}],
        "workHistories": [
            {
                "companyName": "株式会社サンプル",
                "period": "2020年04月 ～ 現在",
                "employmentType": "正社員",
                "position": "エンジニア",
                "department": "開発部",
                "companyDescription": "決済サービスを提供",
                "projects": [
                    {
                        "name": "決済基盤刷新",
                        "period": "2024年01月 ～ 2025年03月",
                        "role": "バックエンド担当",
                        "teamSize": "5名",
                        "description": "決済APIの信頼性向上",
                        "achievements": ["Webhook再送処理を実装"],
                        "technologies": ["Python", "FastAPI"],
                    }
                ],
            }
        ],
        "selfPR": "信頼性の高いシステム作りが得意です。",
    }


@pytest.fixture
def mock_llm():
    """LLM chat 모델 mock

    mock_llm.reply(text) 또는 mock_llm.reply_json(dict)로 응답을 지정한다.
    """
    with patch("career_digest.infra.llm.client.get_generator_client") as mock_factory:
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(return_value=AIMessage(content="{}"))
        mock_factory.return_value.get_chat_model.return_value = chat_model

        def reply(text: str) -> None:
            chat_model.ainvoke.return_value = AIMessage(content=text)

        def reply_json(payload: dict) -> None:
            reply(json.dumps(payload, ensure_ascii=False))

        chat_model.reply = reply
        chat_model.reply_json = reply_json
        yield chat_model


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 헬퍼"""

    def _create(status_code: int, url: str = "https://api.github.com/test"):
        return httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=httpx.Request("GET", url),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture
def make_response():
    """httpx.Response 생성 헬퍼 (raise_for_status 가능하도록 request 포함)"""

    def _make(payload, status_code: int = 200, url: str = "https://api.github.com/test"):
        return httpx.Response(status_code, json=payload, request=httpx.Request("GET", url))

    return _make


@pytest.fixture
def github_connection(session):
    """acme/svc가 선택된 active GitHub 연결"""
    config = GitHubConfig(
        token="ghp_test",
        username="dev",
        repos=[
            GitHubRepo(full_name="acme/svc", selected=True),
            GitHubRepo(full_name="acme/web", selected=False),
        ],
    )
    connection = ServiceConnection(
        user_id=USER_ID,
        service=GITHUB_SERVICE,
        label="GitHub (dev)",
        encrypted_config=encrypt_json(config.model_dump(by_alias=True)),
        status=ConnectionStatus.ACTIVE,
    )
    session.add(connection)
    session.commit()
    session.refresh(connection)
    return connection

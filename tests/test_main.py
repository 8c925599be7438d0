"""career_digest/main.py 테스트"""

import pytest
from httpx import ASGITransport, AsyncClient

from career_digest.main import app


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_returns_up(self):
        """헬스체크 엔드포인트가 정상 응답을 반환"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}


class TestAppConfiguration:
    """앱 설정 테스트"""

    def test_app_has_correct_title(self):
        assert app.title == "Career Digest"

    def test_app_has_correct_version(self):
        assert app.version == "1.0.0"

    @pytest.mark.parametrize(
        "path",
        [
            "/health",
            "/api/v1/collect",
            "/api/v1/digests",
            "/api/v1/candidates",
            "/api/v1/achievements",
            "/api/v1/achievements/{achievement_id}",
            "/api/v1/projects",
            "/api/v1/profile",
            "/api/v1/profile/work-histories",
            "/api/v1/profile/skills",
            "/api/v1/documents/generate",
            "/api/v1/documents/{document_id}",
            "/api/v1/settings/github",
            "/api/v1/settings/github/repos",
            "/api/v1/settings/github/test",
        ],
    )
    def test_routes_are_registered(self, path):
        """API 라우터가 포함됨"""
        assert path in app.openapi()["paths"]

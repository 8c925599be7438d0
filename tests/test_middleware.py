"""요청 로깅 미들웨어 테스트"""

import pytest

from career_digest.core.middleware import REQUEST_ID_HEADER, operation_for


class TestOperationFor:
    """operation_for 함수 테스트"""

    @pytest.mark.parametrize(
        "method,path,expected",
        [
            ("POST", "/api/v1/collect", "collect_daily_digest"),
            ("post", "/api/v1/collect/", "collect_daily_digest"),
            ("POST", "/api/v1/documents/generate", "generate_document"),
            ("GET", "/api/v1/collect", None),
            ("GET", "/api/v1/digests", None),
        ],
    )
    def test_long_running_routes_are_named(self, method, path, expected):
        assert operation_for(method, path) == expected


class TestRequestId:
    """X-Request-ID 처리 테스트"""

    @pytest.mark.asyncio
    async def test_generated_request_id_is_returned(self, async_client, user_headers):
        response = await async_client.get("/api/v1/digests", headers=user_headers)

        assert response.status_code == 200
        assert len(response.headers[REQUEST_ID_HEADER]) == 8

    @pytest.mark.asyncio
    async def test_incoming_request_id_is_kept(self, async_client, user_headers):
        headers = {**user_headers, REQUEST_ID_HEADER: "front-1234"}

        response = await async_client.get("/api/v1/digests", headers=headers)

        assert response.headers[REQUEST_ID_HEADER] == "front-1234"

    @pytest.mark.asyncio
    async def test_health_check_is_not_tracked(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert REQUEST_ID_HEADER not in response.headers

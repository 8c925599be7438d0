"""
요청 단위 로그 컨텍스트 미들웨어

수집(/collect)과 職務経歴書 생성(/documents/generate)은 GitHub, LLM 호출로
수 초 이상 걸리므로 operation 이름을 붙여 다른 CRUD 요청과 구분한다.
request_id는 응답 헤더로 돌려주어 프론트 오류 리포트와 로그를 잇는다.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from career_digest.core.context import clear_context, set_request_id, set_user_id
from career_digest.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-Id"

SKIP_PATHS = {"/health", "/docs", "/openapi.json", "/redoc", "/favicon.ico"}

# 외부 호출을 동반하는 경로 -> 로그용 operation 이름
LONG_RUNNING_OPERATIONS = {
    ("POST", "/api/v1/collect"): "collect_daily_digest",
    ("POST", "/api/v1/documents/generate"): "generate_document",
}


def operation_for(method: str, path: str) -> str | None:
    return LONG_RUNNING_OPERATIONS.get((method.upper(), path.rstrip("/") or "/"))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """request_id, user_id 컨텍스트 설정과 요청 단위 로깅"""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        set_user_id(request.headers.get(USER_ID_HEADER))

        fields = {"method": request.method, "path": request.url.path}
        operation = operation_for(request.method, request.url.path)
        if operation:
            fields["operation"] = operation

        start_time = time.perf_counter()
        logger.info("요청 시작", client_ip=self._get_client_ip(request), **fields)

        try:
            response = await call_next(request)
            logger.info(
                "요청 완료",
                status_code=response.status_code,
                duration_ms=self._elapsed_ms(start_time),
                **fields,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            logger.error(
                "요청 실패",
                error=type(e).__name__,
                duration_ms=self._elapsed_ms(start_time),
                **fields,
            )
            raise
        finally:
            clear_context()

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.perf_counter() - start_time) * 1000, 2)

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from career_digest.core.config import settings
from career_digest.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    GITHUB_NOT_CONNECTED = "GITHUB_NOT_CONNECTED"
    SECRET_DECRYPT_ERROR = "SECRET_DECRYPT_ERROR"

    LLM_API_ERROR = "LLM_API_ERROR"
    GENERATE_PARSE_ERROR = "GENERATE_PARSE_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class UnauthorizedError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=401,
            error_code=ErrorCode.UNAUTHORIZED,
            message="認証が必要です",
            detail=detail,
        )


class NotFoundError(CustomException):
    """존재하지 않거나 요청자 소유가 아닌 리소스"""

    def __init__(self, message: str = "見つかりません", detail: str | None = None):
        super().__init__(
            status_code=404,
            error_code=ErrorCode.NOT_FOUND,
            message=message,
            detail=detail,
        )


class ConflictError(CustomException):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=409,
            error_code=ErrorCode.CONFLICT,
            message=message,
            detail=detail,
        )


class ValidationError(CustomException):
    def __init__(self, message: str = "不正なリクエストです", detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message=message,
            detail=detail,
        )


class GitHubAPIError(CustomException):
    def __init__(self, message: str = "GitHub APIの呼び出しに失敗しました", detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_API_ERROR,
            message=message,
            detail=detail,
        )


class GitHubNotConnectedError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=404,
            error_code=ErrorCode.GITHUB_NOT_CONNECTED,
            message="GitHubが未設定です",
            detail=detail,
        )


class SecretDecryptError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.SECRET_DECRYPT_ERROR,
            message="接続設定の復号に失敗しました",
            detail=detail,
        )


class LLMError(CustomException):
    def __init__(self, message: str = "AI呼び出しに失敗しました", detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.LLM_API_ERROR,
            message=message,
            detail=detail,
        )


class GenerationParseError(CustomException):
    """LLM 응답이 JSON 스키마를 만족하지 않음"""

    def __init__(self, message: str = "AI応答の解析に失敗しました", detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GENERATE_PARSE_ERROR,
            message=message,
            detail=detail,
        )


def _error_content(error_code: ErrorCode | str, message: str, detail: str | None) -> dict:
    content = {
        "error_code": error_code,
        "message": message,
    }
    if detail and not settings.is_production:
        content["detail"] = detail
    return content


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(exc.error_code, exc.message, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        return JSONResponse(
            status_code=400,
            content=_error_content(
                ErrorCode.INVALID_INPUT,
                "不正なリクエストです",
                f"invalid fields: {', '.join(fields)}",
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("처리되지 않은 예외 path=%s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_content(ErrorCode.INTERNAL_ERROR, "サーバーエラーが発生しました", None),
        )

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "openai", "vllm" 또는 "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM 설정 - 셀프 호스팅용
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 120.0

    llm_temperature: float = 0.2

    # DB
    database_url: str = "sqlite:///./career_digest.db"
    database_echo: bool = False

    # 서비스 연결 설정 암호화 키 (AES-256, hex 64자)
    encryption_key: str = ""

    # GitHub
    github_timeout: float = 60.0
    github_search_per_page: int = 100
    github_search_max_pages: int = 3

    # 프롬프트 설정
    activity_body_max_length: int = 300

    # 요청 제한
    collect_rate_limit: str = "10/minute"
    generate_rate_limit: str = "5/minute"
    rate_limit_enabled: bool = True

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if not self.encryption_key:
            errors.append("ENCRYPTION_KEY")
        if self.database_url.startswith("sqlite"):
            errors.append("DATABASE_URL")
        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if self.llm_provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        if self.llm_provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        return errors

    @model_validator(mode="after")
    def validate_encryption_key(self):
        """암호화 키 형식 검증"""
        if self.encryption_key:
            try:
                key = bytes.fromhex(self.encryption_key)
            except ValueError as e:
                raise ValueError("ENCRYPTION_KEY는 hex 문자열이어야 합니다") from e
            if len(key) != 32:
                raise ValueError("ENCRYPTION_KEY는 32바이트(hex 64자)여야 합니다")
        return self


settings = Settings()

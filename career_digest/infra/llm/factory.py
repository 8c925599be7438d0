from typing import Literal

from career_digest.core.config import settings
from career_digest.core.logging import get_logger
from career_digest.infra.llm.base import BaseLLMClient
from career_digest.infra.llm.gemini_client import GeminiClient
from career_digest.infra.llm.openai_client import OpenAIClient
from career_digest.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

LLMProvider = Literal["openai", "vllm", "gemini"]

_PROVIDERS: dict[str, type[BaseLLMClient]] = {
    "openai": OpenAIClient,
    "vllm": VLLMClient,
    "gemini": GeminiClient,
}

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """요약/이력서 생성용 LLM 클라이언트 반환"""
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    provider = settings.llm_provider
    client_cls = _PROVIDERS.get(provider)
    if client_cls is None:
        raise ValueError(f"지원하지 않는 LLM 프로바이더: {provider}")

    _generator_client = client_cls()
    logger.info(
        "LLM 클라이언트 초기화 provider=%s model=%s",
        provider,
        _generator_client.get_model_name(),
    )
    return _generator_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _generator_client
    _generator_client = None

import os
import re
from typing import TypeVar

from langchain_core.messages import HumanMessage
from langfuse.langchain import CallbackHandler
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from career_digest.core.config import settings
from career_digest.core.exceptions import GenerationParseError, LLMError
from career_digest.core.logging import get_logger
from career_digest.domain.digest.prompts import NO_ACTIVITY_SUMMARY, build_daily_summary_prompt
from career_digest.domain.digest.schemas import DailySummaryResult, RawActivity
from career_digest.domain.document.prompts import build_resume_prompt
from career_digest.domain.document.schemas import ResumePromptInput, ShokumukeirekishoContent
from career_digest.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환, 키 미설정 시 None"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def strip_code_fence(text: str) -> str:
    """```json ... ``` 감싸기 제거"""
    match = CODE_FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _message_text(content: str | list) -> str:
    """AIMessage.content를 문자열로 변환 (프로바이더별 content 블록 대응)"""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def parse_model_output(text: str, schema: type[T]) -> T:
    """LLM 원문을 스키마로 엄격 검증

    Raises:
        GenerationParseError: JSON이 아니거나 스키마 불일치
    """
    json_str = strip_code_fence(text)
    try:
        return schema.model_validate_json(json_str)
    except PydanticValidationError as e:
        logger.warning(
            "LLM 응답 파싱 실패 schema=%s errors=%d", schema.__name__, e.error_count()
        )
        raise GenerationParseError(detail=f"{schema.__name__}: {e.error_count()} errors") from e


async def _invoke_text(prompt: str, session_id: str | None, tags: list[str]) -> str:
    """단일 프롬프트로 텍스트 생성 호출"""
    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": tags,
        },
    }

    llm = get_generator_client().get_chat_model()
    try:
        result = await llm.ainvoke([HumanMessage(content=prompt)], config=config)
    except Exception as e:
        logger.error("LLM 호출 실패 tags=%s error=%s", tags, type(e).__name__)
        raise LLMError(detail=type(e).__name__) from e

    return _message_text(result.content)


async def summarize_activities(
    activities: list[RawActivity],
    manual_notes: str | None = None,
    session_id: str | None = None,
) -> DailySummaryResult:
    """하루 활동을 요약하고 실적 후보 추출

    활동과 메모가 모두 없으면 LLM을 호출하지 않는다.
    """
    if not activities and not manual_notes:
        logger.info("활동 없음, 요약 생략")
        return DailySummaryResult(daily_summary=NO_ACTIVITY_SUMMARY, achievement_candidates=[])

    logger.debug(
        "일일 요약 요청 activities=%d manual_notes=%s", len(activities), bool(manual_notes)
    )
    prompt = build_daily_summary_prompt(activities, manual_notes)
    text = await _invoke_text(prompt, session_id, ["digest", "summarize"])
    result = parse_model_output(text, DailySummaryResult)

    logger.info("일일 요약 완료 candidates=%d", len(result.achievement_candidates))
    return result


async def generate_resume_document(
    prompt_input: ResumePromptInput,
    session_id: str | None = None,
) -> ShokumukeirekishoContent:
    """職務経歴書 본문 생성"""
    logger.debug(
        "이력서 생성 요청 format=%s achievements=%d",
        prompt_input.format.value,
        len(prompt_input.achievements),
    )
    prompt = build_resume_prompt(prompt_input)
    text = await _invoke_text(prompt, session_id, ["document", "generate", prompt_input.format.value])
    content = parse_model_output(text, ShokumukeirekishoContent)

    logger.info("이력서 생성 완료 companies=%d", len(content.work_histories))
    return content

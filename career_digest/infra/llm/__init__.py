from career_digest.infra.llm.base import BaseLLMClient
from career_digest.infra.llm.client import generate_resume_document, summarize_activities
from career_digest.infra.llm.factory import get_generator_client, reset_clients
from career_digest.infra.llm.gemini_client import GeminiClient
from career_digest.infra.llm.openai_client import OpenAIClient
from career_digest.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_generator_client",
    "reset_clients",
    "summarize_activities",
    "generate_resume_document",
]

from slowapi import Limiter
from slowapi.util import get_remote_address

from career_digest.core.config import settings

# LLM 호출 엔드포인트 보호용
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

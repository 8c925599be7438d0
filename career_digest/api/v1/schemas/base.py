import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict

YEAR_MONTH_PATTERN = r"^\d{4}-\d{2}$"
PERIOD_PATTERN = r"^\d{4}-\d{2}(-\d{2})?$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def to_camel(name: str) -> str:
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


class CamelModel(BaseModel):
    """camelCase 별칭 입출력 공통 베이스"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value):
    """폼에서 넘어온 빈 문자열을 미입력으로 취급"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def ensure_calendar_date(value: str | None) -> str | None:
    """YYYY-MM-DD 형태이면서 실제 존재하는 날짜인지 확인 (2025-02-30 거부)"""
    if value is None:
        return value
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"存在しない日付です: {value}") from e
    return value

from typing import Annotated

from fastapi import Depends, Header
from sqlmodel import Session

from career_digest.core.exceptions import UnauthorizedError
from career_digest.infra.db.session import get_session


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str:
    """인증 프록시가 주입한 사용자 식별자, 없으면 401"""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise UnauthorizedError()
    return user_id


SessionDep = Annotated[Session, Depends(get_session)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]

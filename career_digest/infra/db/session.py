"""
DB 엔진 / 세션 관리
"""

from collections.abc import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from career_digest.core.config import settings
from career_digest.core.logging import get_logger

# 테이블 메타데이터 등록
from career_digest.infra.db import models  # noqa: F401

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """DB 엔진 생성

    SQLite 메모리 DB는 커넥션 간 공유를 위해 StaticPool 사용
    """
    database_url = database_url or settings.database_url
    echo = settings.database_echo if echo is None else echo

    kwargs: dict = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


engine = build_engine()


def create_tables(target_engine: Engine | None = None) -> None:
    """모든 테이블 생성 (마이그레이션 도구 도입 전까지 사용)"""
    target_engine = target_engine or engine
    SQLModel.metadata.create_all(target_engine)
    logger.info("테이블 생성 완료 dialect=%s", target_engine.dialect.name)


def get_session() -> Generator[Session, None, None]:
    """요청 단위 DB 세션"""
    with Session(engine) as session:
        yield session

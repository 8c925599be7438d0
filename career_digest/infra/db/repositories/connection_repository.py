"""
외부 서비스 연결 Repository
"""

from typing import Any

from sqlmodel import Session, select

from career_digest.infra.db.models import ServiceConnection


class ConnectionRepository:
    """service_connections 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str, service: str) -> ServiceConnection | None:
        statement = select(ServiceConnection).where(
            ServiceConnection.user_id == user_id, ServiceConnection.service == service
        )
        return self.session.exec(statement).first()

    def save(self, connection: ServiceConnection) -> ServiceConnection:
        self.session.add(connection)
        self.session.commit()
        self.session.refresh(connection)
        return connection

    def update(self, connection: ServiceConnection, changes: dict[str, Any]) -> ServiceConnection:
        for key, value in changes.items():
            setattr(connection, key, value)
        return self.save(connection)

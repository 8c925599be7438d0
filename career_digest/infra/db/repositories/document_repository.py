"""
생성 문서 Repository
"""

import uuid
from typing import Any

from sqlmodel import Session, col, select

from career_digest.infra.db.models import GeneratedDocument


class DocumentRepository:
    """generated_documents 접근 객체"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, document: GeneratedDocument) -> GeneratedDocument:
        self.session.add(document)
        self.session.commit()
        self.session.refresh(document)
        return document

    def get_for_user(self, document_id: uuid.UUID, user_id: str) -> GeneratedDocument | None:
        statement = select(GeneratedDocument).where(
            GeneratedDocument.id == document_id, GeneratedDocument.user_id == user_id
        )
        return self.session.exec(statement).first()

    def list_for_user(self, user_id: str) -> list[GeneratedDocument]:
        statement = (
            select(GeneratedDocument)
            .where(GeneratedDocument.user_id == user_id)
            .order_by(col(GeneratedDocument.created_at).desc())
        )
        return list(self.session.exec(statement).all())

    def update(self, document: GeneratedDocument, changes: dict[str, Any]) -> GeneratedDocument:
        for key, value in changes.items():
            setattr(document, key, value)
        self.session.add(document)
        self.session.commit()
        self.session.refresh(document)
        return document

    def delete(self, document: GeneratedDocument) -> None:
        self.session.delete(document)
        self.session.commit()

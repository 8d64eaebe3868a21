"""
Primary document store (SQLAlchemy).

The vector index is a denormalized mirror of this table; the store owns
document ids and content.
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ragsync.config.settings import settings
from ragsync.errors import DocumentNotFoundError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs = {"connect_args": {"check_same_thread": False}}  # Required for SQLite
    if make_url(url).database in (None, "", ":memory:"):
        # One shared connection so every session sees the same in-memory db
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(32), primary_key=True, default=_new_id)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<Document id={self.id}>"


def get_db():
    """FastAPI dependency that yields a DB session and closes it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables. Call once at startup."""
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        directory = os.path.dirname(url.database)
        if directory:
            os.makedirs(directory, exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Document store ready: {url.render_as_string(hide_password=True)}")


def find_all(db: Session) -> List[Document]:
    """Every document in the store, oldest first"""
    return db.query(Document).order_by(Document.created_at, Document.id).all()


def get_document(db: Session, document_id: str) -> Document:
    document = db.get(Document, document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


def create_document(db: Session, content: str) -> Document:
    document = Document(content=content)
    db.add(document)
    db.commit()
    db.refresh(document)
    logger.debug(f"Created document {document.id}")
    return document


def update_document(db: Session, document_id: str, content: str) -> Document:
    document = get_document(db, document_id)
    document.content = content
    db.commit()
    db.refresh(document)
    logger.debug(f"Updated document {document.id}")
    return document


def delete_document(db: Session, document_id: str) -> None:
    document = get_document(db, document_id)
    db.delete(document)
    db.commit()
    logger.debug(f"Deleted document {document_id}")

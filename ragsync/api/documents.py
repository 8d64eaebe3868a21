"""
Document CRUD endpoints.

Each change is written to the document store first and then mirrored into
the vector index. Writes are refused up front while the index is not
initialized, so nothing reaches the store that the index cannot follow.
"""

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session
from typing import List
import logging

from ragsync.core import index
from ragsync.db import documents as document_store
from ragsync.db.documents import get_db
from ragsync.errors import DocumentNotFoundError, IndexNotInitializedError, LLMServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


class DocumentIn(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("content must not be blank")
        return value


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    created_at: datetime
    updated_at: datetime


def _not_found(e: DocumentNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _require_index(operation: str):
    try:
        index.get_collection(operation)
    except IndexNotInitializedError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )


async def _mirror(operation, *args):
    try:
        await operation(*args)
    except (IndexNotInitializedError, LLMServiceError) as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to mirror document change into the index: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update vector index: {str(e)}"
        )


@router.get("", response_model=List[DocumentOut])
def list_documents(db: Session = Depends(get_db)):
    return document_store.find_all(db)


@router.get("/{document_id}", response_model=DocumentOut)
def read_document(document_id: str, db: Session = Depends(get_db)):
    try:
        return document_store.get_document(db, document_id)
    except DocumentNotFoundError as e:
        raise _not_found(e)


@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def create_document(body: DocumentIn, db: Session = Depends(get_db)):
    _require_index("add")
    document = document_store.create_document(db, body.content)
    await _mirror(index.add_document, document)
    return document


@router.put("/{document_id}", response_model=DocumentOut)
async def update_document(document_id: str, body: DocumentIn, db: Session = Depends(get_db)):
    _require_index("update")
    try:
        document = document_store.update_document(db, document_id, body.content)
    except DocumentNotFoundError as e:
        raise _not_found(e)
    await _mirror(index.update_document, document)
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: str, db: Session = Depends(get_db)):
    _require_index("delete")
    try:
        document_store.delete_document(db, document_id)
    except DocumentNotFoundError as e:
        raise _not_found(e)
    await _mirror(index.delete_document, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

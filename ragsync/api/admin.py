"""
Admin API endpoints for management operations.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
import logging

from ragsync.config.settings import settings
from ragsync.core import index
from ragsync.db.documents import get_db
from ragsync.errors import IndexNotInitializedError, LLMServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


class SyncResponse(BaseModel):
    """Response for a full index re-sync"""
    status: str
    documents: int


@router.post("/sync", response_model=SyncResponse)
async def sync_index(db: Session = Depends(get_db)):
    """
    Rebuild the vector index from the document store.
    Initializes the index first if startup did not.
    """
    try:
        if index.is_initialized():
            count = await index.sync_dbs(db)
        else:
            count = await index.init_collection(db)
        return SyncResponse(status="ok", documents=count)
    except (IndexNotInitializedError, LLMServiceError) as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to sync index: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to sync index: {str(e)}"
        )


@router.get("/stats")
async def get_stats():
    """
    Get service statistics.
    """
    vector_db = {
        "type": "qdrant",
        "url": settings.QDRANT_URL,
        "collection": settings.QDRANT_COLLECTION_NAME,
        "initialized": index.is_initialized(),
        "documents_count": None,
        "status": None,
    }
    try:
        if index.is_initialized():
            collection = index.get_collection("stats")
            vector_db["documents_count"] = collection.count()
            vector_db["status"] = collection.get_collection_info().get("status", "unknown")
    except Exception as e:
        logger.error(f"Failed to get stats: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get stats: {str(e)}"
        )

    return {
        "service": {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION
        },
        "vector_db": vector_db,
        "llm": {
            "model": settings.OPENAI_MODEL,
            "embedding_model": settings.OPENAI_EMBEDDING_MODEL
        }
    }

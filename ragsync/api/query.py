"""
RAG query endpoint.
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from ragsync.core.rag_pipeline import retrieval_augmented_generation
from ragsync.errors import IndexNotInitializedError, LLMServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    top_k: Optional[int] = Field(None, ge=1)


class QueryResponse(BaseModel):
    query: str
    documents: List[str]
    answer: Optional[str] = None


@router.post("/query", response_model=QueryResponse)
async def query_api(req: QueryRequest):
    try:
        return await retrieval_augmented_generation(req.query, req.top_k)
    except (IndexNotInitializedError, LLMServiceError) as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"RAG query failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"RAG query failed: {str(e)}"
        )

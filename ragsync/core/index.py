"""
Keeps the vector index in step with the document store.

The index handle is assigned once by init_collection(); every other
operation here requires it.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ragsync.config.settings import settings
from ragsync.config.constants import embedding_dimension
from ragsync.core.embedder import get_embedding, get_embeddings
from ragsync.db import documents as document_store
from ragsync.db.documents import Document
from ragsync.db.vector_store import VectorStore, get_vector_store
from ragsync.errors import IndexNotInitializedError

logger = logging.getLogger(__name__)

_collection: Optional[VectorStore] = None


def get_collection(operation: str = "access") -> VectorStore:
    if _collection is None:
        raise IndexNotInitializedError(operation)
    return _collection


def is_initialized() -> bool:
    return _collection is not None


def reset_collection():
    """Drop the index handle (the collection itself is left as is)."""
    global _collection
    _collection = None


async def sync_dbs(db: Optional[Session] = None) -> int:
    """
    Rebuild the index from the document store.

    Clears every point, then embeds and adds the whole corpus. Returns the
    number of documents in the index afterwards. If embedding fails the
    index is left empty and the error propagates; the next sync rebuilds it.
    """
    collection = get_collection("sync")

    collection.delete(collection.get_all())

    owns_session = db is None
    if owns_session:
        db = document_store.SessionLocal()
    try:
        all_docs = document_store.find_all(db)
    finally:
        if owns_session:
            db.close()

    ids = [doc.id for doc in all_docs]
    contents = [doc.content for doc in all_docs]
    embeddings = await get_embeddings(contents)

    collection.add(ids, embeddings, contents)

    count = collection.count()
    logger.info(f"number of documents {count}")
    return count


async def init_collection(
    db: Optional[Session] = None,
    vector_store: Optional[VectorStore] = None
) -> int:
    """
    Get or create the collection, keep its handle and sync it with the store.
    """
    global _collection

    store = vector_store or get_vector_store()
    store.ensure_collection(embedding_dimension(settings.OPENAI_EMBEDDING_MODEL))
    _collection = store

    count = await sync_dbs(db)
    logger.info(f"finished initializing collection '{store.collection_name}'")
    return count


async def add_document(document: Document) -> None:
    """Embed one stored document and add it to the index."""
    collection = get_collection("add")
    embedding = await get_embedding(document.content)
    collection.add([str(document.id)], [embedding], [document.content])


async def update_document(document: Document) -> None:
    """Replace the indexed copy of a document with its current content."""
    collection = get_collection("update")
    collection.delete([str(document.id)])
    await add_document(document)


async def delete_document(document_id: str) -> None:
    """Remove a document from the index."""
    get_collection("delete").delete([str(document_id)])

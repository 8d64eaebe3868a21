"""
Vector index backed by Qdrant.

Holds a denormalized copy of each store document: one point per document,
with the document id and content in the payload.
"""

from typing import List, Dict, Any, Optional
import uuid
import logging

from ragsync.config.settings import settings
from ragsync.config.constants import PAYLOAD_DOCUMENT_ID, PAYLOAD_TEXT

logger = logging.getLogger(__name__)

# Namespace for point ids of documents whose id is not already a UUID
POINT_ID_NAMESPACE = uuid.UUID("6f1c1c4e-3b9a-4d8e-9a53-0c5d2f7b8e21")

SCROLL_PAGE_SIZE = 256


def point_id(document_id: str) -> str:
    """Qdrant point id for a store document id"""
    try:
        return str(uuid.UUID(document_id))
    except ValueError:
        return str(uuid.uuid5(POINT_ID_NAMESPACE, document_id))


class VectorStore:
    """
    Vector store wrapper for Qdrant.
    Provides the get-all / delete / add / query calls the sync layer needs.
    """
    
    def __init__(
        self, 
        url: Optional[str] = None, 
        api_key: Optional[str] = None,
        collection_name: Optional[str] = None
    ):
        """
        Initialize vector store.
        
        Args:
            url: Vector database URL, or ":memory:" for an in-process index
            api_key: API key (defaults to QDRANT_API_KEY setting)
            collection_name: Collection name (defaults to QDRANT_COLLECTION_NAME setting)
        """
        from qdrant_client import QdrantClient
        
        self.url = url or settings.QDRANT_URL
        self.api_key = api_key or settings.QDRANT_API_KEY
        self.collection_name = collection_name or settings.QDRANT_COLLECTION_NAME
        
        if self.url == ":memory:":
            self.client = QdrantClient(location=":memory:")
        else:
            self.client = QdrantClient(
                url=self.url,
                api_key=self.api_key,
                timeout=60  # 60 second timeout
            )
        
        logger.info(f"Initialized VectorStore: url={self.url}, collection={self.collection_name}")

    def ensure_collection(self, vector_size: int = 1024):
        """
        Ensure collection exists, create if not.
        
        Args:
            vector_size: Dimension of vectors (1024 for gte-large)
        """
        from qdrant_client.http import models
        
        if not self.client.collection_exists(self.collection_name):
            logger.info(f"Creating collection: {self.collection_name} with vector_size={vector_size}")
            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(
                    size=vector_size, 
                    distance=models.Distance.COSINE
                ),
            )
        else:
            logger.info(f"Collection {self.collection_name} already exists")

    def get_all(self) -> List[str]:
        """
        Document ids of every point in the collection.
        """
        document_ids = []
        offset = None
        while True:
            points, offset = self.client.scroll(
                collection_name=self.collection_name,
                limit=SCROLL_PAGE_SIZE,
                offset=offset,
                with_payload=[PAYLOAD_DOCUMENT_ID],
                with_vectors=False
            )
            document_ids.extend(point.payload[PAYLOAD_DOCUMENT_ID] for point in points)
            if offset is None:
                break
        return document_ids

    def delete(self, ids: List[str]):
        """
        Delete the points of the given document ids.
        """
        from qdrant_client.http import models
        
        if not ids:
            return
        
        self.client.delete(
            collection_name=self.collection_name,
            points_selector=models.PointIdsList(points=[point_id(i) for i in ids]),
            wait=True
        )
        logger.debug(f"Deleted {len(ids)} vectors from {self.collection_name}")

    def add(
        self, 
        ids: List[str], 
        embeddings: List[List[float]], 
        documents: List[str]
    ):
        """
        Write one point per document.
        
        Args:
            ids: Store document ids
            embeddings: Embedding vector per document
            documents: Document contents
        """
        from qdrant_client.http import models
        
        if not (len(ids) == len(embeddings) == len(documents)):
            raise ValueError("ids, embeddings and documents must have same length")
        
        points = [
            models.PointStruct(
                id=point_id(document_id),
                vector=embedding,
                payload={PAYLOAD_DOCUMENT_ID: document_id, PAYLOAD_TEXT: document}
            )
            for document_id, embedding, document in zip(ids, embeddings, documents)
        ]
        if not points:
            return
        
        self.client.upsert(
            collection_name=self.collection_name,
            points=points,
            wait=True  # Wait for operation to complete
        )
        
        logger.debug(f"Added {len(points)} vectors to {self.collection_name}")

    def query(self, embedding: List[float], k: int) -> List[str]:
        """
        Contents of the k documents nearest to the embedding, closest first.
        """
        if k <= 0:
            return []
        
        response = self.client.query_points(
            collection_name=self.collection_name,
            query=embedding,
            limit=k,
            with_payload=True
        )
        return [point.payload[PAYLOAD_TEXT] for point in response.points]

    def count(self) -> int:
        """Exact number of points in the collection"""
        return self.client.count(collection_name=self.collection_name, exact=True).count

    def get_collection_info(self) -> Dict[str, Any]:
        """
        Get collection information.
        
        Returns:
            Dict with collection stats, empty if the collection is unavailable
        """
        try:
            info = self.client.get_collection(self.collection_name)
            return {
                "name": self.collection_name,
                "points_count": info.points_count,
                "status": info.status.value if info.status else "unknown",
            }
        except Exception as e:
            logger.error(f"Failed to get collection info: {e}")
            return {}

    def health_check(self) -> bool:
        """
        Check if the vector store is healthy.
        
        Returns:
            True if healthy, False otherwise
        """
        try:
            self.client.get_collections()
            return True
        except Exception as e:
            logger.error(f"Vector store health check failed: {e}")
            return False


# Global singleton for convenience
_vector_store: Optional[VectorStore] = None


def get_vector_store() -> VectorStore:
    """Get or create the global vector store instance"""
    global _vector_store
    if _vector_store is None:
        _vector_store = VectorStore()
    return _vector_store

"""
Exceptions raised by the sync and retrieval layer.

Errors coming from the embedding provider, the vector database or the
document store are not wrapped; they propagate to the caller unchanged.
"""


class RAGSyncError(Exception):
    """Base class for ragsync errors"""
    pass


class LLMServiceError(RAGSyncError):
    """The LLM provider is not usable (missing key, empty input)"""
    pass


class IndexNotInitializedError(RAGSyncError):
    """An index operation ran before init_collection()"""

    def __init__(self, operation: str):
        super().__init__(f"Vector index not initialized; cannot run '{operation}'")
        self.operation = operation


class DocumentNotFoundError(RAGSyncError):
    """No document with the given id in the store"""

    def __init__(self, document_id: str):
        super().__init__(f"Document '{document_id}' not found")
        self.document_id = document_id

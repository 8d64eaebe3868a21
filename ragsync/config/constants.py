"""
Application constants.
"""

from ragsync.config.settings import settings

# RAG Configuration
DEFAULT_TOP_K = settings.RAG_TOP_K

# Embedding dimensions (varies by model)
EMBEDDING_DIMENSIONS = {
    "thenlper/gte-large": 1024,
    "thenlper/gte-base": 768,
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    "bge-large-en": 1024,
    "bge-base-en": 768,
    "bge-small-en": 384,
}
DEFAULT_EMBEDDING_DIMENSION = 1024

# Payload keys stored alongside each vector
PAYLOAD_DOCUMENT_ID = "document_id"
PAYLOAD_TEXT = "text"

# System prompt wrapped around retrieved context
SYSTEM_PROMPT_TEMPLATE = (
    "Your role is to answer questions for a user. "
    "You are given the following context to help you answer questions: \n"
    "{context}. \n"
    "Please do not mention that you were given any context in your response."
)


def embedding_dimension(model: str) -> int:
    """Vector size for a known embedding model"""
    return EMBEDDING_DIMENSIONS.get(model, DEFAULT_EMBEDDING_DIMENSION)

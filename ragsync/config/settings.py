"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings with defaults"""
    
    # Application
    APP_NAME: str = "RAG Sync"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Document store
    DATABASE_URL: str = "sqlite:///./data/documents.db"
    
    # Vector Database - Qdrant (":memory:" runs an in-process index)
    QDRANT_URL: str = "http://localhost:6333"
    QDRANT_API_KEY: Optional[str] = None
    QDRANT_COLLECTION_NAME: str = "catbook-collection"
    
    # OpenAI-compatible provider (Anyscale by default)
    OPENAI_API_KEY: str = ""
    OPENAI_API_BASE: Optional[str] = "https://api.endpoints.anyscale.com/v1"
    OPENAI_MODEL: str = "meta-llama/Llama-2-13b-chat-hf"
    OPENAI_EMBEDDING_MODEL: str = "thenlper/gte-large"
    OPENAI_TEMPERATURE: float = 0.7
    
    # RAG Configuration
    RAG_TOP_K: int = 2
    SYNC_ON_STARTUP: bool = True
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()

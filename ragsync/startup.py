"""
Application startup logic.
Creates the document tables and builds the vector index from them.
"""

import logging
from ragsync.config.settings import settings
from ragsync.core.index import init_collection, reset_collection
from ragsync.db.documents import init_db

logger = logging.getLogger(__name__)

# Global startup state
_startup_complete = False


def is_startup_complete() -> bool:
    """Check if startup has completed"""
    return _startup_complete


async def startup_event():
    """
    Main startup event handler.
    Called when the FastAPI application starts.
    """
    global _startup_complete
    
    logger.info("Starting RAG Sync...")
    logger.info(f"Configuration: app_name={settings.APP_NAME}, version={settings.APP_VERSION}")
    
    try:
        init_db()
        
        if settings.OPENAI_API_KEY:
            logger.info(f"LLM configured: model={settings.OPENAI_MODEL}, embeddings={settings.OPENAI_EMBEDDING_MODEL}")
        else:
            logger.warning("OPENAI_API_KEY not set - embedding and chat calls will fail")
        
        if settings.SYNC_ON_STARTUP:
            logger.info(f"Syncing vector index at {settings.QDRANT_URL} with the document store")
            await init_collection()
        else:
            logger.info("SYNC_ON_STARTUP disabled; index stays uninitialized until POST /admin/sync")
        
        _startup_complete = True
        logger.info("Startup complete: RAG Sync is ready to serve requests")
        
    except Exception as e:
        logger.error(f"Startup error: {e}", exc_info=True)
        raise


async def shutdown_event():
    """
    Shutdown event handler.
    Called when the FastAPI application stops.
    """
    global _startup_complete
    
    logger.info("Shutting down RAG Sync...")
    reset_collection()
    _startup_complete = False
    logger.info("Shutdown complete")

import argparse
import asyncio
import logging
import sys
import os

# Add the parent directory to sys.path to allow imports from ragsync
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ragsync.config.settings import settings
from ragsync.core.index import init_collection
from ragsync.db.documents import init_db
from ragsync.db.vector_store import VectorStore


async def main(collection_name=None):
    init_db()
    vector_store = VectorStore(collection_name=collection_name) if collection_name else None
    return await init_collection(vector_store=vector_store)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rebuild the vector index from the document store")
    parser.add_argument("--collection", default=None, help=f"Collection name (default: {settings.QDRANT_COLLECTION_NAME})")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    count = asyncio.run(main(args.collection))
    print(f"Synced {count} documents")

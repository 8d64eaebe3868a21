from typing import List
from ragsync.core.embedder import get_embedding
from ragsync.core.index import get_collection
from ragsync.config.constants import DEFAULT_TOP_K

async def retrieve_context(query: str, k: int = DEFAULT_TOP_K) -> List[str]:
    collection = get_collection("query")
    query_embedding = await get_embedding(query)
    return collection.query(query_embedding, k)

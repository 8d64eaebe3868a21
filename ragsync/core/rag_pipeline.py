from typing import Optional
from ragsync.core.retriever import retrieve_context
from ragsync.core.generator import generate_answer
from ragsync.config.constants import DEFAULT_TOP_K

async def retrieval_augmented_generation(query: str, k: Optional[int] = None):
    docs = await retrieve_context(query, DEFAULT_TOP_K if k is None else k)
    answer = await generate_answer(query, docs)
    return {
        "query": query,
        "documents": docs,
        "answer": answer
    }

from typing import List
from ragsync.services.llm_service import llm_service

async def generate_answer(query: str, context_docs: List[str]) -> str:
    context_text = "\n\n".join(context_docs)
    return await llm_service.chat_completion(query, context_text)

"""
LLM Service for interacting with OpenAI-compatible APIs.
Handles embeddings generation and chat completions.

Provider errors are not retried; they propagate to the caller.
"""

import logging
import asyncio
from typing import List
from openai import AsyncOpenAI
from ragsync.config.settings import settings
from ragsync.config.constants import SYSTEM_PROMPT_TEMPLATE
from ragsync.errors import LLMServiceError

logger = logging.getLogger(__name__)


class LLMService:
    """
    Service for embedding and chat-completion calls.
    """
    
    def __init__(self):
        """Initialize the LLM service"""
        self.api_key = settings.OPENAI_API_KEY
        self.model = settings.OPENAI_MODEL
        self.embedding_model = settings.OPENAI_EMBEDDING_MODEL
        self.temperature = settings.OPENAI_TEMPERATURE
        
        # Initialize client
        client_kwargs = {"api_key": self.api_key}
        if settings.OPENAI_API_BASE:
            client_kwargs["base_url"] = settings.OPENAI_API_BASE
            
        self.client = AsyncOpenAI(**client_kwargs)

    def _require_key(self):
        if not self.api_key:
            raise LLMServiceError("OPENAI_API_KEY not configured")

    async def generate_embedding(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.
        
        Args:
            text: Text to embed
            
        Returns:
            Embedding vector
        """
        self._require_key()
        
        if not text or not text.strip():
            raise LLMServiceError("Empty text provided for embedding")
        
        response = await self.client.embeddings.create(
            model=self.embedding_model,
            input=text
        )
        return response.data[0].embedding

    async def generate_embeddings(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for multiple texts.
        
        One request per text, all in flight at once; results keep the
        order of `texts`.
        """
        if not texts:
            return []
        
        logger.debug(f"Generating {len(texts)} embeddings")
        return list(await asyncio.gather(*(self.generate_embedding(t) for t in texts)))

    async def chat_completion(self, query: str, context: str) -> str:
        """
        Answer a query with the given context in the system prompt.
        
        Args:
            query: User question
            context: Retrieved document text
            
        Returns:
            Generated response text
        """
        self._require_key()
        
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT_TEMPLATE.format(context=context)},
                {"role": "user", "content": query}
            ],
            temperature=self.temperature
        )
        return response.choices[0].message.content

    async def health_check(self) -> bool:
        """
        Check if the LLM service is available.
        
        Returns:
            True if service is healthy
        """
        if not self.api_key:
            return False
        
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"LLM health check failed: {e}")
            return False


# Global singleton
llm_service = LLMService()
